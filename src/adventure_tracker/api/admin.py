"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response, status

if TYPE_CHECKING:
    from adventure_tracker.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/export", dependencies=[Depends(require_admin)])
async def export_adventures(request: Request) -> Response:
    """Return every adventure as a JSON document."""
    container: AppContainer = request.app.state.container
    return Response(
        content=container.controller.export_bytes(),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="adventures.json"'},
    )


@router.post("/import", dependencies=[Depends(require_admin)])
async def import_adventures(request: Request) -> dict[str, object]:
    """Merge an exported JSON document into the adventure store."""
    container: AppContainer = request.app.state.container
    before = len(container.controller.adventures())
    data = await request.body()
    if not container.controller.import_bytes(data):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Import payload could not be decoded.",
        )
    after = len(container.controller.adventures())
    return {"status": "ok", "added": after - before}


@router.post("/reset", dependencies=[Depends(require_admin)])
async def reset_adventures(request: Request) -> dict[str, str]:
    """Delete every adventure and clear any pending prompt."""
    container: AppContainer = request.app.state.container
    container.controller.reset_all_data()
    return {"status": "ok"}
