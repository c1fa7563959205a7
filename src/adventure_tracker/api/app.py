"""FastAPI application factory."""

import asyncio
import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC
from typing import Literal
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status

from adventure_tracker.api.admin import router as admin_router
from adventure_tracker.api.models import CreateAdventurePayload, FixPayload
from adventure_tracker.api.serializers import (
    serialize_adventure,
    serialize_snapshot,
    serialize_statistics,
)
from adventure_tracker.app_logging import configure_logging
from adventure_tracker.containers import AppContainer
from adventure_tracker.domain.adventures import SUGGESTED_NAMES, LocationFix
from adventure_tracker.domain.geo import Coordinate


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        scheduler = app.state.container.tick_scheduler
        if scheduler is not None:
            scheduler.attach(asyncio.get_running_loop())
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/fixes")
    async def submit_fix(payload: FixPayload, request: Request) -> dict[str, object]:
        """Feed a location fix into adventure detection."""
        state_container: AppContainer = request.app.state.container
        controller = state_container.controller
        timestamp = payload.timestamp or controller.clock()
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        fix = LocationFix(
            coordinate=Coordinate(payload.latitude, payload.longitude),
            accuracy_m=payload.accuracy_m,
            timestamp=timestamp,
        )
        snapshot = controller.submit_fix(fix, forced=payload.forced)
        return serialize_snapshot(snapshot)

    @app.get("/status")
    async def dwell_status(request: Request) -> dict[str, object]:
        """Return the published dwell state."""
        state_container: AppContainer = request.app.state.container
        return serialize_snapshot(state_container.controller.snapshot)

    @app.post("/prompt/adventure", status_code=status.HTTP_201_CREATED)
    async def create_adventure(
        payload: CreateAdventurePayload, request: Request
    ) -> dict[str, object]:
        """Resolve the pending prompt by recording an adventure."""
        state_container: AppContainer = request.app.state.container
        attachments = _decode_attachments(payload.attachments)
        adventure = state_container.controller.create_adventure(
            payload.name, attachments, address=payload.address
        )
        if adventure is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="No adventure prompt is pending.",
            )
        return serialize_adventure(adventure)

    @app.post("/prompt/dismiss")
    async def dismiss_prompt(request: Request) -> dict[str, str]:
        """Resolve the pending prompt without recording anything."""
        state_container: AppContainer = request.app.state.container
        if not state_container.controller.dismiss_prompt():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="No adventure prompt is pending.",
            )
        return {"status": "dismissed"}

    @app.get("/adventures")
    async def list_adventures(
        request: Request, view: Literal["all", "recent", "month"] = "all"
    ) -> dict[str, object]:
        """Return adventures, newest first."""
        controller = request.app.state.container.controller
        if view == "recent":
            adventures = controller.recent_adventures()
        elif view == "month":
            adventures = controller.current_month_adventures()
        else:
            adventures = controller.sorted_adventures()
        return {"adventures": [serialize_adventure(item) for item in adventures]}

    @app.delete("/adventures/{adventure_id}")
    async def delete_adventure(adventure_id: UUID, request: Request) -> dict[str, bool]:
        """Delete an adventure; unknown ids are not an error."""
        controller = request.app.state.container.controller
        deleted = controller.delete_adventure(adventure_id)
        if deleted:
            logger.info("Adventure deleted", extra={"adventure_id": str(adventure_id)})
        return {"deleted": deleted}

    @app.get("/statistics")
    async def statistics(request: Request) -> dict[str, object]:
        """Return adventure counters."""
        controller = request.app.state.container.controller
        return serialize_statistics(controller.statistics())

    @app.get("/suggestions")
    async def name_suggestions() -> dict[str, list[str]]:
        """Return suggested adventure names."""
        return {"suggestions": list(SUGGESTED_NAMES)}

    return app


def _decode_attachments(encoded: list[str]) -> list[bytes]:
    """Decode base64 attachments, rejecting malformed input."""
    try:
        return [base64.b64decode(item, validate=True) for item in encoded]
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Attachments must be base64 encoded.",
        ) from exc
