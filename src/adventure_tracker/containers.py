"""Dependency container wiring for the application."""

import asyncio
from collections.abc import Awaitable, Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from supabase import create_client

from adventure_tracker.adapters.supabase_blob_store import SupabaseBlobStore
from adventure_tracker.config import Settings
from adventure_tracker.services.adventures import AdventureStore
from adventure_tracker.services.blob_store import BlobStore, InMemoryBlobStore
from adventure_tracker.services.lifecycle import AdventureLifecycleController
from adventure_tracker.services.ticker import AsyncioTickScheduler


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    adventure_store: AdventureStore
    controller: AdventureLifecycleController
    tick_scheduler: AsyncioTickScheduler | None
    close_resources: Callable[[], Awaitable[None]]


def build_blob_store(settings: Settings) -> BlobStore:
    """Create the blob store selected by settings."""
    if settings.storage_backend == "memory":
        return InMemoryBlobStore()
    if settings.storage_backend != "supabase":
        raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
    if not settings.supabase_url or not settings.supabase_service_key:
        raise ValueError(
            "Supabase storage requires SUPABASE_URL and SUPABASE_SERVICE_KEY"
        )
    client = create_client(settings.supabase_url, settings.supabase_service_key)
    return SupabaseBlobStore(client, table=settings.storage_table)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    detection = resolved_settings.detection_config()
    writer = ThreadPoolExecutor(max_workers=1, thread_name_prefix="adventure-writer")
    adventure_store = AdventureStore.open(
        build_blob_store(resolved_settings),
        storage_key=resolved_settings.storage_key,
        duplicate_window_seconds=detection.duplicate_window_seconds,
        duplicate_radius_m=detection.duplicate_radius_m,
        executor=writer,
    )
    tick_scheduler = AsyncioTickScheduler(detection.tick_interval_seconds)
    controller = AdventureLifecycleController(
        store=adventure_store,
        scheduler=tick_scheduler,
        config=detection,
        timezone=resolved_settings.tzinfo(),
    )
    tick_scheduler.bind(controller.tick)

    async def close_resources() -> None:
        await tick_scheduler.close()
        await asyncio.to_thread(writer.shutdown, wait=True)

    return AppContainer(
        settings=resolved_settings,
        adventure_store=adventure_store,
        controller=controller,
        tick_scheduler=tick_scheduler,
        close_resources=close_resources,
    )
