"""ASGI entrypoint for the adventure tracker API."""

from adventure_tracker.api.app import create_app
from adventure_tracker.containers import build_container

app = create_app(build_container())
