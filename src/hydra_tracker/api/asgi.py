"""ASGI entrypoint for the hydration tracker API."""

from hydra_tracker.api.app import create_app
from hydra_tracker.containers import build_container

app = create_app(build_container())
