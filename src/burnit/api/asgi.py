"""ASGI entrypoint for the food log API."""

from burnit.api.app import create_app
from burnit.containers import build_container

app = create_app(build_container())
