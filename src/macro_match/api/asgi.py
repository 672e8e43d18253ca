"""ASGI entrypoint for the macro match API."""

from macro_match.api.app import create_app
from macro_match.containers import build_container

app = create_app(build_container())
