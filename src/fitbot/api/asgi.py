"""ASGI entrypoint for the FitBot API."""

from fitbot.api.app import create_app
from fitbot.containers import build_container

app = create_app(build_container())
