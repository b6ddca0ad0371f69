"""ASGI entrypoint for the Learnify API."""

from learnify.api.app import create_app
from learnify.containers import build_container

app = create_app(build_container())
