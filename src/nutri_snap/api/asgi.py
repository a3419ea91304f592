"""ASGI entrypoint for the Nutri-Snap API."""

from nutri_snap.api.app import create_app
from nutri_snap.containers import build_container

app = create_app(build_container())
