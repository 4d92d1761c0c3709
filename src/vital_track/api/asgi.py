"""ASGI entrypoint for the VitalTrack API."""

from vital_track.api.app import create_app
from vital_track.containers import build_container

app = create_app(build_container())
