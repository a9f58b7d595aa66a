"""ASGI entrypoint for the timesheet tracker API."""

from timesheet_tracker.api.app import create_app
from timesheet_tracker.containers import build_container

app = create_app(build_container())
