"""ASGI entrypoint for the peptide tracker API."""

from peptide_tracker.api.app import create_app
from peptide_tracker.containers import build_container

app = create_app(build_container())
