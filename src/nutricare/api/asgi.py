"""ASGI entrypoint for the NutriCare API."""

from nutricare.api.app import create_app
from nutricare.containers import build_container

app = create_app(build_container())
