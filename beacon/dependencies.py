from fastapi import Request

from beacon.config import Settings
from beacon.services.view_store import ViewStore


def get_view_store(request: Request) -> ViewStore:
    """The store built once in the application lifespan."""
    return request.app.state.view_store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
