from fastapi import Request

from stockroom.core import Settings
from stockroom.core.database import get_db

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings

__all__ = ["get_db", "get_app_settings"]
