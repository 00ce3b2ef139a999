from .config import Settings, get_settings
from .database import Base, make_engine, make_session_factory, get_db
from .exceptions import (
    StockroomError, NotFound, ValidationFailure, ReferencedByOthers, StorageFailure
)

__all__ = [
    "Settings", "get_settings",
    "Base", "make_engine", "make_session_factory", "get_db",
    "StockroomError", "NotFound", "ValidationFailure", "ReferencedByOthers", "StorageFailure",
]
