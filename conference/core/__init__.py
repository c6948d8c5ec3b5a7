"""Core app configuration, database, errors and security primitives."""

from conference.core.config import get_settings, settings
from conference.core.database import get_db
from conference.core.errors import AppError

__all__ = ["AppError", "get_db", "get_settings", "settings"]
