"""Core app configuration, database, security and access policy."""

from taskboard.core.config import Settings, get_settings
from taskboard.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]
