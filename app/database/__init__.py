"""Database configuration, models, and session management."""

from app.database.config import Base, create_engine_for, create_session_factory, get_db
from app.database import models

__all__ = ["Base", "create_engine_for", "create_session_factory", "get_db", "models"]
