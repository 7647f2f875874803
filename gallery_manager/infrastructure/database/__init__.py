"""Async SQLite database access."""
from .connection import open_database, init_schema

__all__ = ["open_database", "init_schema"]
