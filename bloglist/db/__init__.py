"""Database handle and engine construction."""

from bloglist.db.database import Database, build_engine

__all__ = ["Database", "build_engine"]
