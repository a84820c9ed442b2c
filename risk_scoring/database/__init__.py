"""Database package - engine, sessions and ORM models."""
from .base import Base
from .connection import SessionLocal, get_db, get_engine, transaction

__all__ = [
    "Base",
    "SessionLocal",
    "get_db",
    "get_engine",
    "transaction",
]
