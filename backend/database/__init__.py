from .session import Base, SessionLocal, engine, get_db, init_db

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "init_db",
    "Base",
]
