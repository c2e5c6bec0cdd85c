"""Database helpers: engines, session factories and DB initialization.

Provides read/write session factories and an `init_db` helper that creates
the schema. Connection URLs come from `core.config`.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core import config
from .models import Base


def _engine(url: str):
    # SQLite connections are shared across FastAPI's worker threads.
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


# Engines
write_engine = _engine(config.WRITE_DATABASE_URL)
read_engine = _engine(config.READ_DATABASE_URL)

# Session factories
WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def init_db():
    """Create all tables defined on the ORM models if they do not exist."""
    Base.metadata.create_all(bind=write_engine)


# Convenience generators for dependency injection
def get_write_session():
    """Yield a write-enabled SQLAlchemy session for the request scope."""
    db = WriteSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_read_session():
    """Yield a read-only SQLAlchemy session for the request scope.

    Used for read endpoints where routing reads to a replica may be desired.
    """
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
