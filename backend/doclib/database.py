"""Database engine and session factory construction.

Unlike a module-level engine, every LibraryStore builds its own engine from a
URL, so each store (and each test) gets an isolated database and its own id
sequences.  The default ``sqlite://`` URL is a private in-memory database that
lives as long as the store.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

IN_MEMORY_URL = "sqlite://"

# Create base class for models
Base = declarative_base()


def is_in_memory(database_url: str) -> bool:
    """True for SQLite URLs that do not point at a file."""
    return database_url in ("sqlite://", "sqlite:///:memory:")


def create_store_engine(database_url: str = IN_MEMORY_URL) -> Engine:
    """Create an engine with database-specific tuning."""
    if database_url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if is_in_memory(database_url):
            # One shared connection, otherwise every pooled connection
            # would see its own empty in-memory database.
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, **kwargs)

        # SQLite defaults foreign_keys to OFF; enable it on every connection.
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(database_url, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to *engine*.

    ``expire_on_commit=False`` keeps loaded attributes readable after the
    store closes the session, so results can be converted to schemas.
    """
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def create_tables(engine: Engine) -> None:
    """Create all tables for the registered models."""
    from . import models  # noqa: F401  registers the mappers on Base

    Base.metadata.create_all(bind=engine)
