"""Database session and metadata configuration for the local table backend."""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def create_session_factory(database_url: str) -> sessionmaker:
    """Create the engine, make sure every table exists and return a session factory."""

    from .. import models  # noqa: F401  registers the tables on Base.metadata

    engine_kwargs = {}
    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    if database_url in _MEMORY_URLS:
        engine_kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, future=True, **engine_kwargs)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
