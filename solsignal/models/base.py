"""SQLAlchemy base configuration and session management."""
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from config.settings import get_settings

# Base class for all models
Base = declarative_base()


def build_engine(url: str) -> Engine:
    """Create an engine; SQLite gets a single shared connection, servers get a pool."""
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20
    )


@lru_cache()
def get_engine() -> Engine:
    """Process-wide engine for the configured database."""
    return build_engine(get_settings().DATABASE_URL)


@lru_cache()
def get_session_factory() -> sessionmaker:
    """Session factory bound to the process-wide engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())