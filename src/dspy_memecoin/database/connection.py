"""Database connection module."""

from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from ..config.config import settings

# Create base model class
Base = declarative_base()


def create_state_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create the engine backing the local state store.

    Args:
        database_url: SQLAlchemy URL, defaults to ``settings.state_database_url``

    Returns:
        Engine: SQLAlchemy engine
    """
    url = database_url or settings.state_database_url
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args={"check_same_thread": False} if url.startswith("sqlite") else {},
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to ``engine``."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Yield a session that is committed on success and rolled back on error.

    Yields:
        Session: SQLAlchemy database session
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
