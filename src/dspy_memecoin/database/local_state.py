"""Key/value table holding the persisted application state."""

import json
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, Optional

from sqlalchemy import Column, DateTime, String, Text, delete
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions.base import ErrorCode, StorageError
from .connection import Base, create_session_factory, create_state_engine, session_scope

MEMES_KEY = "memes"
COINS_KEY = "coins"
PREFERENCES_KEY = "preferences"
STATE_KEYS = (MEMES_KEY, COINS_KEY, PREFERENCES_KEY)


class LocalStateEntry(Base):
    """One top-level state collection, stored as a JSON document."""

    __tablename__ = "local_state"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class LocalStateStorage:
    """
    Durable JSON documents keyed by collection name.

    Every method raises :class:`StorageError` on failure; callers decide
    whether to swallow it.
    """

    def __init__(self, database_url: Optional[str] = None, engine: Optional[Engine] = None) -> None:
        self.engine = engine or create_state_engine(database_url)
        self._session_factory = create_session_factory(self.engine)
        Base.metadata.create_all(self.engine, tables=[LocalStateEntry.__table__])

    @contextmanager
    def _session(self) -> Iterator[Session]:
        yield from session_scope(self._session_factory)

    def read(self, key: str) -> Optional[Any]:
        """
        Decode the document stored under ``key``.

        Returns:
            The decoded JSON value, or None when nothing is stored

        Raises:
            StorageError: On a database error or undecodable document
        """
        try:
            with self._session() as session:
                entry = session.get(LocalStateEntry, key)
                raw = entry.value if entry is not None else None
        except SQLAlchemyError as e:
            raise StorageError(
                f"Failed to read state '{key}'", ErrorCode.STORAGE_READ_ERROR, original_error=e
            ) from e
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(
                f"Corrupt state document '{key}'", ErrorCode.STORAGE_READ_ERROR, original_error=e
            ) from e

    def write(self, key: str, value: Any) -> None:
        """
        Replace the document stored under ``key``.

        Raises:
            StorageError: On a database or encoding error
        """
        try:
            payload = json.dumps(value)
            with self._session() as session:
                entry = session.get(LocalStateEntry, key)
                if entry is None:
                    session.add(LocalStateEntry(key=key, value=payload))
                else:
                    entry.value = payload
        except (SQLAlchemyError, TypeError, ValueError) as e:
            raise StorageError(
                f"Failed to write state '{key}'", ErrorCode.STORAGE_WRITE_ERROR, original_error=e
            ) from e

    def clear(self) -> None:
        """Remove every stored document."""
        try:
            with self._session() as session:
                session.execute(delete(LocalStateEntry))
        except SQLAlchemyError as e:
            raise StorageError(
                "Failed to clear state", ErrorCode.STORAGE_WRITE_ERROR, original_error=e
            ) from e
