"""SQLAlchemy key-value repository implementing ``StoragePort``.

Each key maps to one row holding a whole JSON document (the saved-orders
list, the current-order slot, catalog overrides). Writes replace the
document in full; there is no partial or delta persistence. The database
is any SQLAlchemy URL, SQLite by default.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import JSON, String, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from .domain import StoragePort

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class KeyValueEntry(Base):
    """SQLAlchemy model for one stored document.

    Attributes:
        key: Storage key (e.g. ``saved-orders``), primary key.
        value: JSON document stored under the key.
    """

    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(200), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)


class SqlKeyValueStorage(StoragePort):
    """Repository that persists JSON documents by key using SQLAlchemy."""

    def __init__(self, database_url: str | None = None, engine: Engine | None = None):
        """Create the repository and its table if missing.

        Args:
            database_url: SQLAlchemy URL, used when ``engine`` is not given.
            engine: Pre-built engine (tests pass an in-memory one).
        """
        if engine is None:
            if not database_url:
                raise ValueError("database_url or engine is required")
            engine = create_engine(database_url, pool_pre_ping=True)
        self.engine = engine
        Base.metadata.create_all(self.engine)

    @contextmanager
    def get_session(self) -> Iterator[Session]:
        """Yield a session bound to the repository engine.

        The session is automatically closed on context exit.
        """
        with Session(self.engine) as s:
            yield s

    def load(self, key: str, default: Any = None) -> Any:
        with self.get_session() as s:
            row = s.execute(select(KeyValueEntry).where(KeyValueEntry.key == key)).scalars().first()
            if row is None or row.value is None:
                return default
            return row.value

    def save(self, key: str, value: Any) -> None:
        """Insert or replace the document stored under ``key``.

        Raises:
            sqlalchemy.exc.SQLAlchemyError: When the write fails; the
                transaction is rolled back.
        """
        with self.get_session() as s:
            row = s.get(KeyValueEntry, key)
            if row is None:
                s.add(KeyValueEntry(key=key, value=value))
            else:
                row.value = value
            s.commit()
        logger.debug("document stored", extra={"key": key})
