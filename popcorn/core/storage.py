"""Key-value stores backing the persisted watchlist."""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from sqlmodel import Session

from popcorn.core.database import StoredValue


class KeyValueStore(ABC):
    """Synchronous string key-value store.

    Writes overwrite the whole value stored under a key.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or None."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Store kept in a plain dict. Used by tests."""

    def __init__(self, initial: Dict[str, str] | None = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class SqlKeyValueStore(KeyValueStore):
    """Durable store on top of the SQLModel ``stored_value`` table."""

    def __init__(self, engine):
        self.engine = engine
        StoredValue.metadata.create_all(engine, tables=[StoredValue.__table__])

    def get(self, key: str) -> Optional[str]:
        with Session(self.engine) as session:
            row = session.get(StoredValue, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        with Session(self.engine) as session:
            row = session.get(StoredValue, key)
            if row is None:
                row = StoredValue(key=key, value=value)
            else:
                row.value = value
            session.add(row)
            session.commit()
