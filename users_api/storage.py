"""In-memory storage used by the handler layer."""

import logging
import threading
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class Storage(Protocol):
    """Operations the handlers need from a storage backend."""

    def select(
        self, table: str, search: Optional[Dict[str, str]] = None
    ) -> List[Record]:
        ...

    def insert(self, table: str, data: Record) -> Record:
        ...

    def update(self, table: str, id: str, data: Record) -> bool:
        ...

    def delete(self, table: str, id: str) -> bool:
        ...


def _matches(row: Record, search: Dict[str, str]) -> bool:
    """Return True when any searched field contains its value, ignoring case."""
    for key, value in search.items():
        field_value = row.get(key)
        if field_value is None:
            continue
        if str(value).lower() in str(field_value).lower():
            return True
    return False


class Database:
    """Schemaless tables of records keyed by their ``id`` field.

    Nothing is persisted; every instance starts empty.
    """

    def __init__(self) -> None:
        """Initialize database object."""
        self._tables: Dict[str, List[Record]] = {}
        self._lock = threading.Lock()

    def select(
        self, table: str, search: Optional[Dict[str, str]] = None
    ) -> List[Record]:
        with self._lock:
            rows = self._tables.get(table, [])
            if search:
                rows = [row for row in rows if _matches(row, search)]
            return [dict(row) for row in rows]

    def insert(self, table: str, data: Record) -> Record:
        with self._lock:
            self._tables.setdefault(table, []).append(dict(data))
        logger.debug(f"Inserted {data.get('id')} into {table}")
        return data

    def _index(self, table: str, id: str) -> int:
        for index, row in enumerate(self._tables.get(table, [])):
            if row.get("id") == id:
                return index
        return -1

    def update(self, table: str, id: str, data: Record) -> bool:
        with self._lock:
            index = self._index(table, id)
            if index < 0:
                return False
            fields = {key: value for key, value in data.items() if key != "id"}
            self._tables[table][index] = {"id": id, **fields}
        logger.debug(f"Updated {id} in {table}")
        return True

    def delete(self, table: str, id: str) -> bool:
        with self._lock:
            index = self._index(table, id)
            if index < 0:
                return False
            del self._tables[table][index]
        logger.debug(f"Deleted {id} from {table}")
        return True
