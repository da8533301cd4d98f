# services/school_directory/backends/base.py

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union


class Table(str, enum.Enum):
    SCHOOLS = "schools"
    USERS = "users"
    REVIEWS = "reviews"


class ChangeKind(str, enum.Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    """A row-level change delivered out-of-band by the backend."""
    table: Table
    kind: ChangeKind
    record: Optional[Dict[str, Any]] = None  # new row for INSERT/UPDATE
    record_id: Optional[str] = None          # key of the old row for DELETE

    @property
    def id(self) -> Optional[str]:
        if self.record is not None:
            return self.record.get("id")
        return self.record_id


Row = Dict[str, Any]
ChangeCallback = Callable[[ChangeEvent], Union[None, Awaitable[None]]]


class StorageBackend(ABC):
    """Per-table row storage used to mirror in-memory collections."""

    mode: str = ""

    @abstractmethod
    async def fetch_all(self, table: Table) -> List[Row]:
        ...

    @abstractmethod
    async def fetch_one(self, table: Table, record_id: str) -> Optional[Row]:
        ...

    @abstractmethod
    async def insert(self, table: Table, row: Row) -> None:
        ...

    @abstractmethod
    async def update(self, table: Table, record_id: str, fields: Row) -> None:
        ...

    @abstractmethod
    async def delete(self, table: Table, record_id: str) -> None:
        ...

    @abstractmethod
    async def upsert_many(self, table: Table, rows: List[Row]) -> None:
        ...

    async def subscribe(self, callback: ChangeCallback) -> None:
        """Start delivering change events to ``callback``. No-op by default."""
        return None

    async def close(self) -> None:
        return None
