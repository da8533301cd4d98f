# services/school_directory/backends/local.py

import copy
from typing import Dict, List, Optional

from shared.storage import JsonFileStore
from services.school_directory.backends.base import Row, StorageBackend, Table
from services.school_directory.seed_data import SEED_REVIEWS, SEED_SCHOOLS, SEED_USERS

DEFAULT_SEED = {
    Table.SCHOOLS: SEED_SCHOOLS,
    Table.USERS: SEED_USERS,
    Table.REVIEWS: SEED_REVIEWS,
}


class LocalBackend(StorageBackend):
    """
    Keeps each collection under a fixed key of a JsonFileStore.
    Every write rewrites the whole collection.
    """

    mode = "local"

    def __init__(self, store: JsonFileStore, seed: Dict[Table, List[Row]] = None):
        self.store = store
        self.seed = DEFAULT_SEED if seed is None else seed

    def _load(self, table: Table) -> List[Row]:
        rows = self.store.get(table.value)
        if rows is None:
            rows = copy.deepcopy(self.seed.get(table, []))
        return rows

    def _save(self, table: Table, rows: List[Row]) -> None:
        self.store.set(table.value, rows)

    async def fetch_all(self, table: Table) -> List[Row]:
        return self._load(table)

    async def fetch_one(self, table: Table, record_id: str) -> Optional[Row]:
        return next((row for row in self._load(table) if row.get("id") == record_id), None)

    async def insert(self, table: Table, row: Row) -> None:
        self._save(table, [*self._load(table), row])

    async def update(self, table: Table, record_id: str, fields: Row) -> None:
        rows = [
            {**row, **fields} if row.get("id") == record_id else row
            for row in self._load(table)
        ]
        self._save(table, rows)

    async def delete(self, table: Table, record_id: str) -> None:
        self._save(table, [row for row in self._load(table) if row.get("id") != record_id])

    async def upsert_many(self, table: Table, rows: List[Row]) -> None:
        incoming = {row["id"]: row for row in rows}
        merged = [incoming.pop(row.get("id"), row) for row in self._load(table)]
        self._save(table, merged + list(incoming.values()))
