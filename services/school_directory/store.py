# services/school_directory/store.py
"""
In-memory owner of the schools, users and reviews collections.

Every mutation swaps the affected collection synchronously (before its first
await) and then mirrors the change to the active StorageBackend. A failed
mirror is logged and reported through MutationResult; memory is never rolled
back, so callers that care must act on ``result.ok`` themselves.
"""
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Generic, Iterable, List, Optional, Tuple, Type, TypeVar
from uuid import uuid4

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ValidationError

from services.school_directory.backends.base import ChangeEvent, ChangeKind, StorageBackend, Table
from services.school_directory.export import generate_export_code
from services.school_directory.schemas.admin import SeedReport
from services.school_directory.schemas.reviews import ReviewBase, ReviewRecord
from services.school_directory.schemas.schools import SchoolBase, SchoolRecord
from services.school_directory.schemas.users import UserBase, UserRecord, UserRole
from services.school_directory.seed_data import SEED_REVIEWS, SEED_SCHOOLS, SEED_USERS

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def new_id() -> str:
    """Millisecond timestamp plus a short random suffix."""
    return f"{int(time.time() * 1000)}{uuid4().hex[:6]}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MutationResult:
    ok: bool
    record: Optional[BaseModel] = None
    error: Optional[str] = None


class Collection(Generic[T]):
    """One entity collection, replaced wholesale on every change."""

    def __init__(self, model: Type[T], items: Iterable[T] = ()):
        self.model = model
        self._items: Tuple[T, ...] = tuple(items)

    @property
    def items(self) -> Tuple[T, ...]:
        return self._items

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def get(self, record_id: str) -> Optional[T]:
        return next((item for item in self._items if item.id == record_id), None)

    def replace_all(self, items: Iterable[T]) -> None:
        self._items = tuple(items)

    def append(self, item: T) -> None:
        self._items = (*self._items, item)

    def replace(self, item: T) -> bool:
        if self.get(item.id) is None:
            return False
        self._items = tuple(item if existing.id == item.id else existing for existing in self._items)
        return True

    def remove(self, record_id: str) -> Optional[T]:
        removed = self.get(record_id)
        if removed is not None:
            self._items = tuple(item for item in self._items if item.id != record_id)
        return removed

    def apply(self, event: ChangeEvent) -> bool:
        """Reconcile a realtime event. Returns False when it changed nothing."""
        if event.kind is ChangeKind.INSERT:
            # Duplicate delivery, or the echo of our own optimistic insert
            if self.get(event.id) is not None:
                return False
            self.append(self.model.model_validate(event.record))
            return True
        if event.kind is ChangeKind.UPDATE:
            return self.replace(self.model.model_validate(event.record))
        if event.kind is ChangeKind.DELETE:
            return self.remove(event.id) is not None
        return False


class DataStore:
    def __init__(self, backend: StorageBackend):
        self.backend = backend
        self.collections: Dict[Table, Collection] = {
            Table.SCHOOLS: Collection(SchoolRecord),
            Table.USERS: Collection(UserRecord),
            Table.REVIEWS: Collection(ReviewRecord),
        }
        self.last_error: Optional[str] = None

    @property
    def mode(self) -> str:
        return self.backend.mode

    @property
    def is_remote(self) -> bool:
        return self.mode == "remote"

    @property
    def schools(self) -> Tuple[SchoolRecord, ...]:
        return self.collections[Table.SCHOOLS].items

    @property
    def users(self) -> Tuple[UserRecord, ...]:
        return self.collections[Table.USERS].items

    @property
    def reviews(self) -> Tuple[ReviewRecord, ...]:
        return self.collections[Table.REVIEWS].items

    def get_school(self, school_id: str) -> Optional[SchoolRecord]:
        return self.collections[Table.SCHOOLS].get(school_id)

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        return self.collections[Table.USERS].get(user_id)

    def get_review(self, review_id: str) -> Optional[ReviewRecord]:
        return self.collections[Table.REVIEWS].get(review_id)

    def find_user_by_email(self, email: str) -> Optional[UserRecord]:
        email = email.lower()
        return next((user for user in self.users if user.email.lower() == email), None)

    # --- LOADING & REALTIME ---

    async def load(self) -> None:
        """
        Fetch every collection from the backend. A failing table keeps its
        current contents and records its error; the others still load.
        """
        errors = []
        for table, collection in self.collections.items():
            try:
                rows = await self.backend.fetch_all(table)
                records = [collection.model.model_validate(row) for row in rows]
            except Exception as e:
                message = str(e) or e.__class__.__name__
                logger.error("Data fetch error for '%s': %s", table.value, message)
                errors.append(message)
                continue
            collection.replace_all(records)

        self.last_error = errors[-1] if errors else None

    async def start_realtime(self) -> None:
        """Subscribe to backend changes. Failure leaves the loaded data in place."""
        try:
            await self.backend.subscribe(self.apply_change)
        except Exception as e:
            message = str(e) or e.__class__.__name__
            logger.error("Realtime subscription failed: %s", message)
            self.last_error = message

    def apply_change(self, event: ChangeEvent) -> bool:
        try:
            return self.collections[event.table].apply(event)
        except ValidationError as e:
            logger.warning("Dropping %s event for %s/%s: %s", event.kind.value, event.table.value, event.id, e)
            return False

    async def close(self) -> None:
        await self.backend.close()

    # --- MIRRORING ---

    async def _mirror(self, action: str, operation, record: BaseModel = None) -> MutationResult:
        try:
            await operation
        except Exception as e:
            error = str(e) or e.__class__.__name__
            logger.error("Failed to %s: %s", action, error)
            return MutationResult(ok=False, record=record, error=error)
        return MutationResult(ok=True, record=record)

    @staticmethod
    def _row(record: BaseModel) -> Dict[str, Any]:
        return record.model_dump(mode="json")

    # --- SCHOOLS ---

    async def add_school(self, data: SchoolBase) -> MutationResult:
        school = SchoolRecord(id=new_id(), **data.model_dump())
        self.collections[Table.SCHOOLS].append(school)
        return await self._mirror(
            f"insert school {school.id}",
            self.backend.insert(Table.SCHOOLS, self._row(school)),
            school,
        )

    async def update_school(self, school: SchoolRecord) -> MutationResult:
        self.collections[Table.SCHOOLS].replace(school)
        fields = self._row(school)
        fields.pop("id")
        return await self._mirror(
            f"update school {school.id}",
            self.backend.update(Table.SCHOOLS, school.id, fields),
            school,
        )

    async def delete_school(self, school_id: str) -> MutationResult:
        removed = self.collections[Table.SCHOOLS].remove(school_id)
        return await self._mirror(
            f"delete school {school_id}",
            self.backend.delete(Table.SCHOOLS, school_id),
            removed,
        )

    # --- USERS ---

    async def add_user(self, data: UserBase) -> MutationResult:
        user = UserRecord(id=new_id(), **data.model_dump())
        self.collections[Table.USERS].append(user)
        return await self._mirror(
            f"insert user {user.id}",
            self.backend.insert(Table.USERS, self._row(user)),
            user,
        )

    async def update_user(self, user_id: str, fields: Dict[str, Any]) -> MutationResult:
        fields = {key: value for key, value in fields.items() if key != "id"}
        collection = self.collections[Table.USERS]
        current = collection.get(user_id)
        updated = None
        if current is not None:
            updated = UserRecord.model_validate({**current.model_dump(), **fields})
            collection.replace(updated)
        return await self._mirror(
            f"update user {user_id}",
            self.backend.update(Table.USERS, user_id, jsonable_encoder(fields)),
            updated,
        )

    async def update_user_role(self, user_id: str, role: UserRole) -> MutationResult:
        # Unguarded: keeping one admin around is up to the caller
        return await self.update_user(user_id, {"role": role})

    async def delete_user(self, user_id: str) -> MutationResult:
        removed = self.collections[Table.USERS].remove(user_id)
        return await self._mirror(
            f"delete user {user_id}",
            self.backend.delete(Table.USERS, user_id),
            removed,
        )

    # --- REVIEWS ---

    async def add_review(self, data: ReviewBase) -> MutationResult:
        review = ReviewRecord(id=new_id(), created_at=utcnow(), **data.model_dump())
        self.collections[Table.REVIEWS].append(review)
        return await self._mirror(
            f"insert review {review.id}",
            self.backend.insert(Table.REVIEWS, self._row(review)),
            review,
        )

    async def delete_review(self, review_id: str) -> MutationResult:
        removed = self.collections[Table.REVIEWS].remove(review_id)
        return await self._mirror(
            f"delete review {review_id}",
            self.backend.delete(Table.REVIEWS, review_id),
            removed,
        )

    # --- EXPORT & SEED ---

    def generate_export_code(self) -> str:
        return generate_export_code(self.schools)

    async def seed_database(
        self,
        schools: List[Dict[str, Any]] = None,
        users: List[Dict[str, Any]] = None,
        reviews: List[Dict[str, Any]] = None,
    ) -> SeedReport:
        """Upsert the bundled (or given) seed rows into the remote database."""
        if not self.is_remote:
            return SeedReport(ok=False, message="Seeding is only available with the cloud database.")

        seed = {
            Table.SCHOOLS: SEED_SCHOOLS if schools is None else schools,
            Table.USERS: SEED_USERS if users is None else users,
            Table.REVIEWS: SEED_REVIEWS if reviews is None else reviews,
        }
        errors = {}
        for table, rows in seed.items():
            model = self.collections[table].model
            try:
                normalized = [model.model_validate(row).model_dump(mode="json") for row in rows]
                await self.backend.upsert_many(table, normalized)
            except Exception as e:
                logger.error("Error seeding %s: %s", table.value, e)
                errors[table.value] = str(e) or e.__class__.__name__

        if errors:
            return SeedReport(ok=False, errors=errors, message="There were errors seeding the database. Check the logs for details.")
        return SeedReport(ok=True, message="Database seeded successfully! Changes will arrive shortly.")
