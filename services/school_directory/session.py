# services/school_directory/session.py
"""
Per-client login state.

A Session wraps one client's storage namespace (the counterpart of a
browser's local storage) and keeps the logged-in user's record there under
``authUser``. Credentials are plaintext and compared as-is.
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from shared.storage import JsonFileStore
from services.school_directory.schemas.users import UserBase, UserRecord, UserRole
from services.school_directory.seed_data import SEED_USERS
from services.school_directory.store import DataStore, MutationResult, utcnow

logger = logging.getLogger(__name__)

SESSION_KEY = "authUser"
SAVED_SCHOOLS_KEY = "savedSchoolIds"


class EmailAlreadyRegistered(ValueError):
    def __init__(self, email: str):
        super().__init__("An account with this email already exists.")
        self.email = email


def default_admin() -> Optional[UserRecord]:
    row = next((user for user in SEED_USERS if user["role"] == UserRole.ADMIN.value), None)
    return UserRecord.model_validate(row) if row else None


def avatar_url_for(username: str) -> str:
    return f"https://ui-avatars.com/api/?name={quote(username, safe='')}&background=BC002D&color=fff"


class Session:
    def __init__(self, data: DataStore, store: JsonFileStore, fallback_admin: Optional[UserRecord] = None):
        self.data = data
        self.store = store
        self.fallback_admin = default_admin() if fallback_admin is None else fallback_admin

    @property
    def user(self) -> Optional[UserRecord]:
        raw = self.store.get(SESSION_KEY)
        return UserRecord.model_validate(raw) if raw else None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        user = self.user
        return user is not None and user.role == UserRole.ADMIN

    def _remember(self, user: UserRecord) -> None:
        self.store.set(SESSION_KEY, user.model_dump(mode="json"))

    def login(self, email: str, password: str) -> Optional[UserRecord]:
        found = self.data.find_user_by_email(email)
        if found is not None and found.password == password:
            self._remember(found)
            return found

        # The bundled admin only applies while no live account uses that email
        admin = self.fallback_admin
        if (
            found is None
            and admin is not None
            and admin.email.lower() == email.lower()
            and admin.password == password
        ):
            logger.info("Logged in with the bundled administrator account")
            self._remember(admin)
            return admin

        return None

    async def sign_up(self, email: str, password: str, username: str) -> UserRecord:
        if self.data.find_user_by_email(email) is not None:
            raise EmailAlreadyRegistered(email)

        result = await self.data.add_user(UserBase(
            email=email,
            password=password,
            role=UserRole.USER,
            username=username,
            avatar_url=avatar_url_for(username),
            created_at=utcnow(),
        ))
        self._remember(result.record)
        return result.record

    async def update_profile(self, fields: Dict[str, Any]) -> Optional[MutationResult]:
        user = self.user
        if user is None:
            return None

        result = await self.data.update_user(user.id, fields)
        merged = UserRecord.model_validate({**user.model_dump(), **fields, "id": user.id})
        self._remember(merged)
        return result

    def logout(self) -> None:
        self.store.remove(SESSION_KEY)

    # --- SAVED SCHOOLS ---

    @property
    def saved_school_ids(self) -> List[str]:
        return list(self.store.get(SAVED_SCHOOLS_KEY, []))

    def toggle_saved_school(self, school_id: str) -> List[str]:
        saved = self.saved_school_ids
        if school_id in saved:
            saved = [sid for sid in saved if sid != school_id]
        else:
            saved.append(school_id)
        self.store.set(SAVED_SCHOOLS_KEY, saved)
        return saved
