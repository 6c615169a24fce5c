from __future__ import annotations

import threading
import uuid
from typing import Any, Protocol

import bcrypt

from ..recommendations.models import ProfileUpdate, UserProfile

DEMO_EMAIL = "demo@wisata.id"
DEMO_PASSWORD = "demo123"


class DuplicateUser(ValueError):
    pass


class ProfileStore(Protocol):
    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the profile, or ``None`` if the user does not exist."""
        ...


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


class UserStore:
    """In-memory user records keyed by user id."""

    def __init__(self) -> None:
        self._users: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def _find_by_email(self, email: str) -> str | None:
        # caller holds self._lock
        key = email.strip().lower()
        for user_id, record in self._users.items():
            if record["email"] == key:
                return user_id
        return None

    def register(self, email: str, password: str, name: str, user_id: str | None = None) -> UserProfile:
        with self._lock:
            if self._find_by_email(email):
                raise DuplicateUser(f"User {email} already exists")
            user_id = user_id or uuid.uuid4().hex
            self._users[user_id] = {
                "email": email.strip().lower(),
                "name": name,
                "password_hash": _hash_password(password),
                "interest": "",
                "address": "",
                "phone_number": "",
            }
        return self._profile(user_id)

    def authenticate(self, email: str, password: str) -> UserProfile | None:
        """Verify credentials. Returns the profile or ``None``."""
        with self._lock:
            user_id = self._find_by_email(email)
            password_hash = self._users[user_id]["password_hash"] if user_id else None
        if user_id and _verify_password(password, password_hash):
            return self._profile(user_id)
        return None

    def get_profile(self, user_id: str) -> UserProfile | None:
        if user_id not in self._users:
            return None
        return self._profile(user_id)

    def update_profile(self, user_id: str, update: ProfileUpdate) -> UserProfile | None:
        changes = update.model_dump(exclude_none=True)
        with self._lock:
            record = self._users.get(user_id)
            if record is None:
                return None
            record.update(changes)
        return self._profile(user_id)

    def _profile(self, user_id: str) -> UserProfile:
        record = self._users[user_id]
        return UserProfile(
            user_id=user_id,
            email=record["email"],
            name=record["name"],
            interest=record["interest"],
            address=record["address"],
            phone_number=record["phone_number"],
        )


def seed_demo_user(store: UserStore) -> UserProfile:
    """Pre-seed a demo account with a complete profile."""
    profile = store.register(DEMO_EMAIL, DEMO_PASSWORD, "Demo User", user_id="demo")
    return store.update_profile(
        profile.user_id,
        ProfileUpdate(interest="Bahari", address="Kuta, Badung, Bali"),
    )
