"""Credential verification and the fixed user directory.

``CredentialVerifier`` is the seam for a real identity provider: the session
layer only asks "do these credentials belong to this username?" and never
sees how the answer is produced.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional

from ..models.user import User
from ..utils.logging import get_logger
from ..utils.security import hash_password, verify_password

logger = get_logger("auth.credentials")

DEMO_USERS: tuple[User, ...] = (
    User(
        id="1",
        username="admin",
        email="admin@fortinet.com",
        role="admin",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    ),
    User(
        id="2",
        username="analyst",
        email="analyst@fortinet.com",
        role="user",
        created_at=datetime(2024, 1, 15, tzinfo=timezone.utc),
    ),
    User(
        id="3",
        username="security",
        email="security@fortinet.com",
        role="user",
        created_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
    ),
)

DEMO_CREDENTIALS: dict[str, str] = {
    "admin": "admin123",
    "analyst": "analyst123",
    "security": "security123",
}


class CredentialVerifier(ABC):
    """Answers whether a username/password pair is valid."""

    @abstractmethod
    def verify(self, username: str, password: str) -> bool:
        ...


class StaticCredentialVerifier(CredentialVerifier):
    """Checks credentials against a fixed table, stored as bcrypt hashes."""

    def __init__(self, credentials: Mapping[str, str], rounds: int = 12) -> None:
        self._hashes = {
            username: hash_password(password, rounds=rounds)
            for username, password in credentials.items()
        }

    def verify(self, username: str, password: str) -> bool:
        hashed = self._hashes.get(username)
        if hashed is None:
            return False
        return verify_password(password, hashed)


class UserDirectory:
    """Read-only lookup of seeded users by id or username."""

    def __init__(self, users: Iterable[User]) -> None:
        self._by_id: dict[str, User] = {}
        self._by_username: dict[str, User] = {}
        for user in users:
            self._by_id[user.id] = user
            self._by_username[user.username] = user

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self._by_username.get(username)

    def __len__(self) -> int:
        return len(self._by_id)


def build_demo_identity(rounds: int = 12) -> tuple[StaticCredentialVerifier, UserDirectory]:
    """Verifier and directory for the built-in demo accounts."""
    logger.debug("demo_identity_loaded", users=len(DEMO_USERS))
    return StaticCredentialVerifier(DEMO_CREDENTIALS, rounds=rounds), UserDirectory(DEMO_USERS)
