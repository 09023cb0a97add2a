"""Session/identity provider — login, logout and current-user resolution."""

import asyncio
from typing import Optional

from ..models.user import User
from ..utils.exceptions import AuthenticationError
from ..utils.logging import get_logger
from ..utils.security import create_session_token, decode_session_token
from .credentials import CredentialVerifier, UserDirectory
from .token_store import TokenStore

logger = get_logger("auth.session")

LOGIN_LATENCY_SECONDS = 0.5


class SessionProvider:
    """Issues and resolves session tokens for one caller's token store.

    States are simply anonymous (no valid token in the store) and
    authenticated. A malformed, tampered or expired token is treated exactly
    like no token at all.
    """

    def __init__(
        self,
        verifier: CredentialVerifier,
        directory: UserDirectory,
        store: TokenStore,
        secret_key: str,
        algorithm: str = "HS256",
        expiry_minutes: int = 24 * 60,
        enforce_expiry: bool = True,
        simulate_latency: bool = False,
    ) -> None:
        self._verifier = verifier
        self._directory = directory
        self._store = store
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expiry_minutes = expiry_minutes
        self._enforce_expiry = enforce_expiry
        self._latency = LOGIN_LATENCY_SECONDS if simulate_latency else 0.0

    @property
    def store(self) -> TokenStore:
        return self._store

    async def login(self, username: str, password: str) -> User:
        """Verify credentials, persist a fresh token and return the user.

        Raises AuthenticationError without saying whether the username or
        the password was wrong.
        """
        await asyncio.sleep(self._latency)

        user = self._directory.get_by_username(username)
        if user is None or not self._verifier.verify(username, password):
            logger.info("login_failed", username=username)
            raise AuthenticationError()

        token = create_session_token(
            data={"uid": user.id, "sub": user.username},
            secret_key=self._secret_key,
            algorithm=self._algorithm,
            expires_minutes=self._expiry_minutes,
        )
        self._store.set(token)
        logger.info("login_succeeded", username=user.username, user_id=user.id)
        return user

    def logout(self) -> None:
        """Discard the stored token. Safe to call when already logged out."""
        self._store.clear()

    def current_user(self) -> Optional[User]:
        token = self._store.get()
        if not token:
            return None

        payload = decode_session_token(
            token,
            self._secret_key,
            self._algorithm,
            verify_expiry=self._enforce_expiry,
        )
        if payload is None:
            logger.debug("session_token_rejected")
            return None

        user_id = payload.get("uid")
        if not isinstance(user_id, str):
            return None
        return self._directory.get_by_id(user_id)

    def is_authenticated(self) -> bool:
        return self.current_user() is not None
