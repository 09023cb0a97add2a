"""Where a session token lives between calls.

The session provider never decides where the token is kept; the caller hands
it a store. ``MemoryTokenStore`` suits scripts and tests, ``CookieTokenStore``
binds one HTTP request/response pair.
"""

from abc import ABC, abstractmethod
from typing import Optional

from starlette.requests import Request
from starlette.responses import Response


class TokenStore(ABC):
    @abstractmethod
    def get(self) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, token: str) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class MemoryTokenStore(TokenStore):
    """Keeps tokens in a dict under a namespaced key."""

    def __init__(self, key: str = "ioc_console_token") -> None:
        self.key = key
        self._data: dict[str, str] = {}

    def get(self) -> Optional[str]:
        return self._data.get(self.key)

    def set(self, token: str) -> None:
        self._data[self.key] = token

    def clear(self) -> None:
        self._data.pop(self.key, None)


class CookieTokenStore(TokenStore):
    """Reads the token from the request cookie (or a Bearer header) and writes
    changes to the response as an httpOnly cookie."""

    def __init__(
        self,
        request: Request,
        response: Response,
        key: str = "ioc_console_token",
        max_age: int = 24 * 60 * 60,
        secure: bool = False,
    ) -> None:
        self.key = key
        self._request = request
        self._response = response
        self._max_age = max_age
        self._secure = secure
        self._value: Optional[str] = None
        self._cleared = False

    def get(self) -> Optional[str]:
        if self._cleared:
            return None
        if self._value is not None:
            return self._value
        token = self._request.cookies.get(self.key)
        if token:
            return token
        auth_header = self._request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            return auth_header[7:] or None
        return None

    def set(self, token: str) -> None:
        self._value = token
        self._cleared = False
        self._response.set_cookie(
            key=self.key,
            value=token,
            httponly=True,
            samesite="strict",
            secure=self._secure,
            max_age=self._max_age,
            path="/",
        )

    def clear(self) -> None:
        self._value = None
        self._cleared = True
        self._response.delete_cookie(self.key, path="/", httponly=True, samesite="strict")
