"""Tests for credential verification, the user directory and token stores."""

from unittest.mock import MagicMock

from ioc_console.auth.credentials import (
    DEMO_USERS,
    StaticCredentialVerifier,
    UserDirectory,
)
from ioc_console.auth.token_store import CookieTokenStore, MemoryTokenStore


class TestStaticCredentialVerifier:
    def test_verify(self):
        verifier = StaticCredentialVerifier({"alice": "s3cret"}, rounds=4)
        assert verifier.verify("alice", "s3cret")
        assert not verifier.verify("alice", "wrong")
        assert not verifier.verify("bob", "s3cret")

    def test_passwords_are_not_kept_in_plaintext(self):
        verifier = StaticCredentialVerifier({"alice": "s3cret"}, rounds=4)
        assert "s3cret" not in verifier._hashes.values()


class TestUserDirectory:
    def test_lookups(self):
        directory = UserDirectory(DEMO_USERS)
        assert len(directory) == 3
        assert directory.get_by_id("1").username == "admin"
        assert directory.get_by_username("analyst").id == "2"
        assert directory.get_by_id("42") is None
        assert directory.get_by_username("nobody") is None


class TestMemoryTokenStore:
    def test_set_get_clear(self):
        store = MemoryTokenStore()
        assert store.get() is None
        store.set("abc")
        assert store.get() == "abc"
        store.clear()
        assert store.get() is None
        store.clear()


def _make_request(cookies=None, headers=None):
    request = MagicMock()
    request.cookies = cookies or {}
    request.headers = headers or {}
    return request


class TestCookieTokenStore:
    def test_reads_cookie_first(self):
        request = _make_request(
            cookies={"ioc_console_token": "from-cookie"},
            headers={"Authorization": "Bearer from-header"},
        )
        store = CookieTokenStore(request, MagicMock())
        assert store.get() == "from-cookie"

    def test_falls_back_to_bearer_header(self):
        request = _make_request(headers={"Authorization": "Bearer from-header"})
        assert CookieTokenStore(request, MagicMock()).get() == "from-header"

    def test_ignores_other_auth_schemes(self):
        request = _make_request(headers={"Authorization": "Basic abc"})
        assert CookieTokenStore(request, MagicMock()).get() is None

    def test_set_writes_httponly_cookie(self):
        response = MagicMock()
        store = CookieTokenStore(_make_request(), response, secure=True)
        store.set("tok")
        assert store.get() == "tok"
        kwargs = response.set_cookie.call_args.kwargs
        assert kwargs["value"] == "tok"
        assert kwargs["httponly"] is True
        assert kwargs["secure"] is True

    def test_clear_hides_request_token(self):
        response = MagicMock()
        request = _make_request(cookies={"ioc_console_token": "old"})
        store = CookieTokenStore(request, response)
        store.clear()
        assert store.get() is None
        response.delete_cookie.assert_called_once()
