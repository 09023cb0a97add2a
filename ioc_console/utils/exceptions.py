"""
IoC Console exceptions

Every failure raised by the core services derives from ``IoCConsoleError``.
The HTTP layer maps each class to a status code in
``middleware/error_handler.py``; nothing here knows about HTTP.
"""


class IoCConsoleError(Exception):
    """Base exception for all IoC Console errors."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class ValidationError(IoCConsoleError):
    """One or more fields failed validation.

    ``errors`` maps each offending field name to a human-readable message so
    callers can show the message next to the matching input.
    """

    def __init__(self, errors: dict[str, str], message: str = "Validation failed"):
        self.errors = dict(errors)
        super().__init__(message)

    def __str__(self) -> str:
        fields = "; ".join(f"{k}: {v}" for k, v in self.errors.items())
        return f"{self.message} ({fields})" if fields else self.message


class AuthenticationError(IoCConsoleError):
    """Credentials were rejected. The message never says which part was wrong."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class NotFoundError(IoCConsoleError):
    """The requested record does not exist."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} '{identifier}' not found")


class UnsupportedFormatError(IoCConsoleError):
    """Export was requested in a format outside the supported set."""

    def __init__(self, fmt: str, supported: tuple[str, ...] = ()):
        self.format = fmt
        self.supported = supported
        allowed = ", ".join(supported)
        super().__init__(
            f"Unsupported export format: {fmt!r}" + (f" (expected one of {allowed})" if allowed else "")
        )
