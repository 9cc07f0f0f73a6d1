"""Exception hierarchy for burp."""

from __future__ import annotations

from enum import Enum


class BurpError(Exception):
    """Base exception for all burp errors."""

    pass


class ConfigError(BurpError):
    """Raised when startup configuration cannot be resolved."""

    pass


class ConfigFileError(ConfigError):
    """Raised when the config file exists but cannot be read."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"failed to open {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidCategoryError(ConfigError):
    """Raised when a category name is not in the catalog.

    The valid_names attribute lists every accepted name in catalog order.
    """

    def __init__(self, name: str, valid_names: list[str]) -> None:
        super().__init__(f"invalid category {name}")
        self.name = name
        self.valid_names = valid_names


class LoginFailureKind(Enum):
    """Why a login attempt failed."""

    INSUFFICIENT_CREDENTIALS = "insufficient_credentials"
    ACCESS_DENIED = "access_denied"
    COOKIE_EXPIRED = "cookie_expired"
    KEY_NOT_FOUND = "key_not_found"
    COOKIE_REJECTED = "cookie_rejected"
    OTHER = "other"


class LoginError(BurpError):
    """Raised by a session client when a login attempt fails."""

    def __init__(self, kind: LoginFailureKind, detail: str | None = None) -> None:
        super().__init__(detail or kind.value)
        self.kind = kind
        self.detail = detail


class UploadError(BurpError):
    """Raised by a session client when a single upload fails.

    status is the non-zero code reported for this target.
    """

    def __init__(self, message: str, status: int = 1) -> None:
        super().__init__(message)
        self.status = status or 1
