"""Login state machine: try the stored cookie first, then the password."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from burp.client import SessionClient
from burp.exceptions import LoginError, LoginFailureKind

logger = logging.getLogger(__name__)

COOKIE_EXPIRED_WARNING = "Your cookie has expired -- using password login"

# Cookie login failures that fall back to password login.
FALLBACK_KINDS = frozenset({LoginFailureKind.COOKIE_EXPIRED, LoginFailureKind.KEY_NOT_FOUND})

_MESSAGES = {
    LoginFailureKind.INSUFFICIENT_CREDENTIALS: "insufficient credentials provided to login",
    LoginFailureKind.ACCESS_DENIED: "bad username or password",
    LoginFailureKind.COOKIE_EXPIRED: "required login cookie has expired",
    LoginFailureKind.COOKIE_REJECTED: "login cookie not accepted",
}


class LoginState(Enum):
    """States of a single login run."""

    UNAUTHENTICATED = "unauthenticated"
    COOKIE_LOGIN_ATTEMPTED = "cookie_login_attempted"
    PASSWORD_LOGIN_ATTEMPTED = "password_login_attempted"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


TERMINAL_STATES = frozenset({LoginState.AUTHENTICATED, LoginState.FAILED})


@dataclass(frozen=True)
class LoginResult:
    """How a login run ended."""

    state: LoginState
    attempts: int
    error: LoginError | None = None

    @property
    def authenticated(self) -> bool:
        return self.state is LoginState.AUTHENTICATED

    @property
    def kind(self) -> LoginFailureKind | None:
        return self.error.kind if self.error else None


def login_error_message(error: LoginError, domain: str) -> str:
    """Text shown to the user for a failed login."""
    message = _MESSAGES.get(error.kind)
    if message is not None:
        return message
    return f"failed to login to {domain}: {error.detail or error.kind.value}"


class LoginCoordinator:
    """Drive a SessionClient through cookie login with password fallback.

    At most two login calls are made per run. Only an expired or missing
    cookie leads to the password attempt; every other failure is final.
    """

    def __init__(
        self,
        session: SessionClient,
        *,
        on_warning: Callable[[str], None] | None = None,
    ) -> None:
        self._session = session
        self._on_warning = on_warning
        self.state = LoginState.UNAUTHENTICATED
        self.attempts = 0
        self.error: LoginError | None = None

    def run(self) -> LoginResult:
        """Run the state machine to a terminal state."""
        self.state = LoginState.UNAUTHENTICATED
        self.attempts = 0
        self.error = None

        while self.state not in TERMINAL_STATES:
            self.state = self.step()
            logger.debug(f"Login state -> {self.state.value}")

        return LoginResult(state=self.state, attempts=self.attempts, error=self.error)

    def step(self) -> LoginState:
        """Perform one transition from the current state and return the next."""
        if self.state is LoginState.UNAUTHENTICATED:
            if self._attempt(use_credentials=False):
                return LoginState.AUTHENTICATED
            return LoginState.COOKIE_LOGIN_ATTEMPTED

        if self.state is LoginState.COOKIE_LOGIN_ATTEMPTED:
            if self.error is None or self.error.kind not in FALLBACK_KINDS:
                return LoginState.FAILED
            if self.error.kind is LoginFailureKind.COOKIE_EXPIRED:
                self._warn(COOKIE_EXPIRED_WARNING)
            if self._attempt(use_credentials=True):
                return LoginState.AUTHENTICATED
            return LoginState.PASSWORD_LOGIN_ATTEMPTED

        if self.state is LoginState.PASSWORD_LOGIN_ATTEMPTED:
            return LoginState.FAILED

        return self.state

    def _attempt(self, *, use_credentials: bool) -> bool:
        self.attempts += 1
        method = "password" if use_credentials else "cookie"
        try:
            self._session.login(use_credentials)
        except LoginError as e:
            logger.info(f"{method} login failed: {e.kind.value}")
            self.error = e
            return False
        self.error = None
        return True

    def _warn(self, message: str) -> None:
        logger.warning(message)
        if self._on_warning is not None:
            self._on_warning(message)
