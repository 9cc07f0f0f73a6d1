"""Tests for the login state machine."""

from __future__ import annotations

import pytest
from helpers import FakeSession

from burp.exceptions import LoginError, LoginFailureKind
from burp.login import (
    COOKIE_EXPIRED_WARNING,
    LoginCoordinator,
    LoginState,
    login_error_message,
)


def _error(kind: LoginFailureKind, detail: str | None = None) -> LoginError:
    return LoginError(kind, detail)


class TestCookieLogin:
    """Tests for the first, cookie based attempt."""

    def test_cookie_login_success_needs_one_attempt(self, fake_session: FakeSession) -> None:
        result = LoginCoordinator(fake_session).run()

        assert result.authenticated
        assert result.state is LoginState.AUTHENTICATED
        assert result.attempts == 1
        assert result.error is None
        assert fake_session.login_calls == [False]

    @pytest.mark.parametrize(
        "kind",
        [
            LoginFailureKind.ACCESS_DENIED,
            LoginFailureKind.INSUFFICIENT_CREDENTIALS,
            LoginFailureKind.COOKIE_REJECTED,
            LoginFailureKind.OTHER,
        ],
    )
    def test_terminal_failures_do_not_fall_back(self, kind: LoginFailureKind) -> None:
        session = FakeSession(login_results=[_error(kind)])

        result = LoginCoordinator(session).run()

        assert result.state is LoginState.FAILED
        assert result.attempts == 1
        assert result.kind is kind
        assert session.login_calls == [False]


class TestPasswordFallback:
    """Tests for falling back to password login."""

    def test_expired_cookie_warns_then_uses_password(self) -> None:
        session = FakeSession(
            login_results=[_error(LoginFailureKind.COOKIE_EXPIRED), None]
        )
        coordinator = LoginCoordinator(
            session, on_warning=lambda msg: session.events.append(("warning", msg))
        )

        result = coordinator.run()

        assert result.authenticated
        assert result.attempts == 2
        assert result.error is None
        assert session.events == [
            ("login", False),
            ("warning", COOKIE_EXPIRED_WARNING),
            ("login", True),
        ]

    def test_missing_cookie_falls_back_silently(self) -> None:
        warnings: list[str] = []
        session = FakeSession(
            login_results=[_error(LoginFailureKind.KEY_NOT_FOUND), None]
        )

        result = LoginCoordinator(session, on_warning=warnings.append).run()

        assert result.authenticated
        assert result.attempts == 2
        assert session.login_calls == [False, True]
        assert warnings == []

    def test_failed_fallback_carries_second_failure(self) -> None:
        session = FakeSession(
            login_results=[
                _error(LoginFailureKind.KEY_NOT_FOUND),
                _error(LoginFailureKind.ACCESS_DENIED),
            ]
        )

        result = LoginCoordinator(session).run()

        assert result.state is LoginState.FAILED
        assert result.attempts == 2
        assert result.kind is LoginFailureKind.ACCESS_DENIED

    def test_never_more_than_two_attempts(self) -> None:
        session = FakeSession(
            login_results=[
                _error(LoginFailureKind.COOKIE_EXPIRED),
                _error(LoginFailureKind.COOKIE_EXPIRED),
                None,
            ]
        )

        result = LoginCoordinator(session).run()

        assert result.state is LoginState.FAILED
        assert result.kind is LoginFailureKind.COOKIE_EXPIRED
        assert session.login_calls == [False, True]

    def test_run_resets_state(self) -> None:
        session = FakeSession(login_results=[_error(LoginFailureKind.ACCESS_DENIED)])
        coordinator = LoginCoordinator(session)

        assert not coordinator.run().authenticated
        result = coordinator.run()

        assert result.authenticated
        assert result.attempts == 1


class TestTransitions:
    """Tests for individual state transitions."""

    def test_unauthenticated_to_cookie_attempted(self) -> None:
        session = FakeSession(login_results=[_error(LoginFailureKind.KEY_NOT_FOUND)])
        coordinator = LoginCoordinator(session)

        assert coordinator.step() is LoginState.COOKIE_LOGIN_ATTEMPTED
        assert coordinator.error is not None
        assert coordinator.error.kind is LoginFailureKind.KEY_NOT_FOUND

    def test_password_attempted_is_failed(self, fake_session: FakeSession) -> None:
        coordinator = LoginCoordinator(fake_session)
        coordinator.state = LoginState.PASSWORD_LOGIN_ATTEMPTED

        assert coordinator.step() is LoginState.FAILED
        assert fake_session.login_calls == []

    @pytest.mark.parametrize("state", [LoginState.AUTHENTICATED, LoginState.FAILED])
    def test_terminal_states_do_not_move(
        self, fake_session: FakeSession, state: LoginState
    ) -> None:
        coordinator = LoginCoordinator(fake_session)
        coordinator.state = state

        assert coordinator.step() is state
        assert fake_session.login_calls == []


class TestLoginErrorMessage:
    """Tests for user facing login error text."""

    @pytest.mark.parametrize(
        ("kind", "message"),
        [
            (LoginFailureKind.INSUFFICIENT_CREDENTIALS, "insufficient credentials provided to login"),
            (LoginFailureKind.ACCESS_DENIED, "bad username or password"),
            (LoginFailureKind.COOKIE_EXPIRED, "required login cookie has expired"),
            (LoginFailureKind.COOKIE_REJECTED, "login cookie not accepted"),
        ],
    )
    def test_known_kinds(self, kind: LoginFailureKind, message: str) -> None:
        assert login_error_message(LoginError(kind), "aur.archlinux.org") == message

    def test_other_includes_domain_and_detail(self) -> None:
        error = LoginError(LoginFailureKind.OTHER, "Connection refused")
        assert (
            login_error_message(error, "aur.archlinux.org")
            == "failed to login to aur.archlinux.org: Connection refused"
        )
