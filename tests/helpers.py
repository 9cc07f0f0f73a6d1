"""Shared test helpers for burp tests."""

from __future__ import annotations

from pathlib import Path

from burp.exceptions import LoginError, UploadError


class FakeSession:
    """Scripted SessionClient.

    login_results is consumed one entry per login call: None succeeds, a
    LoginError is raised. upload_errors maps a file name to the UploadError
    raised when that file is uploaded.
    """

    def __init__(
        self,
        login_results: list[LoginError | None] | None = None,
        upload_errors: dict[str, UploadError] | None = None,
    ) -> None:
        self.login_results = list(login_results or [])
        self.upload_errors = upload_errors or {}
        self.events: list[tuple[str, object]] = []
        self.login_calls: list[bool] = []
        self.upload_calls: list[tuple[Path, str | None]] = []

    def login(self, use_credentials: bool) -> None:
        self.login_calls.append(use_credentials)
        self.events.append(("login", use_credentials))
        result = self.login_results.pop(0) if self.login_results else None
        if result is not None:
            raise result

    def upload(self, path: Path, category_id: str | None) -> None:
        self.upload_calls.append((path, category_id))
        self.events.append(("upload", path))
        error = self.upload_errors.get(Path(path).name)
        if error is not None:
            raise error

    def close(self) -> None:
        self.events.append(("close", None))


def write_cookie_file(
    path: Path,
    value: str = "sid123",
    expires: int = 4102444800,
    domain: str = "aur.archlinux.org",
) -> Path:
    """Write a Netscape format cookie file holding one session cookie."""
    path.write_text(
        "# Netscape HTTP Cookie File\n"
        f"{domain}\tFALSE\t/\tTRUE\t{expires}\tAURSID\t{value}\n"
    )
    return path
