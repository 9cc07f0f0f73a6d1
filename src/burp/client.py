"""AurClient for logging in to the AUR and submitting source packages."""

from __future__ import annotations

import logging
import re
from http.cookiejar import Cookie, LoadError, MozillaCookieJar
from pathlib import Path
from typing import Any, Protocol

import httpx
from bs4 import BeautifulSoup

from burp.categories import NO_CATEGORY
from burp.exceptions import LoginError, LoginFailureKind, UploadError
from burp.models import DEFAULT_DOMAIN

logger = logging.getLogger(__name__)

SESSION_COOKIE = "AURSID"
DEFAULT_USER_AGENT = "burp"
DEFAULT_TIMEOUT = 30.0

_LOGOUT_HREF = re.compile(r"/logout/?$")


class SessionClient(Protocol):
    """What the login and upload logic needs from a session."""

    def login(self, use_credentials: bool) -> None:
        """Authenticate, raising LoginError on failure."""
        ...

    def upload(self, path: Path, category_id: str | None) -> None:
        """Submit one package, raising UploadError on failure."""
        ...

    def close(self) -> None:
        """Release the session's network resources."""
        ...


class AurClient:
    """Session against an AUR instance.

    Supports both context manager and manual close patterns.

    Example:
        with AurClient(username="alice", password="secret") as client:
            client.login(use_credentials=True)
            client.upload(Path("foo-1.0-1.src.tar.gz"), None)
    """

    def __init__(
        self,
        domain: str = DEFAULT_DOMAIN,
        *,
        username: str | None = None,
        password: str | None = None,
        cookie_file: Path | str | None = None,
        persist_cookies: bool = False,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            domain: Host name of the AUR instance
            username: Account name for password login
            password: Account password for password login
            cookie_file: Cookie file to reuse and, if persisting, to write
            persist_cookies: Save the session cookie after password login
            user_agent: User-Agent header sent with every request
            transport: Optional httpx transport, mainly for tests
        """
        self.domain = domain
        self._username = username
        self._password = password
        self._cookie_file = Path(cookie_file) if cookie_file else None
        self._persist_cookies = persist_cookies
        self._jar = MozillaCookieJar(str(self._cookie_file) if self._cookie_file else None)
        self._client = httpx.Client(
            base_url=f"https://{domain}",
            cookies=self._jar,
            headers={"User-Agent": user_agent},
            timeout=DEFAULT_TIMEOUT,
            follow_redirects=False,
            transport=transport,
        )
        self._authenticated_by: str | None = None

    def __enter__(self) -> AurClient:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit context manager."""
        self.close()

    @property
    def is_authenticated(self) -> bool:
        """Check if a login attempt has succeeded."""
        return self._authenticated_by is not None

    def _session_cookie(self) -> Cookie | None:
        """Find the session cookie for our domain, expired or not."""
        for cookie in self._jar:
            if cookie.name == SESSION_COOKIE and cookie.domain.lstrip(".") == self.domain:
                return cookie
        return None

    def _drop_session_cookie(self) -> None:
        for cookie in list(self._jar):
            if cookie.name == SESSION_COOKIE:
                self._jar.clear(cookie.domain, cookie.path, cookie.name)

    def login(self, use_credentials: bool) -> None:
        """Login to the AUR.

        Args:
            use_credentials: If True, login with username and password,
                otherwise reuse the session cookie from the cookie file

        Raises:
            LoginError: If login fails; kind tells why
        """
        if use_credentials:
            self._login_with_password()
            self._authenticated_by = "password"
        else:
            self._login_with_cookie()
            self._authenticated_by = "cookie"

    def _login_with_cookie(self) -> None:
        if self._cookie_file is None:
            raise LoginError(LoginFailureKind.KEY_NOT_FOUND, "no cookie file configured")

        try:
            self._jar.load(ignore_discard=True, ignore_expires=True)
        except FileNotFoundError as e:
            raise LoginError(
                LoginFailureKind.KEY_NOT_FOUND, f"cookie file {self._cookie_file} not found"
            ) from e
        except LoadError as e:
            logger.warning(f"Ignoring unreadable cookie file {self._cookie_file}: {e}")
            raise LoginError(LoginFailureKind.KEY_NOT_FOUND, str(e)) from e
        except OSError as e:
            raise LoginError(LoginFailureKind.OTHER, e.strerror or str(e)) from e

        cookie = self._session_cookie()
        if cookie is None or not cookie.value:
            raise LoginError(LoginFailureKind.KEY_NOT_FOUND, "no session cookie found")
        if cookie.is_expired():
            raise LoginError(LoginFailureKind.COOKIE_EXPIRED)

        try:
            response = self._client.get("/")
        except httpx.HTTPError as e:
            raise LoginError(LoginFailureKind.OTHER, str(e)) from e

        if not _is_logged_in(response.text):
            raise LoginError(LoginFailureKind.COOKIE_REJECTED)
        logger.info(f"Logged in to {self.domain} using cookie from {self._cookie_file}")

    def _login_with_password(self) -> None:
        if not self._username or not self._password:
            raise LoginError(LoginFailureKind.INSUFFICIENT_CREDENTIALS)

        self._drop_session_cookie()
        form = {"user": self._username, "passwd": self._password}
        if self._persist_cookies:
            form["remember_me"] = "on"

        try:
            response = self._client.post("/login", data=form)
        except httpx.HTTPError as e:
            raise LoginError(LoginFailureKind.OTHER, str(e)) from e

        if response.status_code >= 500:
            raise LoginError(
                LoginFailureKind.OTHER, f"server returned HTTP {response.status_code}"
            )

        cookie = self._session_cookie()
        if cookie is None or not cookie.value or cookie.is_expired():
            raise LoginError(LoginFailureKind.ACCESS_DENIED)

        logger.info(f"Logged in to {self.domain} as {self._username}")
        if self._persist_cookies:
            self._save_cookies()

    def _save_cookies(self) -> None:
        """Write the cookie jar to the cookie file."""
        if self._cookie_file is None:
            logger.warning("Cannot persist cookies without a cookie file")
            return
        try:
            self._cookie_file.parent.mkdir(parents=True, exist_ok=True)
            self._jar.save(ignore_discard=True)
            logger.info(f"Saved cookies to {self._cookie_file}")
        except OSError as e:
            logger.warning(f"Failed to save cookies to {self._cookie_file}: {e}")

    def upload(self, path: Path | str, category_id: str | None) -> None:
        """Submit a source package.

        Args:
            path: Source package archive to upload
            category_id: Catalog id, or None for no category

        Raises:
            UploadError: If the file cannot be read or the AUR rejects it
        """
        path = Path(path)
        cookie = self._session_cookie()
        if not self.is_authenticated or cookie is None:
            raise UploadError("not logged in")

        form = {
            "token": cookie.value or "",
            "pkgsubmit": "1",
            "category": category_id or NO_CATEGORY,
        }
        try:
            with path.open("rb") as fh:
                response = self._client.post(
                    "/submit/",
                    data=form,
                    files={"pfile": (path.name, fh, "application/octet-stream")},
                )
        except httpx.HTTPError as e:
            raise UploadError(str(e)) from e
        except OSError as e:
            raise UploadError(e.strerror or str(e), status=e.errno or 1) from e

        if response.is_redirect:
            logger.info(f"Uploaded {path} to {self.domain}")
            return

        raise UploadError(_extract_error(response))

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()


def _is_logged_in(page: str) -> bool:
    """A logged in page links to the logout form."""
    soup = BeautifulSoup(page, "html.parser")
    return soup.find("a", href=_LOGOUT_HREF) is not None


def _extract_error(response: httpx.Response) -> str:
    """Pull the first error message out of a rejected submission."""
    soup = BeautifulSoup(response.text, "html.parser")
    item = soup.select_one("ul.errorlist li")
    if item is not None:
        message = item.get_text(" ", strip=True)
        if message:
            return message
    if response.is_error:
        return f"server returned HTTP {response.status_code} {response.reason_phrase}".rstrip()
    return "upload was not accepted by the server"
