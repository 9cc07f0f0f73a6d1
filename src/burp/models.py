"""Data models for burp."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_DOMAIN = "aur.archlinux.org"


@dataclass(frozen=True)
class CategoryEntry:
    """A package category known to the AUR."""

    name: str
    id: str


@dataclass(frozen=True)
class ConfigValues:
    """Values contributed by the config file. Absent keys stay None."""

    username: str | None = None
    password: str | None = None
    cookie_file: Path | None = None
    persist_cookies: bool = False


@dataclass(frozen=True)
class ConfigFile:
    """Result of looking for and reading the config file.

    path is None when no location could be determined. found is False when
    the file does not exist, in which case values is empty.
    """

    path: Path | None
    found: bool
    values: ConfigValues = field(default_factory=ConfigValues)


@dataclass(frozen=True)
class CliValues:
    """Values given on the command line. None means not given."""

    username: str | None = None
    password: str | None = None
    cookie_file: Path | None = None
    persist_cookies: bool = False
    domain: str | None = None
    category: str | None = None


@dataclass(frozen=True)
class EffectiveParameters:
    """Merged parameters for a single invocation.

    category_id is None for "no category", otherwise an id from the catalog.
    """

    domain: str = DEFAULT_DOMAIN
    username: str | None = None
    password: str | None = None
    cookie_file: Path | None = None
    persist_cookies: bool = False
    category_id: str | None = None


@dataclass(frozen=True)
class UploadOutcome:
    """Result of uploading one target."""

    path: Path
    success: bool
    error: str | None = None
    status: int = 0
