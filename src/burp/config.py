"""Config file handling and parameter resolution.

The config file is line oriented ``Key = Value`` text, read from
``$XDG_CONFIG_HOME/burp/burp.conf`` or ``~/.config/burp/burp.conf``::

    # comments and blank lines are ignored
    User = alice
    Password = secret
    Cookies = ~/.cache/burp/cookies
    Persist

Values given on the command line always win over the config file.
"""

from __future__ import annotations

import logging
import os
import shlex
from collections.abc import Mapping
from pathlib import Path
from typing import TypeVar

from burp import categories
from burp.exceptions import ConfigFileError, InvalidCategoryError
from burp.models import (
    DEFAULT_DOMAIN,
    CliValues,
    ConfigFile,
    ConfigValues,
    EffectiveParameters,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

CONFIG_SUBPATH = Path("burp") / "burp.conf"


def find_config_file(environ: Mapping[str, str] | None = None) -> Path | None:
    """Locate the config file, or return None if no base directory is known."""
    env = os.environ if environ is None else environ

    xdg = env.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / CONFIG_SUBPATH

    home = env.get("HOME")
    if home:
        return Path(home) / ".config" / CONFIG_SUBPATH

    return None


def shell_expand(value: str) -> str | None:
    """Expand ``~`` and environment variables the way a shell would.

    Command substitution is refused. Returns None when the value cannot be
    expanded.
    """
    if "`" in value or "$(" in value:
        return None
    try:
        words = shlex.split(value)
    except ValueError:
        return None
    if not words:
        return None
    return os.path.expandvars(os.path.expanduser(words[0]))


def parse_config(text: str) -> ConfigValues:
    """Parse config file text into the values it provides."""
    values: dict[str, object] = {}

    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        key, _, value = line.partition("=")
        key = key.strip()
        value = value.strip()

        if key == "User":
            values["username"] = value
        elif key == "Password":
            values["password"] = value
        elif key == "Cookies":
            expanded = shell_expand(value)
            if expanded is None:
                logger.warning(f"line {lineno}: failed to expand cookie path {value!r}, ignoring")
            else:
                values["cookie_file"] = Path(expanded)
        elif key == "Persist":
            values["persist_cookies"] = True

    return ConfigValues(**values)  # type: ignore[arg-type]


def read_config_file(path: Path | None) -> ConfigFile:
    """Read the config file at path.

    A missing file is not an error and yields empty values.

    Raises:
        ConfigFileError: If the file exists but cannot be read
    """
    if path is None:
        logger.warning("unable to determine location of config file. Skipping.")
        return ConfigFile(path=None, found=False)

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug(f"No config file at {path}")
        return ConfigFile(path=path, found=False)
    except OSError as e:
        raise ConfigFileError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise ConfigFileError(path, "invalid UTF-8") from e

    logger.debug(f"Read config file {path}")
    return ConfigFile(path=path, found=True, values=parse_config(text))


def resolve(config: ConfigValues, cli: CliValues) -> EffectiveParameters:
    """Merge config file values with command line values.

    Command line values win, then the config file, then defaults.

    Raises:
        InvalidCategoryError: If the command line category is not in the catalog
    """
    category_id = None
    if cli.category is not None:
        category_id = categories.validate(cli.category)
        if category_id is None:
            raise InvalidCategoryError(cli.category, categories.category_names())

    return EffectiveParameters(
        domain=cli.domain or DEFAULT_DOMAIN,
        username=_first(cli.username, config.username),
        password=_first(cli.password, config.password),
        cookie_file=_first(cli.cookie_file, config.cookie_file),
        persist_cookies=cli.persist_cookies or config.persist_cookies,
        category_id=category_id,
    )


def _first(*candidates: T | None) -> T | None:
    for value in candidates:
        if value is not None:
            return value
    return None
