"""Command-line interface for burp."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from burp import __version__, categories
from burp.client import AurClient
from burp.config import find_config_file, read_config_file, resolve
from burp.exceptions import ConfigError, InvalidCategoryError
from burp.login import LoginCoordinator, login_error_message
from burp.models import CliValues, UploadOutcome
from burp.uploader import UploadOrchestrator

EXIT_FAILURE = 1

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _configure_logging(verbose: int) -> None:
    """Route log records to stderr; -v for INFO, -vv for DEBUG."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _error(message: str) -> None:
    click.echo(click.style("error: ", fg="red") + message, err=True)


def _usage_categories() -> None:
    click.echo("Valid categories:", err=True)
    for name in categories.category_names():
        click.echo(f"\t{name}", err=True)


def _report(outcome: UploadOutcome) -> None:
    if outcome.success:
        click.echo(click.style("success: ", fg="green") + f"uploaded {outcome.path}")
    else:
        click.echo(
            click.style("failed to upload ", fg="red") + f"{outcome.path}: {outcome.error}",
            err=True,
        )


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("targets", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--user", "-u", "username", help="AUR login username.")
@click.option("--password", "-p", help="AUR login password.")
@click.option(
    "--category",
    "-c",
    metavar="CAT",
    help=(
        "Assign the uploaded package with category CAT. This will default to "
        "the current category for pre-existing packages and 'None' for new "
        "packages. -c help will give a list of valid categories."
    ),
)
@click.option(
    "--cookies",
    "-C",
    "cookie_file",
    metavar="FILE",
    type=click.Path(dir_okay=False, path_type=Path),
    help=(
        "Use FILE to store cookies rather than a temporary in-memory jar. "
        "Useful with the -k option."
    ),
)
@click.option(
    "--keep-cookies",
    "-k",
    is_flag=True,
    help=(
        "Cookies will be persistent and reused for logins. If you specify this "
        "option, you must also provide a path to a cookie file."
    ),
)
@click.option("--domain", hidden=True, help="Domain of the AUR (default: aur.archlinux.org)")
@click.option("--verbose", "-v", count=True, help="Be more verbose. Pass twice for debug info.")
@click.version_option(__version__, prog_name="burp")
def main(
    targets: tuple[Path, ...],
    username: str | None,
    password: str | None,
    category: str | None,
    cookie_file: Path | None,
    keep_cookies: bool,
    domain: str | None,
    verbose: int,
) -> None:
    """Upload source packages to the AUR.

    TARGETS: One or more source package archives to upload.

    burp also honors a config file, ~/.config/burp/burp.conf.

    Examples:

        burp foo-1.0-1.src.tar.gz

        burp -c devel -u alice *.src.tar.gz

        burp -C ~/.cache/burp/cookies -k foo-1.0-1.src.tar.gz
    """
    _configure_logging(verbose)

    try:
        config = read_config_file(find_config_file())
        params = resolve(
            config.values,
            CliValues(
                username=username,
                password=password,
                cookie_file=cookie_file,
                persist_cookies=keep_cookies,
                domain=domain,
                category=category,
            ),
        )
    except InvalidCategoryError as e:
        _error(str(e))
        _usage_categories()
        sys.exit(EXIT_FAILURE)
    except ConfigError as e:
        _error(str(e))
        sys.exit(EXIT_FAILURE)

    with AurClient(
        params.domain,
        username=params.username,
        password=params.password,
        cookie_file=params.cookie_file,
        persist_cookies=params.persist_cookies,
        user_agent=f"burp/{__version__}",
    ) as client:
        login = LoginCoordinator(
            client,
            on_warning=lambda msg: click.echo(
                click.style("warning: ", fg="yellow") + msg, err=True
            ),
        ).run()
        if not login.authenticated:
            if login.error is not None:
                _error(login_error_message(login.error, params.domain))
            else:
                _error(f"failed to login to {params.domain}")
            sys.exit(EXIT_FAILURE)

        result = UploadOrchestrator(
            client, params.category_id, on_outcome=_report
        ).run(targets)

    sys.exit(result.exit_status)


if __name__ == "__main__":
    main()
