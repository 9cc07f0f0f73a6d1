"""burp - upload source packages to the AUR.

Example usage:
    from burp import AurClient, LoginCoordinator, UploadOrchestrator

    with AurClient(username="alice", password="secret") as client:
        login = LoginCoordinator(client).run()
        if login.authenticated:
            result = UploadOrchestrator(client, "3").run(["foo-1.0-1.src.tar.gz"])
"""

from burp.categories import CATEGORIES, NO_CATEGORY, category_names, validate
from burp.client import AurClient, SessionClient
from burp.exceptions import (
    BurpError,
    ConfigError,
    ConfigFileError,
    InvalidCategoryError,
    LoginError,
    LoginFailureKind,
    UploadError,
)
from burp.login import LoginCoordinator, LoginResult, LoginState
from burp.models import CategoryEntry, EffectiveParameters, UploadOutcome
from burp.uploader import BatchResult, UploadOrchestrator

__version__ = "5.0.0"

__all__ = [
    # Client
    "AurClient",
    "SessionClient",
    # Orchestration
    "LoginCoordinator",
    "LoginResult",
    "LoginState",
    "UploadOrchestrator",
    "BatchResult",
    # Categories
    "CATEGORIES",
    "NO_CATEGORY",
    "category_names",
    "validate",
    # Models
    "CategoryEntry",
    "EffectiveParameters",
    "UploadOutcome",
    # Exceptions
    "BurpError",
    "ConfigError",
    "ConfigFileError",
    "InvalidCategoryError",
    "LoginError",
    "LoginFailureKind",
    "UploadError",
]
