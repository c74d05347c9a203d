# uiauto_appstore/__init__.py
"""
UIAuto App Store - Mac App Store automation through the accessibility tree.

This package provides:
- AppStore: install, purchase/version queries, sign in/out, quit
- StoreSession: attach/launch with readiness checks
- Locator / SearchSpec: declarative element search
- Waits: bounded polling returning WaitOutcome
- Repository: optional YAML configuration (app identity, labels, timeouts)
- Exceptions: typed failures

The macOS adapter (ax.py) is imported on demand so the engine can be used
with any IAccessibilityProvider implementation.
"""

from uiauto_appstore.client import AppStore
from uiauto_appstore.config import TimeConfig, TimeoutSettings
from uiauto_appstore.exceptions import (
    AppNotPurchased,
    AppStoreError,
    ConfigError,
    CredentialsIncomplete,
    ElementNotFoundError,
    TimeoutError,
    UserNotSignedIn,
)
from uiauto_appstore.interfaces import IAccessibilityProvider, ILocator, INode, IProcessProbe
from uiauto_appstore.locator import Kind, Locator, SearchSpec, prefix
from uiauto_appstore.process import (
    PsutilProcessProbe,
    controlling_application_name,
    controlling_application_pid,
)
from uiauto_appstore.repository import AppConfig, Labels, Repository
from uiauto_appstore.session import StoreSession
from uiauto_appstore.waits import WaitOutcome, WaitStatus, poll, wait_for

__version__ = "1.0.0"

__all__ = [
    "AppStore",
    "StoreSession",
    "Repository",
    "AppConfig",
    "Labels",
    "TimeConfig",
    "TimeoutSettings",
    "Kind",
    "Locator",
    "SearchSpec",
    "prefix",
    "WaitOutcome",
    "WaitStatus",
    "poll",
    "wait_for",
    "PsutilProcessProbe",
    "controlling_application_name",
    "controlling_application_pid",
    "INode",
    "ILocator",
    "IAccessibilityProvider",
    "IProcessProbe",
    "AppStoreError",
    "ConfigError",
    "TimeoutError",
    "AppNotPurchased",
    "UserNotSignedIn",
    "CredentialsIncomplete",
    "ElementNotFoundError",
]
