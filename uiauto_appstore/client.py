# uiauto_appstore/client.py
"""
@file client.py
@brief Caller-facing surface: one object per storefront session.
"""

from __future__ import annotations
import logging
from typing import Optional

from .auth import Authentication
from .context import tracked_action
from .install import Installer
from .interfaces import IAccessibilityProvider, INode, IProcessProbe
from .navigation import Navigator
from .repository import Repository
from .session import StoreSession


class AppStore:
    """
    High-level App Store operations.

    Every method blocks until done or until its wait budget is spent, and
    raises the typed failures from exceptions.py. All operations can be
    re-run after a failure.
    """

    def __init__(self, session: StoreSession):
        self.session = session
        self.navigator = Navigator(session)
        self.auth = Authentication(session, self.navigator)
        self.installer = Installer(session, self.navigator)

    @classmethod
    def from_repository(
        cls,
        repo: Optional[Repository] = None,
        provider: Optional[IAccessibilityProvider] = None,
        probe: Optional[IProcessProbe] = None,
        logger: Optional[logging.Logger] = None,
    ) -> AppStore:
        """
        Build a client from configuration.

        @param provider Accessibility provider (macOS AXProvider when None)
        """
        repo = repo or Repository()
        if provider is None:
            from .ax import AXProvider

            provider = AXProvider()
        session = StoreSession(
            provider,
            app_config=repo.app,
            labels=repo.labels,
            probe=probe,
            logger=logger,
        )
        return cls(session)

    @tracked_action("open")
    def open(self, username: Optional[str] = None, password: Optional[str] = None) -> INode:
        """Launch or attach to the storefront, signing in when credentials are given."""
        app = self.session.acquire()
        if username or password:
            self.auth.sign_in(username or "", password or "")
        return app

    @tracked_action("install")
    def install(
        self,
        app_name: str,
        timeout: Optional[float] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> bool:
        """
        Install a purchased app.

        @return True if installed now, False if it already was
        """
        if username or password:
            self.auth.sign_in(username or "", password or "")
        return self.installer.install(app_name, timeout)

    @tracked_action("purchased")
    def purchased(self, app_name: str) -> bool:
        return self.installer.purchased(app_name)

    @tracked_action("installed")
    def installed(self, app_name: str) -> bool:
        return self.installer.app_installed(app_name)

    @tracked_action("latest_version")
    def latest_version(self, app_name: str) -> str:
        return self.installer.latest_version(app_name)

    @tracked_action("sign_in")
    def sign_in(self, username: str, password: str) -> bool:
        return self.auth.sign_in(username, password)

    @tracked_action("sign_out")
    def sign_out(self) -> bool:
        return self.auth.sign_out()

    def signed_in(self) -> bool:
        return self.auth.signed_in()

    def current_user(self) -> Optional[str]:
        return self.auth.current_user()

    @tracked_action("quit")
    def quit(self) -> bool:
        return self.session.terminate()

    def running(self) -> bool:
        return self.session.running()
