# uiauto_appstore/install.py
"""
@file install.py
@brief Purchase checks, version lookup and installs driven from app pages.
"""

from __future__ import annotations
import re
from typing import Optional

from .config import TimeConfig
from .exceptions import AppNotPurchased, ElementNotFoundError
from .locator import Kind, SearchSpec
from .navigation import Navigator
from .session import StoreSession
from .utils.logging import get_logger

log = get_logger("install")

PURCHASED_BUTTON = re.compile(r"^(Open,|Install,|Installed,|Download,)")

# "Open," is the strict already-installed signal. When an install finishes
# the label is "Installed," on some OS versions and "Open," on others.
INSTALLED_BUTTON = re.compile(r"^Open,")
INSTALL_FINISHED_BUTTON = re.compile(r"^(Installed,|Open,)")

VERSION_NUMBER = re.compile(r"^[0-9]")


class Installer:
    """Purchase/install workflow for apps already bought with the Apple ID."""

    def __init__(self, session: StoreSession, navigator: Navigator):
        self.session = session
        self.navigator = navigator

    def purchased(self, app_name: str) -> bool:
        """
        Check whether an app was purchased.

        Uses the detail page when it is already showing, otherwise looks for
        the app's row in the Purchases list (which needs a signed-in user).
        """
        app = self.session.app
        if self.navigator.on_app_page(app_name, app):
            button = self.navigator.page_button(app_name, app)
            return PURCHASED_BUTTON.search(button.attribute("description") or "") is not None
        return self.navigator.row(app_name) is not None

    def app_installed(self, app_name: str) -> bool:
        """Check for an 'Open' action button on the app's detail page."""
        button = self.navigator.app_page_button(app_name)
        return INSTALLED_BUTTON.search(button.attribute("description") or "") is not None

    def latest_version(self, app_name: str) -> str:
        """
        Read the version from the detail page's "Version: " label and the
        numeric text next to it.
        """
        app = self.navigator.ensure_app_page(app_name)
        version_label = self.session.labels.version_label
        label = self.session.find(
            self.session.main_window(app),
            SearchSpec.of(Kind.STATIC_TEXT, value=version_label),
        )
        if label is None:
            raise ElementNotFoundError(f"'{version_label}' label", f"'{app_name}' app page")
        number = self.session.find(
            label.parent(),
            SearchSpec.of(Kind.STATIC_TEXT, value=VERSION_NUMBER),
        )
        if number is None:
            raise ElementNotFoundError("version number", f"'{app_name}' app page")
        return str(number.attribute("value"))

    def install(self, app_name: str, timeout: Optional[float] = None) -> bool:
        """
        Install a purchased app and wait for the install to finish.

        @param timeout Seconds to wait for the install (install_wait default)
        @return True if an install was performed, False if already installed
        @throws AppNotPurchased
        @throws TimeoutError
        """
        if not self.purchased(app_name):
            raise AppNotPurchased(app_name)
        if self.app_installed(app_name):
            log.info("'%s' is already installed", app_name)
            return False
        log.info("Installing '%s'", app_name)
        self.session.press(self.navigator.app_page_button(app_name), f"'{app_name}' install button")
        return self.wait_for_install(app_name, timeout)

    def wait_for_install(self, app_name: str, timeout: Optional[float] = None) -> bool:
        """
        Wait for the action button to flip to Installed/Open.

        @throws TimeoutError if it does not within timeout
        """
        app = self.navigator.ensure_app_page(app_name)
        outcome = self.session.wait_for(
            lambda: self.session.find(
                self.session.main_window(app),
                SearchSpec.of(Kind.WEB_AREA, description=app_name),
            ),
            SearchSpec.of(Kind.BUTTON, description=INSTALL_FINISHED_BUTTON),
            timeout=timeout,
            settings=TimeConfig.current().install_wait,
        )
        self.session.expect(outcome, f"'{app_name}' installation")
        log.info("'%s' installed in %.1fs", app_name, outcome.elapsed)
        return True
