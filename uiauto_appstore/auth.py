# uiauto_appstore/auth.py
"""
@file auth.py
@brief Sign-in state detection, sign in and sign out.

Credentials are only ever written into the sheet's fields. They are not
logged, stored or read back.
"""

from __future__ import annotations
import re
from typing import Optional

from .config import TimeConfig
from .exceptions import CredentialsIncomplete, ElementNotFoundError
from .interfaces import INode
from .locator import Kind, SearchSpec
from .navigation import Navigator
from .session import StoreSession
from .utils.logging import get_logger

log = get_logger("auth")


class Authentication:
    """Apple ID session management through the Store menu."""

    def __init__(self, session: StoreSession, navigator: Navigator):
        self.session = session
        self.navigator = navigator
        self.labels = session.labels
        self._account_re = re.compile(r"^" + re.escape(self.labels.account_prefix) + r"\((.*)\)")

    def signed_in(self) -> bool:
        """Check whether anybody is signed in. No side effects."""
        return self.navigator.signed_in()

    def current_user(self) -> Optional[str]:
        """Apple ID shown in the account menu item, or None when signed out."""
        if not self.signed_in():
            return None
        item = self.navigator.account_menu_item()
        if item is None:
            return None
        match = self._account_re.match(item.attribute("title") or "")
        return match.group(1) if match else None

    def sign_out(self) -> bool:
        """
        Sign out if somebody is signed in.

        @return True if Sign Out was selected, False if nobody was signed in
        """
        if not self.signed_in():
            return False
        log.info("Signing out of the App Store")
        self.session.select_menu_item(self.labels.store_menu, self.labels.sign_out)
        return True

    def sign_in(self, username: str, password: str) -> bool:
        """
        Sign in as username, replacing any other signed-in user.

        @return True if a sign in was performed, False if username was
                already signed in
        @throws CredentialsIncomplete if username or password is empty
        @throws TimeoutError if the sheet or the confirmation does not appear
        """
        if self.signed_in() and self.current_user() == username:
            return False
        if not username or not password:
            raise CredentialsIncomplete()

        self.sign_out()
        log.info("Signing in to the App Store as %s", username)
        self.navigator.ensure_sign_in_sheet()
        self.session.set_value(self.username_field(), username, "Apple ID field")
        self.session.set_value(self.password_field(), password, "Password field")
        self.session.press(self.sign_in_button(), "Sign In button")
        self.wait_for_sign_in()
        return True

    def wait_for_sign_in(self) -> INode:
        """
        Wait for Store > Sign Out to show up after submitting credentials.

        @throws TimeoutError
        """
        outcome = self.session.wait_for(
            lambda: self.session.store_menu(),
            SearchSpec.of(Kind.MENU_ITEM, title=self.labels.sign_out),
            settings=TimeConfig.current().sign_in,
        )
        return self.session.expect(outcome, "sign in")

    # --- Sign In sheet fields ---

    def _sheet_element(self, spec: SearchSpec, what: str) -> INode:
        element = self.session.find(self.navigator.sign_in_sheet(), spec)
        if element is None:
            raise ElementNotFoundError(what, "Sign In sheet")
        return element

    def sign_in_button(self) -> INode:
        return self._sheet_element(
            SearchSpec.of(Kind.BUTTON, title=self.labels.sign_in_button),
            "Sign In button",
        )

    def username_field(self) -> INode:
        return self._sheet_element(
            SearchSpec.of(
                Kind.TEXT_FIELD,
                title_ui_element=SearchSpec.of(Kind.STATIC_TEXT, value=self.labels.apple_id_label),
            ),
            "Apple ID field",
        )

    def password_field(self) -> INode:
        return self._sheet_element(
            SearchSpec.of(
                Kind.SECURE_TEXT_FIELD,
                title_ui_element=SearchSpec.of(Kind.STATIC_TEXT, value=self.labels.password_label),
            ),
            "Password field",
        )
