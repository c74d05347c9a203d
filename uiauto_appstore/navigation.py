# uiauto_appstore/navigation.py
"""
@file navigation.py
@brief Idempotent "ensure we are at page X" operations.

Location is never tracked internally: every operation inspects the live UI
first and only navigates when it is not already where it needs to be.
"""

from __future__ import annotations
import re
from typing import Optional

from .config import TimeConfig
from .exceptions import AppNotPurchased, ElementNotFoundError, UserNotSignedIn
from .interfaces import INode
from .locator import Kind, SearchSpec, prefix
from .session import StoreSession

# Any of these on the action button means an app detail page has rendered
APP_PAGE_BUTTON = re.compile(r"^(Install,|Download,|Installed,|Open,)")


class Navigator:
    """Navigation between the storefront pages the workflows need."""

    def __init__(self, session: StoreSession):
        self.session = session
        self.labels = session.labels

    # --- Menu state ---

    def signed_in(self) -> bool:
        """True iff a Sign Out item exists under the Store menu. Single-shot."""
        store = self.session.store_menu()
        item = self.session.find(store, SearchSpec.of(Kind.MENU_ITEM, title=self.labels.sign_out))
        return item is not None

    def account_menu_item(self) -> Optional[INode]:
        return self.session.find(
            self.session.store_menu(),
            SearchSpec.of(Kind.MENU_ITEM, title=prefix(self.labels.account_prefix)),
        )

    # --- Purchases list ---

    def ensure_purchases_list(self) -> INode:
        """
        Show the Purchases page unless it is already showing.

        @return Application node
        @throws UserNotSignedIn if nobody is signed in
        @throws TimeoutError if the Purchases table does not render
        """
        if not self.signed_in():
            raise UserNotSignedIn()
        app = self.session.app
        if self.session.current_page(app) != self.labels.purchases:
            self.session.select_menu_item(self.labels.store_menu, self.labels.purchases)
        outcome = self.session.wait_for(
            lambda: self.session.main_window(app),
            SearchSpec.of(Kind.TABLE, description=self.labels.purchases),
            settings=TimeConfig.current().page_load,
        )
        self.session.expect(outcome, "Purchases list")
        return app

    def row(self, app_name: str) -> Optional[INode]:
        """The app's row in the Purchases list, or None if it is not there."""
        app = self.ensure_purchases_list()
        return self.session.find(
            self.session.main_window(app),
            SearchSpec.of(Kind.ROW, has=SearchSpec.of(Kind.LINK, title=app_name)),
        )

    # --- App detail page ---

    def on_app_page(self, app_name: str, app: Optional[INode] = None) -> bool:
        return self.session.current_page(app) == app_name

    def ensure_app_page(self, app_name: str) -> INode:
        """
        Follow the app's link in the Purchases list unless its detail page is
        already showing.

        @return Application node
        @throws AppNotPurchased if the app has no row in the Purchases list
        @throws TimeoutError if the detail page does not render
        """
        app = self.session.app
        if self.on_app_page(app_name, app):
            return app

        link = self.session.find(self.row(app_name), SearchSpec.of(Kind.LINK, title=app_name))
        if link is None:
            raise AppNotPurchased(app_name)
        self.session.press(link, f"'{app_name}' link")

        # Anchored to the named page so buttons still on the Purchases list
        # cannot satisfy the wait.
        outcome = self.session.wait_for(
            lambda: self.session.find(
                self.session.main_window(app),
                SearchSpec.of(Kind.WEB_AREA, description=app_name),
            ),
            SearchSpec.of(Kind.BUTTON, description=APP_PAGE_BUTTON),
            settings=TimeConfig.current().page_load,
        )
        self.session.expect(outcome, f"'{app_name}' app page")
        return app

    def app_page_button(self, app_name: str) -> INode:
        """
        The action button (Open, Install, ...) on the app's detail page.

        @throws ElementNotFoundError if the page has no action button
        """
        app = self.ensure_app_page(app_name)
        return self.page_button(app_name, app)

    def page_button(self, app_name: str, app: INode) -> INode:
        """Action button of the detail page already showing. No navigation."""
        button = self.session.locator.find_chain(
            self.session.web_area(app),
            SearchSpec.of(Kind.GROUP),
            SearchSpec.of(Kind.GROUP),
            SearchSpec.of(Kind.BUTTON),
        )
        if button is None:
            raise ElementNotFoundError("action button", f"'{app_name}' app page")
        return button

    # --- Sign In sheet ---

    def ensure_sign_in_sheet(self) -> INode:
        """
        Open the Sign In sheet from the Store menu unless it is already open.

        @return Application node
        @throws TimeoutError if the sheet does not appear
        """
        app = self.session.app
        sign_in = SearchSpec.of(Kind.BUTTON, title=self.labels.sign_in_button)
        if self.session.find(self.session.main_window(app), sign_in) is None:
            self.session.select_menu_item(self.labels.store_menu, self.labels.sign_in_menu)
            outcome = self.session.wait_for(
                lambda: self.session.main_window(app),
                sign_in,
                settings=TimeConfig.current().page_load,
            )
            self.session.expect(outcome, "Sign In window")
        return app

    def sign_in_sheet(self) -> Optional[INode]:
        app = self.ensure_sign_in_sheet()
        return self.session.find(self.session.main_window(app), SearchSpec.of(Kind.SHEET))
