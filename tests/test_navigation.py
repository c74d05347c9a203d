# tests/test_navigation.py
"""
Tests for page navigation.
"""

import pytest

from uiauto_appstore.exceptions import AppNotPurchased, TimeoutError, UserNotSignedIn
from uiauto_appstore.navigation import Navigator


@pytest.fixture
def navigator(session):
    return Navigator(session)


class TestSignedInState:
    """Tests for menu-based sign-in detection."""

    def test_signed_out(self, navigator):
        """No Sign Out item means nobody is signed in."""
        assert navigator.signed_in() is False

    def test_signed_in(self, navigator, signed_in_store):
        """A Sign Out item means somebody is signed in."""
        assert navigator.signed_in() is True

    def test_account_menu_item(self, navigator, signed_in_store):
        """The account item should be found by its title prefix."""
        item = navigator.account_menu_item()
        assert item.attribute("title") == "View My Account (alice@example.com)"

    def test_detection_has_no_side_effects(self, navigator, store):
        """Checking sign-in state should not select any menu item."""
        navigator.signed_in()
        assert not [a for a in store.actions if a[0] == "menu"]


class TestPurchasesList:
    """Tests for ensure_purchases_list."""

    def test_requires_sign_in(self, navigator, store):
        """The Purchases list needs a signed-in user."""
        with pytest.raises(UserNotSignedIn):
            navigator.ensure_purchases_list()
        assert store.menu_selections("Store", "Purchases") == 0

    def test_navigates_once(self, navigator, signed_in_store):
        """Calling twice should select Store > Purchases only once."""
        navigator.ensure_purchases_list()
        navigator.ensure_purchases_list()
        assert signed_in_store.page == "Purchases"
        assert signed_in_store.menu_selections("Store", "Purchases") == 1

    def test_already_on_purchases(self, navigator, signed_in_store):
        """No navigation should happen when the list is already showing."""
        signed_in_store.page = "Purchases"
        navigator.ensure_purchases_list()
        assert signed_in_store.menu_selections("Store", "Purchases") == 0

    def test_row(self, navigator, signed_in_store):
        """row() should find purchased apps and nothing else."""
        assert navigator.row("Xcode") is not None
        assert navigator.row("Final Cut Pro") is None


class TestAppPage:
    """Tests for ensure_app_page and the action button."""

    def test_follows_link(self, navigator, signed_in_store):
        """Should follow the app's link from the Purchases list."""
        navigator.ensure_app_page("Keynote")
        assert signed_in_store.page == "Keynote"
        assert ("link", "Keynote") in signed_in_store.actions

    def test_idempotent(self, navigator, signed_in_store):
        """A second call on the same page should not navigate again."""
        navigator.ensure_app_page("Keynote")
        navigator.ensure_app_page("Keynote")
        assert signed_in_store.actions.count(("link", "Keynote")) == 1
        assert signed_in_store.menu_selections("Store", "Purchases") == 1

    def test_already_on_page_needs_no_sign_in(self, navigator, store):
        """Being on the page already should short-circuit before any menu checks."""
        store.page = "Keynote"
        navigator.ensure_app_page("Keynote")
        assert store.actions == []

    def test_not_purchased(self, navigator, signed_in_store):
        """An app without a row should raise AppNotPurchased."""
        with pytest.raises(AppNotPurchased) as exc_info:
            navigator.ensure_app_page("Final Cut Pro")
        assert exc_info.value.app_name == "Final Cut Pro"
        assert str(exc_info.value) == "App 'Final Cut Pro' is not in the Purchases list"

    def test_page_never_renders(self, navigator, signed_in_store):
        """A link that does not lead to the page should time out."""
        signed_in_store._follow_link = lambda name: None
        with pytest.raises(TimeoutError) as exc_info:
            navigator.ensure_app_page("Keynote")
        assert exc_info.value.task == "'Keynote' app page"

    def test_app_page_button(self, navigator, signed_in_store):
        """The action button should describe the app's state."""
        button = navigator.app_page_button("Xcode")
        assert button.attribute("description") == "Install, Xcode"


class TestSignInSheet:
    """Tests for ensure_sign_in_sheet."""

    def test_opens_sheet(self, navigator, store):
        """Should select Store > Sign In… to open the sheet."""
        navigator.ensure_sign_in_sheet()
        assert store.sheet_open
        assert navigator.sign_in_sheet() is not None

    def test_sheet_already_open(self, navigator, store):
        """An open sheet should not be requested again."""
        store.sheet_open = True
        navigator.ensure_sign_in_sheet()
        assert store.menu_selections("Store", "Sign In…") == 0
