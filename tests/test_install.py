# tests/test_install.py
"""
Tests for purchase checks, versions and installs.
"""

import time

import pytest

from uiauto_appstore.exceptions import AppNotPurchased, ElementNotFoundError, TimeoutError, UserNotSignedIn
from uiauto_appstore.install import Installer
from uiauto_appstore.navigation import Navigator
from uiauto_appstore.waits import WaitStatus


@pytest.fixture
def installer(session):
    return Installer(session, Navigator(session))


class TestPurchased:
    """Tests for purchased."""

    def test_purchased_from_list(self, installer, signed_in_store):
        """Apps with a row in the Purchases list are purchased."""
        assert installer.purchased("Xcode") is True
        assert installer.purchased("Final Cut Pro") is False

    def test_purchased_from_app_page(self, installer, store):
        """On the app's page the action button decides, without sign-in."""
        store.page = "Keynote"
        assert installer.purchased("Keynote") is True
        assert store.actions == []

    def test_requires_sign_in(self, installer, store):
        """Away from the app page a signed-in user is needed."""
        with pytest.raises(UserNotSignedIn):
            installer.purchased("Xcode")


class TestInstalled:
    """Tests for app_installed."""

    def test_open_means_installed(self, installer, signed_in_store):
        """An 'Open' action button means installed."""
        assert installer.app_installed("Keynote") is True

    def test_install_means_not_installed(self, installer, signed_in_store):
        """An 'Install' action button means not installed."""
        assert installer.app_installed("Xcode") is False

    def test_installed_label_is_not_open(self, installer, signed_in_store):
        """Only 'Open' counts for the installed query."""
        signed_in_store.purchases["Xcode"]["status"] = "Installed"
        assert installer.app_installed("Xcode") is False


class TestLatestVersion:
    """Tests for latest_version."""

    def test_reads_version(self, installer, signed_in_store):
        """The number next to the Version label should be returned."""
        assert installer.latest_version("Xcode") == "15.0.1"

    def test_missing_version(self, installer, signed_in_store):
        """A page without a version label should raise ElementNotFoundError."""
        with pytest.raises(ElementNotFoundError):
            installer.latest_version("Pages")

    def test_not_purchased(self, installer, signed_in_store):
        """Unknown apps should raise AppNotPurchased."""
        with pytest.raises(AppNotPurchased):
            installer.latest_version("Final Cut Pro")


class TestInstall:
    """Tests for install."""

    def test_installs(self, installer, signed_in_store):
        """A purchased app should be installed and reported as changed."""
        assert installer.install("Xcode") is True
        assert signed_in_store.purchases["Xcode"]["status"] == "Open"
        assert ("action", "Xcode", "Install") in signed_in_store.actions

    def test_download_button(self, installer, signed_in_store):
        """Previously installed apps show Download and install the same way."""
        assert installer.install("Pages") is True

    def test_installed_finish_label(self, installer, signed_in_store):
        """An install ending on 'Installed' should also count as finished."""
        signed_in_store.finish_label = "Installed"
        assert installer.install("Xcode") is True

    def test_already_installed_is_noop(self, installer, signed_in_store):
        """An installed app should not be touched."""
        assert installer.install("Keynote") is False
        assert not [a for a in signed_in_store.actions if a[0] == "action"]

    def test_not_purchased(self, installer, signed_in_store):
        """Installing an unknown app should raise AppNotPurchased."""
        with pytest.raises(AppNotPurchased, match="Final Cut Pro"):
            installer.install("Final Cut Pro")
        assert not [a for a in signed_in_store.actions if a[0] == "action"]
        assert not [a for a in signed_in_store.actions if a[0] == "link"]

    def test_requires_sign_in(self, installer, store):
        """Installing while signed out should raise UserNotSignedIn."""
        with pytest.raises(UserNotSignedIn):
            installer.install("Xcode")

    def test_install_timeout(self, installer, signed_in_store):
        """An install that never finishes should time out."""
        signed_in_store.install_ticks = None
        with pytest.raises(TimeoutError) as exc_info:
            installer.install("Xcode", timeout=0.05)
        assert exc_info.value.task == "'Xcode' installation"
        assert exc_info.value.timeout == 0.05

    def test_install_is_resumable(self, installer, signed_in_store):
        """After a timeout, waiting again should pick up the running install."""
        signed_in_store.install_ticks = None
        with pytest.raises(TimeoutError):
            installer.install("Xcode", timeout=0.05)
        signed_in_store.installing["Xcode"] = 1
        assert installer.wait_for_install("Xcode") is True

    def test_wait_stops_at_first_match(self, installer, signed_in_store, monkeypatch):
        """Waiting should return on the first finished label and search no further."""
        outcomes = []
        wait_for = installer.session.wait_for

        def recording_wait_for(*args, **kwargs):
            outcome = wait_for(*args, **kwargs)
            outcomes.append(outcome)
            return outcome

        monkeypatch.setattr(installer.session, "wait_for", recording_wait_for)
        signed_in_store.purchases["Xcode"]["status"] = "Open"
        assert installer.wait_for_install("Xcode") is True
        builds = signed_in_store.builds
        assert outcomes[-1].status is WaitStatus.OK
        assert outcomes[-1].attempts == 1
        time.sleep(0.05)
        assert signed_in_store.builds == builds
