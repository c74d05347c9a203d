# uiauto_appstore/session.py
"""
@file session.py
@brief Attaching to (or launching) the App Store and querying its tree.

A StoreSession holds no element handles between calls: every query starts
from a freshly resolved application node, so a restarted App Store is
picked up on the next operation.
"""

from __future__ import annotations
import logging
from typing import Optional

from .config import TimeConfig, TimeoutSettings
from .exceptions import ElementNotFoundError, TimeoutError
from .interfaces import IAccessibilityProvider, ILocator, INode, IProcessProbe
from .locator import Kind, Locator, SearchSpec
from .process import PsutilProcessProbe
from .repository import AppConfig, Labels
from .waits import Ancestor, WaitOutcome, WaitStatus, poll, wait_for
from .utils.logging import get_logger


class StoreSession:
    """
    Owns the handle to the storefront process and the UI primitives the
    workflows are built from.

    Nothing is cached: every access re-attaches and re-checks readiness, so
    the session survives the app being restarted between calls. Callers must
    not drive one storefront from several threads at once.
    """

    def __init__(
        self,
        provider: IAccessibilityProvider,
        app_config: Optional[AppConfig] = None,
        labels: Optional[Labels] = None,
        locator: Optional[ILocator] = None,
        probe: Optional[IProcessProbe] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.provider = provider
        self.config = app_config or AppConfig()
        self.labels = labels or Labels()
        self.locator = locator or Locator()
        self.probe = probe or PsutilProcessProbe()
        self.log = logger or get_logger("session")

    # --- Lifecycle ---

    def acquire(self) -> INode:
        """
        Attach to (or launch) the storefront and verify it finished loading.

        Readiness needs three independent landmarks: a standard window, its
        web content area and the toolbar's Purchases control.

        @throws TimeoutError if the app or any landmark does not appear
        """
        name = self.config.name
        bundle_id = self.config.bundle_id

        app = self.provider.application(bundle_id)
        if app is None:
            self.log.info("Launching %s (%s)", name, bundle_id)
            self.provider.launch(bundle_id)
            start = TimeConfig.current().app_start
            outcome = poll(
                lambda: self.provider.application(bundle_id),
                timeout=start.timeout,
                interval=start.interval,
                description=f"{name} process",
            )
            app = self.expect(outcome, name)

        self.expect(self.wait_for(app, SearchSpec.of(Kind.STANDARD_WINDOW)), name)
        self.expect(
            self.wait_for(lambda: self.main_window(app), SearchSpec.of(Kind.WEB_AREA)),
            name,
        )
        nav_button = self.wait_for(
            lambda: self.find(self.main_window(app), SearchSpec.of(Kind.TOOLBAR)),
            SearchSpec.of(Kind.RADIO_BUTTON, identifier=self.labels.purchases_toolbar_id),
        )
        self.expect(nav_button, name)

        return app

    @property
    def app(self) -> INode:
        return self.acquire()

    def running(self) -> bool:
        """Check the process table; works without accessibility privileges."""
        return bool(self.probe.find(self.config.process_name))

    def terminate(self) -> bool:
        """
        Quit the storefront if it is running.

        @return True if termination was requested, False if it was not running
        """
        if not self.running():
            return False
        self.log.info("Terminating %s", self.config.name)
        self.provider.terminate(self.config.bundle_id)
        return True

    # --- Tree queries ---

    def find(self, ancestor: Optional[INode], spec: SearchSpec) -> Optional[INode]:
        if ancestor is None:
            return None
        return self.locator.find(ancestor, spec)

    def main_window(self, app: Optional[INode] = None) -> Optional[INode]:
        app = app if app is not None else self.app
        return self.find(app, SearchSpec.of(Kind.STANDARD_WINDOW))

    def web_area(self, app: Optional[INode] = None) -> Optional[INode]:
        return self.find(self.main_window(app), SearchSpec.of(Kind.WEB_AREA))

    def current_page(self, app: Optional[INode] = None) -> Optional[str]:
        """Description of the web content area, i.e. the page being shown."""
        web_area = self.web_area(app)
        if web_area is None:
            return None
        return web_area.attribute("description")

    def store_menu(self, app: Optional[INode] = None) -> Optional[INode]:
        app = app if app is not None else self.app
        return self.find(app, SearchSpec.of(Kind.MENU_BAR_ITEM, title=self.labels.store_menu))

    def wait_for(
        self,
        ancestor: Ancestor,
        spec: SearchSpec,
        timeout: Optional[float] = None,
        settings: Optional[TimeoutSettings] = None,
    ) -> WaitOutcome:
        """
        Bounded wait for spec below ancestor.

        @param settings Timeout/interval pair (element_wait when None)
        @param timeout Overrides the settings' timeout
        """
        settings = settings or TimeConfig.current().element_wait
        effective_timeout = timeout if timeout is not None else settings.timeout
        return wait_for(
            self.locator,
            ancestor,
            spec,
            timeout=effective_timeout,
            interval=settings.interval,
        )

    def expect(self, outcome: WaitOutcome, task: str) -> INode:
        """
        Turn a wait outcome into its element or a typed failure.

        @throws TimeoutError if the wait ran out of time
        @throws ElementNotFoundError if there was nothing to search from
        """
        if outcome:
            return outcome.element
        if outcome.status is WaitStatus.INVALID:
            raise ElementNotFoundError(outcome.description, task, outcome.reason)
        raise TimeoutError.from_outcome(task, outcome)

    # --- Actions ---

    def select_menu_item(self, *path: str) -> None:
        self.log.debug("Selecting menu item %s", " > ".join(path))
        self.provider.select_menu_item(self.app, *path)

    def press(self, node: INode, what: str) -> None:
        self.log.debug("Pressing %s", what)
        node.press()

    def set_value(self, node: INode, value: str, what: str) -> None:
        # value may be a password: only the field name is logged
        self.log.debug("Setting %s", what)
        node.set_value(value)
