# uiauto_appstore/interfaces.py
"""
@file interfaces.py
@brief Abstract capability interfaces consumed by the automation engine.

The engine never talks to an accessibility API directly. Platform adapters
(see ax.py) and test fakes implement these classes, so every workflow can
run against a real storefront or a scripted in-memory tree.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, List, Optional

if TYPE_CHECKING:
    from .locator import Kind, SearchSpec


class INode(ABC):
    """
    A searchable node of the accessibility tree.

    Applications, windows, menu bar items and plain elements all implement
    this one interface, so any of them can be used as a search ancestor.
    Attributes are read lazily from the live tree on every call.
    """

    @property
    @abstractmethod
    def kind(self) -> Optional["Kind"]:
        """Node kind, or None when the platform role is not one we model."""
        pass

    @abstractmethod
    def attribute(self, name: str) -> Any:
        """
        Read an attribute by its neutral name.

        Args:
            name: One of "title", "description", "value", "identifier",
                "title_ui_element"

        Returns:
            Attribute value, or None when the node does not expose it
        """
        pass

    @abstractmethod
    def descendants(self, kind: "Kind") -> Iterable["INode"]:
        """
        Iterate descendants of the given kind in tree order.

        Args:
            kind: Kind of descendants to yield
        """
        pass

    @abstractmethod
    def parent(self) -> Optional["INode"]:
        """Return the parent node, or None for a root."""
        pass

    @abstractmethod
    def press(self) -> None:
        """Activate the node (button press, link follow)."""
        pass

    @abstractmethod
    def set_value(self, value: str) -> None:
        """Assign a field value."""
        pass


class ILocator(ABC):
    """Single-shot, read-only element search."""

    @abstractmethod
    def find(self, ancestor: INode, spec: "SearchSpec") -> Optional[INode]:
        """
        Return the first descendant of ancestor matching spec, or None.

        Must not raise for "not found"; absence is a result.
        """
        pass


class IAccessibilityProvider(ABC):
    """Process-level accessibility capabilities for one platform."""

    @abstractmethod
    def application(self, bundle_id: str) -> Optional[INode]:
        """
        Attach to a running application.

        Returns:
            Application node, or None when it is not running
        """
        pass

    @abstractmethod
    def launch(self, bundle_id: str) -> None:
        """Launch an application without waiting for it."""
        pass

    @abstractmethod
    def select_menu_item(self, app: INode, *path: str) -> None:
        """
        Select a menu item by its title path.

        Args:
            app: Application node owning the menu bar
            *path: Menu titles, e.g. ("Store", "Purchases")
        """
        pass

    @abstractmethod
    def terminate(self, bundle_id: str) -> None:
        """Request termination of an application."""
        pass


class IProcessProbe(ABC):
    """Out-of-band process lookup that works without accessibility rights."""

    @abstractmethod
    def find(self, process_name: str) -> List[int]:
        """
        Return PIDs of running processes whose command name equals process_name.
        """
        pass
