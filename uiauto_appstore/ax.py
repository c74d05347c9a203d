# uiauto_appstore/ax.py
"""
@file ax.py
@brief macOS accessibility adapter built on atomacos.

Maps the neutral INode / IAccessibilityProvider interfaces onto AXUIElement
roles and attributes. atomacos needs pyobjc and Accessibility privileges for
the controlling application, so it is imported on first use rather than at
package import time.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, Optional, Tuple

from .interfaces import IAccessibilityProvider, INode
from .locator import Kind
from .utils.logging import get_logger

log = get_logger("ax")

# Kind -> (AXRole, AXSubrole or None)
KIND_ROLES: Dict[Kind, Tuple[str, Optional[str]]] = {
    Kind.APPLICATION: ("AXApplication", None),
    Kind.STANDARD_WINDOW: ("AXWindow", "AXStandardWindow"),
    Kind.TOOLBAR: ("AXToolbar", None),
    Kind.RADIO_BUTTON: ("AXRadioButton", None),
    Kind.WEB_AREA: ("AXWebArea", None),
    Kind.GROUP: ("AXGroup", None),
    Kind.TABLE: ("AXTable", None),
    Kind.ROW: ("AXRow", None),
    Kind.LINK: ("AXLink", None),
    Kind.BUTTON: ("AXButton", None),
    Kind.STATIC_TEXT: ("AXStaticText", None),
    Kind.TEXT_FIELD: ("AXTextField", None),
    Kind.SECURE_TEXT_FIELD: ("AXTextField", "AXSecureTextField"),
    Kind.SHEET: ("AXSheet", None),
    Kind.MENU_BAR_ITEM: ("AXMenuBarItem", None),
    Kind.MENU_ITEM: ("AXMenuItem", None),
}

AX_ATTRIBUTES: Dict[str, str] = {
    "title": "AXTitle",
    "description": "AXDescription",
    "value": "AXValue",
    "identifier": "AXIdentifier",
    "title_ui_element": "AXTitleUIElement",
}


def _atomacos():
    import atomacos

    return atomacos


def _kind_for(role: Optional[str], subrole: Optional[str]) -> Optional[Kind]:
    fallback: Optional[Kind] = None
    for kind, (k_role, k_subrole) in KIND_ROLES.items():
        if k_role != role:
            continue
        if k_subrole is not None and k_subrole == subrole:
            return kind
        if k_subrole is None:
            fallback = kind
    return fallback


class AXNode(INode):
    """INode over an atomacos NativeUIElement."""

    def __init__(self, ref: Any):
        self._ref = ref

    @property
    def ref(self) -> Any:
        return self._ref

    def _read(self, ax_name: str) -> Any:
        try:
            return getattr(self._ref, ax_name)
        except Exception:
            # unsupported or valueless AX attribute
            return None

    @property
    def kind(self) -> Optional[Kind]:
        return _kind_for(self._read("AXRole"), self._read("AXSubrole"))

    def attribute(self, name: str) -> Any:
        ax_name = AX_ATTRIBUTES.get(name)
        if ax_name is None:
            raise KeyError(f"Unknown attribute: {name}")
        value = self._read(ax_name)
        if isinstance(value, _atomacos().NativeUIElement):
            return AXNode(value)
        return value

    def descendants(self, kind: Kind) -> Iterable[INode]:
        role, subrole = KIND_ROLES[kind]
        criteria = {"AXRole": role}
        if subrole is not None:
            criteria["AXSubrole"] = subrole
        for ref in self._ref.findAllR(**criteria):
            yield AXNode(ref)

    def parent(self) -> Optional[INode]:
        parent = self._read("AXParent")
        return AXNode(parent) if parent is not None else None

    def press(self) -> None:
        self._ref.Press()

    def set_value(self, value: str) -> None:
        self._ref.AXValue = value

    def __repr__(self) -> str:
        return f"AXNode({self._read('AXRole')!r}, title={self._read('AXTitle')!r})"


class AXProvider(IAccessibilityProvider):
    """IAccessibilityProvider for macOS applications."""

    def application(self, bundle_id: str) -> Optional[INode]:
        try:
            ref = _atomacos().getAppRefByBundleId(bundle_id)
        except ValueError:
            # atomacos raises ValueError when the bundle is not running
            return None
        return AXNode(ref)

    def launch(self, bundle_id: str) -> None:
        log.debug("Launching bundle %s", bundle_id)
        _atomacos().launchAppByBundleId(bundle_id)

    def select_menu_item(self, app: INode, *path: str) -> None:
        if not isinstance(app, AXNode):
            raise TypeError(f"Expected an AXNode application, got {type(app).__name__}")
        app.ref.menuItem(*path).Press()

    def terminate(self, bundle_id: str) -> None:
        _atomacos().terminateAppByBundleId(bundle_id)
