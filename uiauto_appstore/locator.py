# uiauto_appstore/locator.py
"""
@file locator.py
@brief Declarative element search over an accessibility tree.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Pattern

from .interfaces import ILocator, INode


class Kind(Enum):
    """Node kinds the workflows search for."""
    APPLICATION = "application"
    STANDARD_WINDOW = "standard_window"
    TOOLBAR = "toolbar"
    RADIO_BUTTON = "radio_button"
    WEB_AREA = "web_area"
    GROUP = "group"
    TABLE = "table"
    ROW = "row"
    LINK = "link"
    BUTTON = "button"
    STATIC_TEXT = "static_text"
    TEXT_FIELD = "text_field"
    SECURE_TEXT_FIELD = "secure_text_field"
    SHEET = "sheet"
    MENU_BAR_ITEM = "menu_bar_item"
    MENU_ITEM = "menu_item"


def prefix(text: str) -> Pattern[str]:
    """Pattern matching attribute values that start with text."""
    return re.compile("^" + re.escape(text))


@dataclass(frozen=True)
class SearchSpec:
    """
    What to look for below an ancestor.

    predicates maps attribute names to expected values:
      - plain value: exact equality
      - compiled pattern: re.search against the string value
      - SearchSpec: the attribute holds a node that must match that spec
    has optionally requires a matching descendant.
    """
    kind: Kind
    predicates: Dict[str, Any] = field(default_factory=dict)
    has: Optional[SearchSpec] = None

    @classmethod
    def of(cls, kind: Kind, has: Optional[SearchSpec] = None, **predicates: Any) -> SearchSpec:
        return cls(kind=kind, predicates=dict(predicates), has=has)

    def describe(self) -> str:
        parts = [self.kind.value]
        for key, expected in self.predicates.items():
            if isinstance(expected, re.Pattern):
                parts.append(f"{key}=/{expected.pattern}/")
            elif isinstance(expected, SearchSpec):
                parts.append(f"{key}=<{expected.describe()}>")
            else:
                parts.append(f"{key}={expected!r}")
        if self.has is not None:
            parts.append(f"has <{self.has.describe()}>")
        return " ".join(parts)


def _matches_value(actual: Any, expected: Any, locator: Locator) -> bool:
    if isinstance(expected, re.Pattern):
        if actual is None:
            return False
        return expected.search(str(actual)) is not None
    if isinstance(expected, SearchSpec):
        if not isinstance(actual, INode):
            return False
        return locator.matches(actual, expected)
    return actual == expected


class Locator(ILocator):
    """
    Finds descendants by kind and attribute predicates.

    Traversal is delegated to INode.descendants(); this class only filters.
    Lookups are single-shot: no waiting, no caching.
    """

    def matches(self, node: INode, spec: SearchSpec) -> bool:
        """Check a node against a spec. Unreadable attributes never match."""
        if node.kind is not spec.kind:
            return False
        for key, expected in spec.predicates.items():
            try:
                actual = node.attribute(key)
            except Exception:
                return False
            if not _matches_value(actual, expected, self):
                return False
        if spec.has is not None and self.find(node, spec.has) is None:
            return False
        return True

    def find(self, ancestor: INode, spec: SearchSpec) -> Optional[INode]:
        for node in ancestor.descendants(spec.kind):
            if self.matches(node, spec):
                return node
        return None

    def find_chain(self, ancestor: INode, *specs: SearchSpec) -> Optional[INode]:
        """
        Follow successive first matches, e.g. web area > group > group > button.
        """
        current: Optional[INode] = ancestor
        for spec in specs:
            if current is None:
                return None
            current = self.find(current, spec)
        return current
