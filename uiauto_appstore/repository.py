# uiauto_appstore/repository.py
"""
@file repository.py
@brief Optional YAML configuration, validated against schemas/config.schema.json.

The file can pin the bundle id, rename UI labels for other locales and
tune individual wait budgets.
"""

from __future__ import annotations
import json
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml
from jsonschema import Draft202012Validator

from .exceptions import ConfigError

SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "schemas", "config.schema.json")


@dataclass(frozen=True)
class AppConfig:
    name: str = "App Store"
    bundle_id: str = "com.apple.appstore"
    process_name: str = "App Store"
    timing_preset: str = "default"


@dataclass(frozen=True)
class Labels:
    """UI strings the workflows search for. Override for localized storefronts."""
    store_menu: str = "Store"
    purchases: str = "Purchases"
    sign_in_menu: str = "Sign In…"
    sign_in_button: str = "Sign In"
    sign_out: str = "Sign Out"
    account_prefix: str = "View My Account "
    apple_id_label: str = "Apple ID "
    password_label: str = "Password"
    version_label: str = "Version: "
    purchases_toolbar_id: str = "purchased"


class Repository:
    """
    Loads the optional configuration YAML: app identity, UI labels, timeouts.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = os.path.abspath(path) if path else None
        self._raw: Dict[str, Any] = self._load_yaml(self.path) if self.path else {}

        self._validate()
        self._app = AppConfig(**(self._raw.get("app") or {}))
        self._labels = Labels(**(self._raw.get("labels") or {}))
        self._timeouts: Dict[str, Dict[str, float]] = dict(self._raw.get("timeouts") or {})

    @staticmethod
    def _load_yaml(path: str) -> Dict[str, Any]:
        if not os.path.exists(path):
            raise ConfigError(f"Configuration YAML not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError("Configuration YAML must be a mapping at root.")
        return data

    @staticmethod
    def _load_schema() -> Dict[str, Any]:
        with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
            return json.load(f)

    def _validate(self) -> None:
        validator = Draft202012Validator(self._load_schema())
        errors = sorted(validator.iter_errors(self._raw), key=lambda e: list(e.path))
        if errors:
            lines = []
            for err in errors:
                where = ".".join(str(p) for p in err.path) or "<root>"
                lines.append(f"{where}: {err.message}")
            raise ConfigError("Invalid configuration:\n  " + "\n  ".join(lines))

    @property
    def app(self) -> AppConfig:
        return self._app

    @property
    def labels(self) -> Labels:
        return self._labels

    @property
    def timeout_overrides(self) -> Dict[str, Dict[str, float]]:
        return dict(self._timeouts)

    def list_labels(self) -> List[str]:
        return sorted(Labels.__dataclass_fields__.keys())
