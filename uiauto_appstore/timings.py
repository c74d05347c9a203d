# uiauto_appstore/timings.py
"""
@file timings.py
@brief Timeout presets and defaults for storefront automation.
"""

from __future__ import annotations
from typing import Any, Dict


TIMEOUT_FIELDS: Dict[str, Dict[str, Any]] = {
    "element_wait": {"timeout": 30.0, "interval": 0.5},
    "app_start": {"timeout": 30.0, "interval": 0.5},
    "page_load": {"timeout": 30.0, "interval": 0.5},
    "sign_in": {"timeout": 30.0, "interval": 0.5},
    "install_wait": {"timeout": 600.0, "interval": 1.0},
}

PRESET_OVERRIDES: Dict[str, Dict[str, Any]] = {
    "fast": {
        "element_wait": {"timeout": 15.0, "interval": 0.25},
        "app_start": {"timeout": 15.0, "interval": 0.25},
        "page_load": {"timeout": 15.0, "interval": 0.25},
        "sign_in": {"timeout": 15.0, "interval": 0.25},
    },
    "slow": {
        "element_wait": {"timeout": 60.0, "interval": 1.0},
        "app_start": {"timeout": 60.0, "interval": 1.0},
        "page_load": {"timeout": 60.0, "interval": 1.0},
        "sign_in": {"timeout": 60.0, "interval": 1.0},
        "install_wait": {"timeout": 1800.0, "interval": 2.0},
    },
    "ci": {
        "element_wait": {"timeout": 90.0, "interval": 1.0},
        "app_start": {"timeout": 120.0, "interval": 1.0},
        "page_load": {"timeout": 90.0, "interval": 1.0},
        "sign_in": {"timeout": 90.0, "interval": 1.0},
        "install_wait": {"timeout": 3600.0, "interval": 2.0},
    },
}


def list_presets() -> Dict[str, Dict[str, Any]]:
    return {"default": {}, **PRESET_OVERRIDES}


def build_preset_values(preset: str) -> Dict[str, Dict[str, float]]:
    """Budgets of a preset, as {name: {"timeout": .., "interval": ..}}."""
    key = (preset or "default").lower()
    if key != "default" and key not in PRESET_OVERRIDES:
        raise ValueError(f"Unknown timing preset: {preset}")
    changes = PRESET_OVERRIDES.get(key, {})
    return {name: {**base, **changes.get(name, {})} for name, base in TIMEOUT_FIELDS.items()}
