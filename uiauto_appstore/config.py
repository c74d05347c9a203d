# uiauto_appstore/config.py
"""
@file config.py
@brief Wait budgets for storefront automation.

Lookup order for TimeConfig.current(): a scoped override(), then the run
configuration installed for this thread, then the process default.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from .timings import TIMEOUT_FIELDS, build_preset_values, list_presets


@dataclass
class TimeoutSettings:
    """Timeout and polling interval for one kind of wait."""
    timeout: float
    interval: float

    def with_overrides(
        self,
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
    ) -> TimeoutSettings:
        return TimeoutSettings(
            timeout=self.timeout if timeout is None else float(timeout),
            interval=self.interval if interval is None else float(interval),
        )


Override = Union[TimeoutSettings, Mapping[str, float]]


class _Budget:
    """Attribute access to one named budget of a TimeConfig."""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, config: Optional[TimeConfig], owner: type) -> Any:
        if config is None:
            return self
        return config._budgets[self.name]

    def __set__(self, config: TimeConfig, value: TimeoutSettings) -> None:
        config._budgets[self.name] = value


class TimeConfig:
    """
    One full set of wait budgets.

    element_wait: readiness landmarks and generic element waits
    app_start: launch until the process can be attached to
    page_load: app page, Purchases list, Sign In sheet
    sign_in: Sign Out item appearing after submitting credentials
    install_wait: default budget for an install to finish
    """

    element_wait = _Budget()
    app_start = _Budget()
    page_load = _Budget()
    sign_in = _Budget()
    install_wait = _Budget()

    _process_default: Optional[TimeConfig] = None
    _lock = threading.Lock()
    _local = threading.local()

    def __init__(self, preset: str = "default", overrides: Optional[Mapping[str, Override]] = None):
        self.preset = preset
        self._budgets: Dict[str, TimeoutSettings] = {
            name: TimeoutSettings(timeout=float(v["timeout"]), interval=float(v["interval"]))
            for name, v in build_preset_values(preset).items()
        }
        if overrides:
            self.update(overrides)

    def update(self, overrides: Mapping[str, Override]) -> TimeConfig:
        """
        Apply per-budget overrides in place.

        A mapping may name only timeout or interval; the other value is kept.

        @throws ValueError for unknown budget names or malformed values
        """
        for name, value in overrides.items():
            if name not in TIMEOUT_FIELDS:
                raise ValueError(f"Unknown TimeConfig field: {name}")
            if isinstance(value, TimeoutSettings):
                self._budgets[name] = replace(value)
            elif isinstance(value, Mapping):
                self._budgets[name] = self._budgets[name].with_overrides(
                    timeout=value.get("timeout"),
                    interval=value.get("interval"),
                )
            else:
                raise ValueError(f"Invalid override for {name}: {value!r}")
        return self

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            name: {"timeout": s.timeout, "interval": s.interval}
            for name, s in self._budgets.items()
        }

    def clone(self) -> TimeConfig:
        return TimeConfig(self.preset, overrides=self.to_dict())

    @classmethod
    def build_from(
        cls,
        *,
        preset: str = "default",
        overrides: Optional[Mapping[str, Override]] = None,
    ) -> TimeConfig:
        return cls(preset, overrides)

    # --- Scoping ---

    @classmethod
    def default(cls) -> TimeConfig:
        with cls._lock:
            if cls._process_default is None:
                cls._process_default = cls()
            return cls._process_default

    @classmethod
    def install_run_config(cls, config: TimeConfig) -> None:
        """Use config for every wait on this thread until cleared."""
        cls._local.run_config = config

    @classmethod
    def clear_run_config(cls) -> None:
        cls._local.run_config = None

    @classmethod
    def current(cls) -> TimeConfig:
        for scope in ("override", "run_config"):
            config = getattr(cls._local, scope, None)
            if config is not None:
                return config
        return cls.default()

    @classmethod
    @contextmanager
    def override(cls, **overrides: Override) -> Iterator[TimeConfig]:
        """Temporarily adjust budgets on this thread."""
        previous = getattr(cls._local, "override", None)
        cls._local.override = cls.current().clone().update(overrides)
        try:
            yield cls._local.override
        finally:
            cls._local.override = previous

    @classmethod
    def reset_to_defaults(cls) -> None:
        with cls._lock:
            cls._process_default = None
        cls._local.override = None
        cls._local.run_config = None


def available_presets() -> Dict[str, Dict[str, Any]]:
    return list_presets()
