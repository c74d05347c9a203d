# uiauto_appstore/timinglogger.py
"""
@file timinglogger.py
@brief Opt-in trace of every bounded wait (start, success, timeout).

Lines go through a dedicated "uiauto_appstore.timing" logger that does not
propagate, so timing traces stay out of the regular log output.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from typing import Any, Dict, Optional

_FORMAT = "[%(levelname)s] [timing] time=%(asctime)s %(message)s"


class TimingLogger:
    """Switchable wait tracer writing to stdout and/or a file."""

    def __init__(self, name: str = "uiauto_appstore.timing") -> None:
        self._lock = threading.Lock()
        self._enabled = False
        self._logger = logging.getLogger(name)
        self._logger.propagate = False
        self._logger.setLevel(logging.INFO)

    def configure(self, *, console: bool = True, file_path: Optional[str] = None) -> None:
        """Replace the output handlers."""
        with self._lock:
            for handler in list(self._logger.handlers):
                self._logger.removeHandler(handler)
                handler.close()
            formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")
            if console:
                stream = logging.StreamHandler(sys.stdout)
                stream.setFormatter(formatter)
                self._logger.addHandler(stream)
            if file_path:
                os.makedirs(os.path.dirname(os.path.abspath(file_path)), exist_ok=True)
                file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8")
                file_handler.setFormatter(formatter)
                self._logger.addHandler(file_handler)

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    def is_enabled(self) -> bool:
        return self._enabled

    def log(
        self,
        *,
        event: str,
        description: Optional[str] = None,
        status: str = "info",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        if not self._enabled:
            return
        fields = {"event": event}
        if description:
            fields["description"] = description
        fields.update(metadata or {})
        level = logging.ERROR if status == "error" else logging.INFO
        self._logger.log(level, " ".join(f"{key}={value}" for key, value in fields.items()))


TIMING_LOGGER = TimingLogger()
