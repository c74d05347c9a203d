# uiauto_appstore/process.py
"""
@file process.py
@brief Process-table lookups that need no accessibility privileges.

These go through psutil, so they work before Accessibility access has been
granted, including right after the package is installed.
"""

from __future__ import annotations
import os
from typing import Any, List, Optional

import psutil

from .interfaces import IProcessProbe
from .utils.logging import get_logger

# What NSRunningApplication reports nothing for when running over SSH; this
# is also the entry that shows up in the Accessibility privacy settings.
SSH_CONTROLLING_APP = "/usr/libexec/sshd-keygen-wrapper"

log = get_logger("process")


class PsutilProcessProbe(IProcessProbe):
    """Matches running processes by exact process name."""

    def find(self, process_name: str) -> List[int]:
        pids: List[int] = []
        for proc in psutil.process_iter(["name"]):
            if proc.info.get("name") == process_name:
                pids.append(proc.pid)
        return pids


def parent_pid(pid: int) -> int:
    """
    Return the parent PID of any process.

    @throws psutil.NoSuchProcess, psutil.AccessDenied
    """
    return psutil.Process(pid).ppid()


def controlling_application_pid(pid: Optional[int] = None) -> int:
    """
    Walk up from pid (default: this process) to the ancestor that is a
    direct child of PID 1, i.e. the terminal or SSH daemon we run under.
    """
    current = pid if pid is not None else os.getpid()
    while True:
        ppid = parent_pid(current)
        if ppid <= 1:
            return current
        current = ppid


def _running_application(pid: int) -> Any:
    from AppKit import NSRunningApplication

    return NSRunningApplication.runningApplicationWithProcessIdentifier_(pid)


def controlling_application_name(pid: Optional[int] = None) -> str:
    """
    Bundle ID (or executable path) of the application controlling this
    process. That is the application needing Accessibility privileges.

    Falls back to SSH_CONTROLLING_APP when the ancestry cannot be resolved.
    """
    try:
        app_pid = controlling_application_pid(pid)
    except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
        log.debug("Process ancestry lookup failed (%s), assuming SSH", e)
        return SSH_CONTROLLING_APP
    app = _running_application(app_pid)
    if app is None:
        log.debug("No running application for PID %s, assuming SSH", app_pid)
        return SSH_CONTROLLING_APP
    return app.bundleIdentifier() or app.executableURL().path()
