# uiauto_appstore/waits.py
"""
@file waits.py
@brief Bounded polling for UI state that renders asynchronously.

Waits never raise on expiry. They return a WaitOutcome and the calling
workflow decides whether absence is fatal.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

from .interfaces import ILocator, INode
from .locator import SearchSpec
from .timinglogger import TIMING_LOGGER

Ancestor = Union[INode, Callable[[], Optional[INode]], None]


def _now() -> float:
    """Clock for all wait arithmetic; immune to wall-clock jumps."""
    return time.monotonic()


class WaitStatus(Enum):
    OK = "ok"
    TIMED_OUT = "timed_out"
    INVALID = "invalid"


@dataclass
class WaitOutcome:
    """Result of a bounded wait. Truthy only when the element was found."""
    status: WaitStatus
    element: Any = None
    description: str = "condition"
    timeout: Optional[float] = None
    attempts: int = 0
    elapsed: float = 0.0
    error: Optional[BaseException] = None
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.status is WaitStatus.OK

    @property
    def found(self) -> bool:
        return self.status is WaitStatus.OK

    @property
    def timed_out(self) -> bool:
        return self.status is WaitStatus.TIMED_OUT


def poll(
    probe: Callable[[], Any],
    timeout: float,
    interval: float = 0.5,
    description: str = "condition",
) -> WaitOutcome:
    """
    Call probe until it returns something other than None/False, or until
    timeout elapses. At least one attempt is always made.

    Provider errors raised by probe count as "not yet"; the last one is kept
    on the outcome for diagnostics.
    """
    start_time = _now()
    last_exception: Optional[BaseException] = None
    attempt_count = 0

    if TIMING_LOGGER.is_enabled():
        TIMING_LOGGER.log(
            event="wait_start",
            description=description,
            metadata={"timeout_s": timeout, "interval_s": interval},
        )

    while True:
        attempt_count += 1
        try:
            result = probe()
        except Exception as e:
            last_exception = e
            result = None

        elapsed = _now() - start_time
        if result is not None and result is not False:
            if TIMING_LOGGER.is_enabled():
                TIMING_LOGGER.log(
                    event="wait_success",
                    description=description,
                    status="success",
                    metadata={"attempts": attempt_count, "elapsed_s": round(elapsed, 3)},
                )
            return WaitOutcome(
                status=WaitStatus.OK,
                element=result,
                description=description,
                timeout=timeout,
                attempts=attempt_count,
                elapsed=elapsed,
                error=last_exception,
            )

        time_left = timeout - elapsed
        if time_left <= 0:
            break
        time.sleep(min(interval, time_left))

    elapsed = _now() - start_time
    if TIMING_LOGGER.is_enabled():
        TIMING_LOGGER.log(
            event="wait_timeout",
            description=description,
            status="error",
            metadata={
                "timeout_s": timeout,
                "attempts": attempt_count,
                "elapsed_s": round(elapsed, 3),
            },
        )
    return WaitOutcome(
        status=WaitStatus.TIMED_OUT,
        description=description,
        timeout=timeout,
        attempts=attempt_count,
        elapsed=elapsed,
        error=last_exception,
    )


def wait_for(
    locator: ILocator,
    ancestor: Ancestor,
    spec: SearchSpec,
    timeout: float,
    interval: float = 0.5,
) -> WaitOutcome:
    """
    Poll locator.find below ancestor until spec matches.

    ancestor may be a node or a callable re-resolving it on every attempt;
    a callable returning None means the ancestor has not rendered yet.
    """
    description = spec.describe()
    if ancestor is None:
        return WaitOutcome(
            status=WaitStatus.INVALID,
            description=description,
            timeout=timeout,
            reason="no ancestor to search from",
        )

    if isinstance(ancestor, INode):
        node = ancestor
        resolve: Callable[[], Optional[INode]] = lambda: node
    else:
        resolve = ancestor

    def probe() -> Optional[INode]:
        root = resolve()
        if root is None:
            return None
        return locator.find(root, spec)

    return poll(probe, timeout=timeout, interval=interval, description=description)
