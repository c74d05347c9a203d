# uiauto_appstore/context.py
"""
@file context.py
@brief Tracing of caller-facing operations for logs and failure reports.

Operations nest (install -> sign in), so each thread keeps a stack of the
operations currently running. Failures are logged with the whole chain.
"""

from __future__ import annotations
import functools
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional
from uuid import uuid4

from .utils.logging import get_logger

log = get_logger("actions")


@dataclass
class ActionContext:
    """One running operation, e.g. install 'Xcode'."""
    operation: str
    subject: Optional[str] = None
    parent: Optional[ActionContext] = None
    action_id: str = field(default_factory=lambda: uuid4().hex[:8])
    started: float = field(default_factory=time.monotonic)

    @property
    def description(self) -> str:
        return f"{self.operation} '{self.subject}'" if self.subject else self.operation

    @property
    def elapsed_time(self) -> float:
        return time.monotonic() - self.started

    def chain(self) -> Iterator[ActionContext]:
        """This operation, then every enclosing one."""
        ctx: Optional[ActionContext] = self
        while ctx is not None:
            yield ctx
            ctx = ctx.parent

    def format_trace(self) -> str:
        steps = [f"{ctx.description} ({ctx.elapsed_time:.2f}s)" for ctx in self.chain()]
        return "Operation trace, innermost first: " + " <- ".join(steps)


class ActionContextManager:
    """Per-thread stack of running operations."""

    _local = threading.local()

    @classmethod
    def _stack(cls) -> List[ActionContext]:
        stack = getattr(cls._local, "stack", None)
        if stack is None:
            stack = cls._local.stack = []
        return stack

    @classmethod
    def current(cls) -> Optional[ActionContext]:
        stack = cls._stack()
        return stack[-1] if stack else None

    @classmethod
    @contextmanager
    def action(cls, operation: str, subject: Optional[str] = None) -> Iterator[ActionContext]:
        ctx = ActionContext(operation=operation, subject=subject, parent=cls.current())
        stack = cls._stack()
        stack.append(ctx)
        try:
            yield ctx
        finally:
            stack.pop()

    @classmethod
    def clear(cls) -> None:
        """Drop any leftover contexts (test cleanup, new CLI run)."""
        cls._local.stack = []


def tracked_action(operation: Optional[str] = None):
    """
    Log start, finish and failure of a caller-facing method.

    Only the first positional argument (an app name or an Apple ID) is
    recorded as the subject. Remaining arguments can hold a password and are
    never logged.
    """
    def decorator(func):
        name = operation or func.__name__

        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            subject = args[0] if args and isinstance(args[0], str) else None
            with ActionContextManager.action(name, subject) as ctx:
                log.info("[%s] %s started", ctx.action_id, ctx.description)
                try:
                    result = func(self, *args, **kwargs)
                except Exception as exc:
                    log.error(
                        "[%s] %s failed after %.2fs: %s: %s",
                        ctx.action_id, ctx.description, ctx.elapsed_time,
                        type(exc).__name__, exc,
                    )
                    log.debug(ctx.format_trace())
                    raise
                log.info("[%s] %s finished in %.2fs", ctx.action_id, ctx.description, ctx.elapsed_time)
                return result

        return wrapper

    return decorator
