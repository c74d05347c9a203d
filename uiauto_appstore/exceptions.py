# uiauto_appstore/exceptions.py
"""
@file exceptions.py
@brief Typed failures raised by the App Store automation workflows.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .waits import WaitOutcome


class AppStoreError(Exception):
    """Base exception for the package."""
    pass


class ConfigError(AppStoreError):
    """Raised when the YAML configuration is invalid."""
    pass


class TimeoutError(AppStoreError):
    """
    Raised when a bounded wait exceeded its budget.

    The caller may retry the whole operation; nothing is retried internally.

    Attributes:
        task: Human-readable name of what was being waited for
        timeout: The timeout value in seconds (if known)
        attempt_count: Number of polling attempts made (if known)
        elapsed_time: Actual elapsed time in seconds (if known)
        original_exception: Last provider error seen while polling (if any)
    """

    def __init__(self, task: str, timeout: Optional[float] = None):
        super().__init__(f"Timed out waiting for {task} to load")
        self.task = task
        self.timeout = timeout
        self.attempt_count: Optional[int] = None
        self.elapsed_time: Optional[float] = None
        self.original_exception: Optional[BaseException] = None

    @classmethod
    def from_outcome(cls, task: str, outcome: "WaitOutcome") -> "TimeoutError":
        error = cls(task, timeout=outcome.timeout)
        error.attempt_count = outcome.attempts
        error.elapsed_time = outcome.elapsed
        error.original_exception = outcome.error
        return error

    def __str__(self) -> str:
        base_msg = super().__str__()

        details = []
        if self.timeout is not None:
            details.append(f"Timeout: {self.timeout}s")
        if self.attempt_count is not None:
            details.append(f"Attempts: {self.attempt_count}")
        if self.elapsed_time is not None:
            details.append(f"Elapsed: {self.elapsed_time:.2f}s")
        if self.original_exception is not None:
            details.append(f"Last error: {type(self.original_exception).__name__}")

        if details:
            return f"{base_msg} [{', '.join(details)}]"
        return base_msg


class AppNotPurchased(AppStoreError):
    """Raised when operating on an app that is not in the Purchases list."""

    def __init__(self, name: str):
        self.app_name = name
        super().__init__(f"App '{name}' is not in the Purchases list")


class UserNotSignedIn(AppStoreError):
    """Raised when an action requires a signed-in user."""

    def __init__(self) -> None:
        super().__init__("User must be signed in to perform this action")


class CredentialsIncomplete(AppStoreError):
    """Raised when only one of username/password is provided."""

    def __init__(self) -> None:
        super().__init__(
            "An Apple ID 'username' and 'password' *must* be provided "
            "together to sign into the App Store"
        )


class ElementNotFoundError(AppStoreError):
    """
    Raised when a landmark is missing from a page that was already confirmed.

    This is a UI-shape problem (an OS version with a different layout, a
    killed process) rather than slowness, so it is not a TimeoutError.
    """

    def __init__(self, element_name: str, where: str, details: Optional[str] = None):
        self.element_name = element_name
        self.where = where
        self.details = details
        msg = f"Could not find {element_name} in {where}"
        if details:
            msg += f": {details}"
        super().__init__(msg)
