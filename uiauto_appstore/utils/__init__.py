"""Utility modules for uiauto_appstore."""

from .logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
