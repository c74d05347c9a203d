# uiauto_appstore/utils/logging.py
"""
@file logging.py
@brief Package loggers and the CLI's log handlers.

Library modules only create loggers below "uiauto_appstore"; handlers are
attached by setup_logging, which the CLI calls once per run. Console output
goes to stderr so answers printed on stdout stay parseable.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER = "uiauto_appstore"

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-8s [%(threadName)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_MARK = "_uiauto_appstore_handler"


def get_logger(name: str) -> logging.Logger:
    """Logger for one part of the package, e.g. get_logger("install")."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Attach console and optional file handlers to the package logger.

    Handlers from an earlier call are replaced, so calling this again (a
    second CLI run in the same process) does not duplicate lines.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(logging.DEBUG)
    for handler in [h for h in root.handlers if getattr(h, _HANDLER_MARK, False)]:
        root.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    setattr(console, _HANDLER_MARK, True)
    root.addHandler(console)

    if log_file is not None:
        path = Path(log_file)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        except OSError as e:
            root.warning("Could not open log file %s: %s", path, e)
        else:
            file_handler.setLevel(file_level)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
            setattr(file_handler, _HANDLER_MARK, True)
            root.addHandler(file_handler)

    root.debug("Logging set up (log file: %s)", log_file)
    return root
