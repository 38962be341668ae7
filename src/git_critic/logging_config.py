"""Logging for git-critic.

Handlers hang off the ``git_critic`` logger only, never the root logger.
Console output goes to stderr so it never mixes with CSV/JSON written to
stdout.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "git_critic"

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _level(debug: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    return logging.DEBUG if debug else logging.WARNING


def _console_handler(debug: bool) -> logging.Handler:
    # markup off: file names and policy names may contain [brackets]
    handler = RichHandler(
        console=Console(stderr=True),
        markup=False,
        rich_tracebacks=debug,
        show_time=debug,
        show_path=debug,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def _file_handler(path: str) -> logging.Handler:
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Route git-critic's log records to stderr and, optionally, a file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        verbose: DEBUG level (``--debug``); each violation is logged
        quiet: ERROR level only (``--quiet``); wins over *verbose*
        log_file: Also append records to this file
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_console_handler(verbose))
    if log_file:
        logger.addHandler(_file_handler(log_file))
    logger.setLevel(_level(verbose, quiet))
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``git_critic`` namespace (``pipeline`` -> ``git_critic.pipeline``)."""
    if name is None or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
