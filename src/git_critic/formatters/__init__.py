"""Output formatters for git-critic."""

from ..exceptions import ConfigurationError, ErrorKind
from ..logging_config import get_logger
from .base import BaseFormatter
from .compare import CompareReportFormatter
from .output import open_output
from .structured import StructuredFormatter
from .tabular import TabularFormatter

logger = get_logger(__name__)

DEFAULT_FORMAT = "json"

_FORMATTERS = {
    "csv": TabularFormatter,
    "json": StructuredFormatter,
}


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: "csv" or "json" (case-insensitive); empty means the default

    Returns:
        Formatter instance. Unrecognized names log a warning and fall back
        to JSON.
    """
    key = (name or DEFAULT_FORMAT).lower()
    cls = _FORMATTERS.get(key)
    if cls is None:
        notice = ConfigurationError(
            f'invalid format {name} using "{DEFAULT_FORMAT}"',
            kind=ErrorKind.INVALID_CONFIGURATION,
            context={"format": name},
        )
        logger.warning("%s", notice)
        cls = _FORMATTERS[DEFAULT_FORMAT]
    return cls()


__all__ = [
    "BaseFormatter",
    "CompareReportFormatter",
    "StructuredFormatter",
    "TabularFormatter",
    "get_formatter",
    "open_output",
]
