"""Base formatter interface for detail/summary output."""

from abc import ABC, abstractmethod
from typing import Iterable, Sequence, TextIO


class BaseFormatter(ABC):
    """Abstract base class for row formatters."""

    name: str = ""

    def render(self, rows: Iterable[Sequence], header: Sequence[str], stream: TextIO) -> None:
        """Write formatted rows to *stream*."""
        stream.write(self.format(rows, header))

    @abstractmethod
    def format(self, rows: Iterable[Sequence], header: Sequence[str]) -> str:
        """Return formatted string representation of rows."""
