"""Analysis engine interface."""

from abc import ABC, abstractmethod
from pathlib import Path

from ..exceptions import FatalInputError
from ..models import AnalysisResult


class AnalysisEngine(ABC):
    """Runs static analysis over one unit of source text."""

    @abstractmethod
    def critique(self, source: str, filename: str) -> AnalysisResult:
        """Analyze *source*; *filename* is attached to the results."""

    def critique_file(self, path: str) -> AnalysisResult:
        """Analyze a file from the local filesystem."""
        file = Path(path)
        if not file.is_file():
            raise FatalInputError(f"file ({path}) not found", context={"file": path})
        return self.critique(file.read_text(encoding="utf-8", errors="replace"), path)
