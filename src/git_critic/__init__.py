"""
git-critic - Perl::Critic history for git repositories

Records Perl::Critic results per file and commit in a SQLite store and
reports how the set of violations changes between a working copy and a
reference commit, or between two stored commits.
"""

__version__ = "0.3.0"

from .diff import FileComparison, ViolationDiff, ViolationDiffer
from .models import AnalysisResult, FileStatistics, Violation, ViolationSet

__all__ = [
    "AnalysisResult",
    "FileComparison",
    "FileStatistics",
    "Violation",
    "ViolationDiff",
    "ViolationDiffer",
    "ViolationSet",
]
