"""Exception hierarchy for git-critic."""

from .taxonomy import (
    AnalysisEngineError,
    ConfigurationError,
    DuplicateSnapshotError,
    ErrorKind,
    FatalInputError,
    GitCriticError,
    StoreExistsError,
    StoreUnavailableError,
    VcsError,
)

__all__ = [
    "ErrorKind",
    "GitCriticError",
    "FatalInputError",
    "ConfigurationError",
    "DuplicateSnapshotError",
    "StoreExistsError",
    "StoreUnavailableError",
    "AnalysisEngineError",
    "VcsError",
]
