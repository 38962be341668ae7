"""Error taxonomy for git-critic.

Every error carries an :class:`ErrorKind`. Recoverable kinds are never
raised: they travel as values (a duplicate save, an unknown output format)
and are logged as a warning while the run continues. The rest abort the run
with a non-zero exit status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Categories of failure and whether a run survives them."""

    FATAL_INPUT = "fatal_input"  # missing file, missing option, bad configuration
    DUPLICATE_SNAPSHOT = "duplicate_snapshot"
    INVALID_CONFIGURATION = "invalid_configuration"  # unknown output format
    STORE_UNAVAILABLE = "store_unavailable"
    ANALYSIS_ENGINE_FAILURE = "analysis_engine_failure"
    VCS_FAILURE = "vcs_failure"

    @property
    def recoverable(self) -> bool:
        return self in (ErrorKind.DUPLICATE_SNAPSHOT, ErrorKind.INVALID_CONFIGURATION)


@dataclass(eq=False)
class GitCriticError(Exception):
    """Base exception with structured context.

    Attributes:
        message: Human-readable error description
        kind: Failure category
        context: Additional context (file path, commit, command line)
        recovery_hint: Suggested fix for the user
    """

    message: str
    kind: ErrorKind = ErrorKind.FATAL_INPUT
    context: dict[str, Any] = field(default_factory=dict)
    recovery_hint: str | None = None

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def __str__(self) -> str:
        return self.message

    @property
    def recoverable(self) -> bool:
        return self.kind.recoverable

    def to_json(self) -> dict[str, Any]:
        """Structured logging format."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "context": self.context,
            "recoverable": self.recoverable,
            "recovery_hint": self.recovery_hint,
        }


@dataclass(eq=False)
class FatalInputError(GitCriticError):
    """A referenced file is missing or a required option was not given."""

    kind: ErrorKind = ErrorKind.FATAL_INPUT


@dataclass(eq=False)
class ConfigurationError(GitCriticError):
    """Configuration values are invalid or a config file cannot be read.

    Fatal by default; the unknown-output-format fallback builds one with
    ``INVALID_CONFIGURATION`` and only logs it.
    """

    kind: ErrorKind = ErrorKind.FATAL_INPUT


@dataclass(eq=False)
class DuplicateSnapshotError(GitCriticError):
    """A snapshot of the file already exists for the commit. Carried by
    :class:`~git_critic.persistence.SaveResult`, not raised."""

    kind: ErrorKind = ErrorKind.DUPLICATE_SNAPSHOT
    recovery_hint: str | None = "use --force to re-analyze"


@dataclass(eq=False)
class StoreExistsError(GitCriticError):
    """``init`` was asked to create a store that already exists."""

    kind: ErrorKind = ErrorKind.FATAL_INPUT
    recovery_hint: str | None = "use --force to discard the existing store"


@dataclass(eq=False)
class StoreUnavailableError(GitCriticError):
    """The snapshot store cannot be opened or initialised."""

    kind: ErrorKind = ErrorKind.STORE_UNAVAILABLE
    recovery_hint: str | None = "run 'git-critic init' first"


@dataclass(eq=False)
class AnalysisEngineError(GitCriticError):
    """The external analysis engine failed or produced unreadable output."""

    kind: ErrorKind = ErrorKind.ANALYSIS_ENGINE_FAILURE


@dataclass(eq=False)
class VcsError(GitCriticError):
    """A git command failed."""

    kind: ErrorKind = ErrorKind.VCS_FAILURE
