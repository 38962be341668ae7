"""Core data models: violations, per-policy violation sets, file statistics."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import NamedTuple, Optional

DETAIL_HEADER = ("file", "line_number", "description", "explanation", "severity", "commit")

SUMMARY_HEADER = (
    "filename",
    "sev_1",
    "sev_2",
    "sev_3",
    "sev_4",
    "sev_5",
    "lines",
    "avg_mccabe",
    "subs",
    "violations",
    "commit",
)

# Perl::Critic's --verbose templates. There is no diagnostics text outside
# Perl::Critic itself, so {diagnostics} renders the explanation.
VERBOSITY_FORMATS = {
    1: "{filename}:{line}:{column}:{description}\n",
    2: "{filename}: ({line}:{column}) {description}\n",
    3: "{description} at {filename} line {line}\n",
    4: "{description} at line {line}, column {column}.  {explanation}.  (Severity: {severity})\n",
    5: "{filename}: {description} at line {line}, column {column}.  {explanation}.  (Severity: {severity})\n",
    6: "{description} at line {line}, near '{source}'.  (Severity: {severity})\n",
    7: "{filename}: {description} at line {line} near '{source}'.  (Severity: {severity})\n",
    8: "[{policy}] {description} at line {line}, column {column}.  (Severity: {severity})\n",
    9: "[{policy}] {description} at line {line}, near '{source}'.  (Severity: {severity})\n",
    10: "{description} at line {line}, column {column}.\n  {policy} (Severity: {severity})\n{diagnostics}\n",
    11: "{description} at line {line}, near '{source}'.\n  {policy} (Severity: {severity})\n{diagnostics}\n",
}

DEFAULT_VERBOSITY = 11


@dataclass(frozen=True)
class Violation:
    """A single Perl::Critic finding."""

    policy: str
    severity: int
    line: int
    description: str
    explanation: str = ""
    source: str = ""
    column: int = 1
    filename: Optional[str] = None

    def to_string(self, verbose: int = DEFAULT_VERBOSITY) -> str:
        """Render with one of Perl::Critic's verbosity templates.

        Unknown levels fall back to the default template.
        """
        template = VERBOSITY_FORMATS.get(verbose, VERBOSITY_FORMATS[DEFAULT_VERBOSITY])
        return template.format(
            filename=self.filename or "",
            line=self.line,
            column=self.column,
            description=self.description,
            explanation=self.explanation,
            severity=self.severity,
            source=self.source,
            policy=self.policy,
            diagnostics=self.explanation,
        )

    def detail_row(self, commit: str = "") -> tuple:
        """Row matching :data:`DETAIL_HEADER`."""
        return (
            self.filename or "",
            self.line,
            self.description,
            self.explanation,
            self.severity,
            commit,
        )


class PolicyBucket(NamedTuple):
    """Violations of one policy within a single analysis run."""

    count: int
    violations: tuple[Violation, ...]


class ViolationSet(Mapping):
    """Read-only mapping of policy -> :class:`PolicyBucket`.

    Built once per (file, revision) analysis. Policies iterate in the order
    they first appear in the engine output.
    """

    def __init__(self, violations: Iterable[Violation] = ()) -> None:
        grouped: dict[str, list[Violation]] = {}
        for v in violations:
            grouped.setdefault(v.policy, []).append(v)
        self._buckets = MappingProxyType(
            {policy: PolicyBucket(len(vs), tuple(vs)) for policy, vs in grouped.items()}
        )

    def __getitem__(self, policy: str) -> PolicyBucket:
        return self._buckets[policy]

    def __iter__(self) -> Iterator[str]:
        return iter(self._buckets)

    def __len__(self) -> int:
        return len(self._buckets)

    def __repr__(self) -> str:
        counts = ", ".join(f"{p}: {b.count}" for p, b in self._buckets.items())
        return f"ViolationSet({{{counts}}})"

    def count(self, policy: str) -> int:
        """Violations of *policy*, 0 when absent."""
        bucket = self._buckets.get(policy)
        return bucket.count if bucket else 0

    @property
    def total(self) -> int:
        return sum(b.count for b in self._buckets.values())

    def violations(self) -> list[Violation]:
        """Every violation, grouped by policy."""
        return [v for b in self._buckets.values() for v in b.violations]


@dataclass
class FileStatistics:
    """Per-file aggregates reported by the engine's statistics block."""

    filename: str
    severity_counts: dict[int, int] = field(default_factory=dict)
    lines: int = 0
    avg_mccabe: float = 0.0
    subs: int = 0
    violations: int = 0
    commit: str = ""

    def sev(self, level: int) -> int:
        return self.severity_counts.get(level, 0)

    def as_row(self) -> tuple:
        """Row matching :data:`SUMMARY_HEADER`."""
        return (
            self.filename,
            *(self.sev(level) for level in range(1, 6)),
            self.lines,
            round(self.avg_mccabe, 2) if self.avg_mccabe else 0,
            self.subs,
            self.violations,
            self.commit,
        )


@dataclass
class AnalysisResult:
    """Violations plus statistics from one engine invocation."""

    violations: tuple[Violation, ...]
    statistics: FileStatistics

    def violation_set(self) -> ViolationSet:
        return ViolationSet(self.violations)
