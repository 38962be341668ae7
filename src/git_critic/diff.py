"""Violation diff: classifies per-policy changes between two analysis runs.

Diffing is count-based per policy, not per violation instance:

  * a policy is *added* when the current run has strictly more violations of
    it than the baseline (or the baseline has none);
  * a policy is *removed* when the baseline has strictly more violations of
    it than the current run (or the current run has none);
  * equal counts are unchanged, even if the individual violations differ.

Added entries carry the whole current list for the policy and removed
entries the whole baseline list, not just the delta.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import DEFAULT_VERBOSITY, Violation, ViolationSet

PolicyViolations = tuple[str, tuple[Violation, ...]]


@dataclass
class ViolationDiff:
    """Policies whose violation count grew (added) or shrank (removed)."""

    added: list[PolicyViolations] = field(default_factory=list)
    removed: list[PolicyViolations] = field(default_factory=list)

    @property
    def unchanged(self) -> bool:
        return not self.added and not self.removed

    def added_policies(self) -> list[str]:
        return [policy for policy, _ in self.added]

    def removed_policies(self) -> list[str]:
        return [policy for policy, _ in self.removed]


class ViolationDiffer:
    """Compare a baseline :class:`ViolationSet` against a current one."""

    def diff(self, baseline: ViolationSet, current: ViolationSet) -> ViolationDiff:
        result = ViolationDiff()

        for policy, bucket in current.items():
            if policy in baseline and bucket.count <= baseline[policy].count:
                continue
            result.added.append((policy, bucket.violations))

        for policy, bucket in baseline.items():
            if policy in current and bucket.count <= current[policy].count:
                continue
            result.removed.append((policy, bucket.violations))

        return result

    @staticmethod
    def removed_fragments(
        baseline: ViolationSet,
        current: ViolationSet,
        removed: list[PolicyViolations],
        verbose: int = DEFAULT_VERBOSITY,
    ) -> list[str]:
        """Rendered baseline violations that no longer appear verbatim.

        Only applied to the removed side: a removed policy's baseline
        violations are shown unless the same rendered text is still present
        among the current run's violations of that policy.
        """
        fragments: dict[str, None] = {}
        for policy, _ in removed:
            old = baseline[policy].violations if policy in baseline else ()
            new = current[policy].violations if policy in current else ()
            still_present = {v.to_string(verbose) for v in new}
            for v in old:
                text = v.to_string(verbose)
                if text not in still_present:
                    fragments.setdefault(text, None)
        return list(fragments)


@dataclass
class FileComparison:
    """Baseline vs current result for one file."""

    filename: str
    baseline: ViolationSet
    current: ViolationSet
    diff: ViolationDiff

    @classmethod
    def build(
        cls,
        filename: str,
        baseline: ViolationSet,
        current: ViolationSet,
        differ: ViolationDiffer | None = None,
    ) -> "FileComparison":
        differ = differ or ViolationDiffer()
        return cls(filename, baseline, current, differ.diff(baseline, current))

    @property
    def added_count(self) -> int:
        return len(self.diff.added)

    @property
    def removed_count(self) -> int:
        return len(self.diff.removed)

    def removed_fragments(self, verbose: int = DEFAULT_VERBOSITY) -> list[str]:
        return ViolationDiffer.removed_fragments(
            self.baseline, self.current, self.diff.removed, verbose
        )
