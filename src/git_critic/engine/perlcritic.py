"""Perl::Critic adapter: runs the ``perlcritic`` executable in a subprocess.

Source is fed on stdin. Violations are requested in a delimiter-separated
``--verbose`` template and ``--statistics`` appends the summary block that
supplies line/subroutine/McCabe figures.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Optional

from ..exceptions import AnalysisEngineError, FatalInputError
from ..logging_config import get_logger
from ..models import AnalysisResult, FileStatistics, Violation
from .base import AnalysisEngine

logger = get_logger(__name__)

FIELD_SEP = "\x1f"
RECORD_SEP = "\x1e"

# policy, severity, line, column, description, explanation, source
VIOLATION_FORMAT = FIELD_SEP.join(["%p", "%s", "%l", "%c", "%m", "%e", "%r"]) + RECORD_SEP

# perlcritic exits 2 when it found violations, 0 when it found none
_OK_EXIT_CODES = (0, 2)

_SUBS_RE = re.compile(r"^\s*([\d,]+) subroutines/methods\.", re.MULTILINE)
_LINES_RE = re.compile(r"^\s*([\d,]+) lines, consisting of:", re.MULTILINE)
_MCCABE_RE = re.compile(r"Average McCabe score of subroutines was ([\d.]+)\.")
_TOTAL_RE = re.compile(r"^\s*([\d,]+) violations\.\s*$", re.MULTILINE)
_SEVERITY_RE = re.compile(r"^\s*([\d,]+) severity (\d) violations\.", re.MULTILINE)


def _to_int(text: str) -> int:
    return int(text.replace(",", ""))


def parse_violations(text: str, filename: Optional[str] = None) -> list[Violation]:
    """Parse violation records written with :data:`VIOLATION_FORMAT`."""
    violations = []
    for record in text.split(RECORD_SEP):
        record = record.lstrip("\n")
        if not record.strip():
            continue
        fields = record.split(FIELD_SEP)
        if len(fields) != 7:
            raise AnalysisEngineError(
                "unexpected perlcritic output",
                context={"record": record[:200], "file": filename},
            )
        policy, severity, line, column, description, explanation, source = fields
        violations.append(
            Violation(
                policy=policy,
                severity=int(severity),
                line=int(line),
                column=int(column),
                description=description,
                explanation=explanation,
                source=source,
                filename=filename,
            )
        )
    return violations


def parse_statistics(text: str, filename: str, violations: list[Violation]) -> FileStatistics:
    """Parse the ``--statistics`` block.

    Severity counts and the total fall back to the parsed violations when the
    block omits them (perlcritic prints no severity lines for clean files).
    """
    stats = FileStatistics(filename=filename)

    m = _SUBS_RE.search(text)
    stats.subs = _to_int(m.group(1)) if m else 0
    m = _LINES_RE.search(text)
    stats.lines = _to_int(m.group(1)) if m else 0
    m = _MCCABE_RE.search(text)
    stats.avg_mccabe = round(float(m.group(1)), 2) if m else 0.0

    counts = {int(level): _to_int(n) for n, level in _SEVERITY_RE.findall(text)}
    if not counts:
        for v in violations:
            counts[v.severity] = counts.get(v.severity, 0) + 1
    stats.severity_counts = counts

    m = _TOTAL_RE.search(text)
    stats.violations = _to_int(m.group(1)) if m else len(violations)
    return stats


def parse_output(output: str, filename: str) -> AnalysisResult:
    """Split perlcritic stdout into violations and statistics."""
    head, sep, tail = output.rpartition(RECORD_SEP)
    if sep:
        violations = parse_violations(head + sep, filename)
        stats_text = tail
    else:
        violations = []
        stats_text = output
    statistics = parse_statistics(stats_text, filename, violations)
    return AnalysisResult(violations=tuple(violations), statistics=statistics)


class PerlCriticEngine(AnalysisEngine):
    """Analysis engine backed by the ``perlcritic`` command line tool."""

    def __init__(
        self,
        executable: str = "perlcritic",
        profile: Optional[str] = None,
        severity: int = 1,
    ) -> None:
        if profile is not None and not Path(profile).is_file():
            raise FatalInputError(
                f"Perl::Critic profile not readable: {profile}",
                context={"profile": profile},
                recovery_hint="pass --profile or create ~/.perlcriticrc",
            )
        self.executable = executable
        self.profile = profile
        self.severity = severity

    def command(self) -> list[str]:
        cmd = [self.executable, "--severity", str(self.severity)]
        if self.profile:
            cmd += ["--profile", self.profile]
        else:
            cmd.append("--noprofile")
        cmd += ["--quiet", "--statistics", "--verbose", VIOLATION_FORMAT, "-"]
        return cmd

    def critique(self, source: str, filename: str) -> AnalysisResult:
        try:
            result = subprocess.run(
                self.command(),
                input=source,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError:
            raise AnalysisEngineError(
                f"perlcritic executable not found: {self.executable}",
                recovery_hint="install Perl::Critic (cpanm Perl::Critic)",
            )

        if result.returncode not in _OK_EXIT_CODES:
            raise AnalysisEngineError(
                f"perlcritic failed on {filename}: {result.stderr.strip()}",
                context={"file": filename, "exit_code": result.returncode},
            )

        return parse_output(result.stdout, filename)
