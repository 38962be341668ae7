"""Plain-text report of a working copy vs. reference commit comparison."""

from typing import Iterable, TextIO

from ..diff import FileComparison
from ..models import DEFAULT_VERBOSITY


def line(n: int = 80) -> str:
    return "-" * n + "\n"


class CompareReportFormatter:
    """Writes, per file, every current violation, then added and removed ones.

    Current violations are prefixed ``[*]``, violations of added policies
    ``[+]`` and baseline fragments no longer present ``[-]``.
    """

    def __init__(self, verbose: int = DEFAULT_VERBOSITY, width: int = 80) -> None:
        self.verbose = verbose
        self.width = width

    def render(self, comparisons: Iterable[FileComparison], stream: TextIO) -> None:
        for comparison in comparisons:
            self.render_file(comparison, stream)

    def render_file(self, comparison: FileComparison, stream: TextIO) -> None:
        rule = line(self.width)

        stream.write(rule)
        stream.write(
            f"{comparison.filename} - removed: [{comparison.removed_count}] "
            f"added: [{comparison.added_count}]\n"
        )
        stream.write(rule)

        for bucket in comparison.current.values():
            for v in bucket.violations:
                stream.write("\t[*] " + v.to_string(self.verbose))

        if comparison.diff.added:
            stream.write(rule)
            for _, violations in comparison.diff.added:
                for v in violations:
                    stream.write("\t[+] " + v.to_string(self.verbose))

        if comparison.diff.removed:
            stream.write(rule)
            for fragment in comparison.removed_fragments(self.verbose):
                stream.write("\t[-] " + fragment)
