"""CSV formatter: header row then one line per record."""

import csv
import io
from typing import Iterable, Sequence

from .base import BaseFormatter


class TabularFormatter(BaseFormatter):
    """Render rows as CSV."""

    name = "csv"

    def format(self, rows: Iterable[Sequence], header: Sequence[str]) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(header)
        for row in rows:
            writer.writerow(row)
        return output.getvalue()
