"""JSON formatter: an array of objects keyed by the header names."""

import json
from typing import Any, Iterable, Sequence

from .base import BaseFormatter


class StructuredFormatter(BaseFormatter):
    """Render rows as pretty-printed JSON."""

    name = "json"

    def format(self, rows: Iterable[Sequence], header: Sequence[str]) -> str:
        records = [dict(zip(header, row)) for row in rows]
        return self.format_records(records)

    @staticmethod
    def format_records(records: list[dict[str, Any]]) -> str:
        return json.dumps(records, indent=2) + "\n"
