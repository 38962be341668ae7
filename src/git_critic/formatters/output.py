"""Scoped output target: a file, or stdout when no path is given."""

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO

from ..exceptions import FatalInputError


@contextmanager
def open_output(path: Optional[str] = None) -> Iterator[TextIO]:
    """Yield a writable text stream.

    A file is closed on every exit path, including errors raised while
    writing. stdout is flushed but left open.
    """
    if not path:
        try:
            yield sys.stdout
        finally:
            sys.stdout.flush()
        return

    try:
        fh = open(Path(path), "w", encoding="utf-8", newline="")
    except OSError as e:
        raise FatalInputError(f"could not open output file: {e}", context={"output": path})
    with fh:
        yield fh
