"""Flatten a git tree into the paths of its blobs."""

from __future__ import annotations

from typing import Iterator, Protocol


class TreeHandle(Protocol):
    """Anything that lists tree entries and opens sub-trees (see :class:`GitTree`)."""

    def entries(self) -> Iterator: ...

    def subtree(self, entry) -> "TreeHandle": ...


def iter_files(tree: TreeHandle, prefix: str = "") -> Iterator[str]:
    """Yield blob paths depth-first, in tree-entry order.

    Submodule entries are neither files nor trees here and are skipped.
    """
    for entry in tree.entries():
        if entry.kind == "blob":
            yield prefix + entry.name
        elif entry.kind == "tree":
            yield from iter_files(tree.subtree(entry), prefix + entry.name + "/")


def list_files(tree: TreeHandle) -> list[str]:
    """All blob paths under *tree*. Order follows the tree, it is not sorted."""
    return list(iter_files(tree))
