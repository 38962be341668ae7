"""Version-control access: git subprocess wrapper and tree walking."""

from .git import GitRepository, GitTree, TreeEntry
from .tree import iter_files, list_files

__all__ = ["GitRepository", "GitTree", "TreeEntry", "iter_files", "list_files"]
