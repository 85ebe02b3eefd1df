"""Working-tree status source and process-replacing git actions."""

from .models import (
    FILE_TYPE_ORDER,
    FILE_TYPE_STAGED,
    FILE_TYPE_UNSTAGED,
    FILE_TYPE_UNTRACKED,
    DiffStats,
    GitFile,
    StatusEntry,
)
from .status import (
    GitCommandError,
    find_git_root,
    load_files,
    parse_numstat,
    parse_porcelain,
)

__all__ = [
    "DiffStats",
    "FILE_TYPE_ORDER",
    "FILE_TYPE_STAGED",
    "FILE_TYPE_UNSTAGED",
    "FILE_TYPE_UNTRACKED",
    "GitCommandError",
    "GitFile",
    "StatusEntry",
    "find_git_root",
    "load_files",
    "parse_numstat",
    "parse_porcelain",
]
