"""Typed models for working-tree files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fgit.ids.display import StableId

FILE_TYPE_UNSTAGED = "unstaged"
FILE_TYPE_UNTRACKED = "untracked"
FILE_TYPE_STAGED = "staged"

FILE_TYPE_ORDER = (FILE_TYPE_UNSTAGED, FILE_TYPE_UNTRACKED, FILE_TYPE_STAGED)


@dataclass(slots=True, frozen=True)
class DiffStats:
    """Line-level change counts for one file."""

    added: int
    removed: int

    @property
    def total(self) -> int:
        return self.added + self.removed


@dataclass(slots=True, frozen=True)
class StatusEntry:
    """One categorized row parsed from git status output."""

    rel_path: str
    file_type: str


@dataclass(slots=True, frozen=True)
class GitFile:
    """A changed file with its stable identifier."""

    rel_path: str
    abs_path: Path
    file_type: str
    stable_id: StableId
    diff_stats: DiffStats | None = None
    mtime: int = 0
