"""Resolve user-typed identifiers against the current file set."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fgit.git.models import GitFile


@dataclass(slots=True, frozen=True)
class UniqueMatch:
    """Exactly one file carries the typed prefix."""

    file: GitFile


@dataclass(slots=True, frozen=True)
class AmbiguousMatch:
    """Several files carry the typed prefix."""

    count: int


@dataclass(slots=True, frozen=True)
class NoMatch:
    """No file carries the typed prefix."""


IdMatch = UniqueMatch | AmbiguousMatch | NoMatch

ACTIONABLE_FILE_TYPES = ("unstaged", "untracked")


def resolve(files: Sequence[GitFile], text: str) -> IdMatch:
    """Match text against each file's full fingerprint, never its display id.

    A prefix memorized while it was the display id keeps working after new
    files lengthen the display, as long as it still singles out one file.
    """
    matches = [file for file in files if file.stable_id.matches(text)]
    if not matches:
        return NoMatch()
    if len(matches) == 1:
        return UniqueMatch(file=matches[0])
    return AmbiguousMatch(count=len(matches))


def first_actionable(files: Sequence[GitFile]) -> GitFile | None:
    """Return the first unstaged or untracked file in list order."""
    for file in files:
        if file.file_type in ACTIONABLE_FILE_TYPES:
            return file
    return None
