"""Shortest-unique display prefixes over the current file set."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from fgit.ids.fingerprint import fingerprint


@dataclass(slots=True, frozen=True)
class StableId:
    """Display prefix paired with the full fingerprint it was cut from."""

    display: str
    full_hash: str

    def __str__(self) -> str:
        return self.display

    def matches(self, text: str) -> bool:
        """Return True when text is a prefix of the full fingerprint."""
        return self.full_hash.startswith(text)


def assign_display_ids(paths: Sequence[str], alphabet: Sequence[str]) -> list[StableId]:
    """Return one StableId per path, in input order.

    Each display is the shortest fingerprint prefix not shared, at the same
    length, with any entry whose path differs. Repeated paths (a file that is
    both staged and unstaged) never force each other to grow.
    """
    if not paths:
        return []
    hashes = [fingerprint(path, alphabet) for path in paths]
    ids: list[StableId] = []
    for index, full_hash in enumerate(hashes):
        length = _minimal_prefix_length(index, paths, hashes)
        ids.append(StableId(display=full_hash[:length], full_hash=full_hash))
    return ids


def _minimal_prefix_length(index: int, paths: Sequence[str], hashes: Sequence[str]) -> int:
    own_path = paths[index]
    own_hash = hashes[index]
    rivals = [
        other
        for position, other in enumerate(hashes)
        if position != index and paths[position] != own_path
    ]
    length = 1
    while length < len(own_hash):
        prefix = own_hash[:length]
        if not any(other[:length] == prefix for other in rivals):
            break
        length += 1
    return length
