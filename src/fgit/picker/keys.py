"""Fixed-length positional keys for one picker session."""

from __future__ import annotations

from collections.abc import Sequence


def key_length(count: int, base: int) -> int:
    """Return the smallest length L >= 1 with base**L >= count."""
    length = 1
    while base**length < count:
        length += 1
    return length


def generate_keys(count: int, alphabet: Sequence[str]) -> list[str]:
    """Assign keys by list position, most significant digit first.

    Keys depend only on position, so they say nothing about which path they
    label and are regenerated every session.
    """
    if count <= 0:
        return []
    base = len(alphabet)
    length = key_length(count, base)
    keys: list[str] = []
    for index in range(count):
        digits: list[str] = []
        value = index
        for _ in range(length):
            digits.append(alphabet[value % base])
            value //= base
        keys.append("".join(reversed(digits)))
    return keys
