"""Deterministic path fingerprints encoded over a configurable alphabet."""

from __future__ import annotations

from collections.abc import Sequence

FNV_OFFSET_BASIS = 0xCBF29CE484222325
FNV_PRIME = 0x100000001B3
_MASK_64 = (1 << 64) - 1

FINGERPRINT_LENGTH = 12


def fnv1a_64(data: bytes) -> int:
    """Return the 64-bit FNV-1a hash of raw bytes."""
    value = FNV_OFFSET_BASIS
    for byte in data:
        value ^= byte
        value = (value * FNV_PRIME) & _MASK_64
    return value


def fingerprint(path: str, alphabet: Sequence[str]) -> str:
    """Encode the FNV-1a hash of a path as FINGERPRINT_LENGTH alphabet symbols.

    Digits are emitted least-significant first. The alphabet must hold at
    least two distinct characters; callers normalize configured values before
    reaching this point.
    """
    value = fnv1a_64(path.encode("utf-8", errors="surrogateescape"))
    base = len(alphabet)
    symbols: list[str] = []
    for _ in range(FINGERPRINT_LENGTH):
        symbols.append(alphabet[value % base])
        value //= base
    return "".join(symbols)
