from __future__ import annotations

from fgit.picker import generate_keys, key_length

ALPHABET = "dfghklsa"


def test_zero_count_yields_no_keys() -> None:
    assert generate_keys(0, ALPHABET) == []


def test_single_symbol_keys_follow_alphabet_order() -> None:
    assert generate_keys(8, ALPHABET) == list(ALPHABET)
    assert generate_keys(3, ALPHABET) == ["d", "f", "g"]


def test_keys_grow_once_alphabet_is_exhausted() -> None:
    keys = generate_keys(10, ALPHABET)
    assert keys[:3] == ["dd", "df", "dg"]
    assert keys[7] == "da"
    assert keys[8] == "fd"
    assert keys[9] == "ff"


def test_keys_are_distinct_fixed_length_and_tight() -> None:
    for alphabet in ("ab", "abc", ALPHABET):
        base = len(alphabet)
        for count in range(1, 80):
            keys = generate_keys(count, alphabet)
            length = len(keys[0])
            assert len(keys) == count
            assert len(set(keys)) == count
            assert all(len(key) == length for key in keys)
            assert base**length >= count
            if length > 1:
                assert count > base ** (length - 1)


def test_keys_are_in_lexicographic_alphabet_order() -> None:
    keys = generate_keys(9, "ab")
    assert keys == ["aaaa", "aaab", "aaba", "aabb", "abaa", "abab", "abba", "abbb", "baaa"]


def test_key_length_boundaries() -> None:
    assert key_length(1, 2) == 1
    assert key_length(2, 2) == 1
    assert key_length(3, 2) == 2
    assert key_length(64, 8) == 2
    assert key_length(65, 8) == 3
