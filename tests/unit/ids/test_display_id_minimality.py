from __future__ import annotations

from pathlib import Path

from fgit.git import GitFile
from fgit.ids import (
    FINGERPRINT_LENGTH,
    AmbiguousMatch,
    assign_display_ids,
    fingerprint,
    resolve,
)

ALPHABET = "dfghklsa"


def _assert_minimal(paths: list[str], alphabet: str) -> None:
    ids = assign_display_ids(paths, alphabet)
    for index, stable_id in enumerate(ids):
        rivals = [
            other.full_hash
            for position, other in enumerate(ids)
            if position != index and paths[position] != paths[index]
        ]
        length = len(stable_id.display)
        assert stable_id.full_hash.startswith(stable_id.display)
        if length < FINGERPRINT_LENGTH:
            assert not any(rival[:length] == stable_id.display for rival in rivals)
        if length > 1:
            shorter = stable_id.display[:-1]
            assert any(rival[: length - 1] == shorter for rival in rivals)


def test_empty_input_yields_empty_output() -> None:
    assert assign_display_ids([], ALPHABET) == []


def test_single_path_gets_one_symbol_display() -> None:
    ids = assign_display_ids(["src/main.rs"], ALPHABET)
    assert len(ids) == 1
    assert len(ids[0].display) == 1
    assert ids[0].full_hash == fingerprint("src/main.rs", ALPHABET)


def test_displays_are_minimal_for_many_paths() -> None:
    paths = [f"src/module_{index}.py" for index in range(60)]
    _assert_minimal(paths, ALPHABET)


def test_binary_alphabet_forces_longer_displays() -> None:
    paths = [f"file{index}.txt" for index in range(12)]
    ids = assign_display_ids(paths, "ab")
    assert max(len(stable_id.display) for stable_id in ids) > 1
    _assert_minimal(paths, "ab")


def test_repeated_path_entries_do_not_collide_with_each_other() -> None:
    ids = assign_display_ids(["src/app.py", "src/app.py"], ALPHABET)
    assert ids[0] == ids[1]
    assert len(ids[0].display) == 1


def test_repeated_paths_still_grow_against_other_paths() -> None:
    paths = ["a.txt", "b.txt", "c.txt", "a.txt", "d.txt", "e.txt", "f.txt"]
    _assert_minimal(paths, "ab")
    ids = assign_display_ids(paths, "ab")
    assert ids[0] == ids[3]


def test_display_changes_with_set_but_fingerprint_does_not() -> None:
    alone = assign_display_ids(["target.py"], "ab")[0]
    crowded = assign_display_ids(["target.py"] + [f"other{i}.py" for i in range(20)], "ab")[0]
    assert alone.full_hash == crowded.full_hash
    assert len(crowded.display) >= len(alone.display)


def test_stable_id_str_is_display() -> None:
    stable_id = assign_display_ids(["src/main.rs"], ALPHABET)[0]
    assert str(stable_id) == stable_id.display


def _first_full_collision(alphabet: str) -> tuple[str, str]:
    seen: dict[str, str] = {}
    for index in range(2000):
        path = f"path{index}"
        full_hash = fingerprint(path, alphabet)
        if full_hash in seen:
            return seen[full_hash], path
        seen[full_hash] = path
    raise AssertionError("no colliding fingerprints in search range")


def test_full_collision_falls_back_to_whole_fingerprint() -> None:
    first, second = _first_full_collision("ab")
    ids = assign_display_ids([first, second], "ab")

    assert ids[0].full_hash == ids[1].full_hash
    for stable_id in ids:
        assert len(stable_id.display) == FINGERPRINT_LENGTH
        assert stable_id.display == stable_id.full_hash

    files = [
        GitFile(rel_path=path, abs_path=Path(path), file_type="unstaged", stable_id=stable_id)
        for path, stable_id in zip([first, second], ids, strict=True)
    ]
    assert resolve(files, ids[0].full_hash) == AmbiguousMatch(count=2)
