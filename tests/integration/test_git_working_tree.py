from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from fgit import cli
from fgit.git import GitCommandError, find_git_root, load_files
from fgit.ids import UniqueMatch, fingerprint, resolve

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")

ALPHABET = "dfghklsa"


def git(repo: Path, *args: str) -> None:
    subprocess.run(
        [
            "git",
            "-c",
            "user.email=dev@example.com",
            "-c",
            "user.name=Dev",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=repo,
        check=True,
        capture_output=True,
    )


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    root = tmp_path / "work"
    root.mkdir()
    git(root, "init", "-q")
    (root / "tracked.txt").write_text("one\ntwo\n", encoding="utf-8")
    (root / "both.txt").write_text("alpha\n", encoding="utf-8")
    git(root, "add", "tracked.txt", "both.txt")
    git(root, "commit", "-q", "-m", "initial")

    (root / "tracked.txt").write_text("one\nTWO\nthree\n", encoding="utf-8")
    (root / "both.txt").write_text("alpha\nbeta\n", encoding="utf-8")
    git(root, "add", "both.txt")
    (root / "both.txt").write_text("alpha\nbeta\ngamma\n", encoding="utf-8")
    (root / "src").mkdir()
    (root / "src" / "new.py").write_text("a = 1\nb = 2\nc = 3\n", encoding="utf-8")
    return root


def test_load_files_orders_categories_and_collects_stats(repo: Path) -> None:
    files = load_files(ALPHABET, cwd=repo)

    summary = [(file.file_type, file.rel_path) for file in files]
    assert sorted(summary[:2]) == [("unstaged", "both.txt"), ("unstaged", "tracked.txt")]
    assert summary[2:] == [("untracked", "src/new.py"), ("staged", "both.txt")]

    by_key = {(file.file_type, file.rel_path): file for file in files}
    untracked = by_key[("untracked", "src/new.py")]
    assert untracked.diff_stats is not None
    assert (untracked.diff_stats.added, untracked.diff_stats.removed) == (3, 0)
    assert untracked.abs_path.resolve() == (repo / "src" / "new.py").resolve()

    tracked = by_key[("unstaged", "tracked.txt")]
    assert tracked.diff_stats is not None
    assert (tracked.diff_stats.added, tracked.diff_stats.removed) == (2, 1)

    staged = by_key[("staged", "both.txt")]
    assert staged.diff_stats is not None
    assert (staged.diff_stats.added, staged.diff_stats.removed) == (1, 0)


def test_same_path_in_two_categories_shares_its_id(repo: Path) -> None:
    files = load_files(ALPHABET, cwd=repo)
    both = [file for file in files if file.rel_path == "both.txt"]

    assert len(both) == 2
    assert both[0].stable_id == both[1].stable_id
    assert both[0].stable_id.full_hash == fingerprint("both.txt", ALPHABET)


def test_fingerprints_stay_stable_as_the_set_grows(repo: Path) -> None:
    before = {file.rel_path: file.stable_id.full_hash for file in load_files(ALPHABET, cwd=repo)}
    for index in range(15):
        (repo / f"extra_{index}.txt").write_text("x\n", encoding="utf-8")
    after_files = load_files(ALPHABET, cwd=repo)
    after = {file.rel_path: file.stable_id.full_hash for file in after_files}

    for path, full_hash in before.items():
        assert after[path] == full_hash
    tracked = next(file for file in after_files if file.rel_path == "tracked.txt")
    assert resolve(after_files, tracked.stable_id.full_hash[:8]) == UniqueMatch(file=tracked)


def test_non_ascii_and_renamed_paths_are_reported_verbatim(repo: Path) -> None:
    (repo / "dé.txt").write_text("x\ny\n", encoding="utf-8")
    git(repo, "mv", "tracked.txt", "moved.txt")
    files = load_files(ALPHABET, cwd=repo)

    by_key = {(file.file_type, file.rel_path): file for file in files}
    accented = by_key[("untracked", "dé.txt")]
    assert accented.abs_path.is_file()
    assert accented.stable_id.full_hash == fingerprint("dé.txt", ALPHABET)
    assert ("staged", "moved.txt") in by_key
    assert ("staged", "tracked.txt") not in by_key


def test_outside_repository_raises_git_command_error(tmp_path: Path) -> None:
    outside = tmp_path / "plain"
    outside.mkdir()
    with pytest.raises(GitCommandError, match="Not in a git repository"):
        find_git_root(outside)


def test_cli_list_against_real_repository(
    repo: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(repo)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(repo / ".no-config"))
    monkeypatch.delenv("CLICOLOR_FORCE", raising=False)

    assert cli.main(["list"]) == 0

    out = capsys.readouterr().out
    assert "── Unstaged ──" in out
    assert "── Untracked ──" in out
    assert "── Staged ──" in out
    assert "src/new.py +3/-0" in out
    assert "+TWO" in out
