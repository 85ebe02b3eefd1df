"""Collect changed, staged and untracked files from git."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from fgit.git.models import (
    FILE_TYPE_ORDER,
    FILE_TYPE_STAGED,
    FILE_TYPE_UNSTAGED,
    FILE_TYPE_UNTRACKED,
    DiffStats,
    GitFile,
    StatusEntry,
)
from fgit.ids.display import assign_display_ids


class GitCommandError(Exception):
    """Raised when a git invocation needed for status collection fails."""

    def __init__(self, reason: str, hint: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.hint = hint


def run_git(args: Sequence[str], cwd: Path | None = None) -> str:
    """Run git and return stdout, raising GitCommandError on failure."""
    try:
        completed = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="surrogateescape",
            check=False,
        )
    except OSError as exc:
        raise GitCommandError(
            reason=f"Failed to run git: {exc}",
            hint="Install git and make sure it is on PATH.",
        ) from exc
    if completed.returncode != 0:
        raise GitCommandError(
            reason=f"git {args[0]} failed",
            hint=completed.stderr.strip(),
        )
    return completed.stdout


def find_git_root(cwd: Path | None = None) -> Path:
    """Return the top-level directory of the enclosing repository."""
    try:
        output = run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    except GitCommandError as exc:
        if exc.reason.startswith("Failed to run git"):
            raise
        raise GitCommandError(
            reason="Not in a git repository",
            hint="Run f from inside a git working tree.",
        ) from exc
    return Path(output.strip())


def parse_porcelain(text: str) -> list[StatusEntry]:
    """Split `git status --porcelain -z` output into categorized entries.

    Paths arrive unquoted and NUL-terminated. Renames and copies carry
    their origin path in the following field, which is skipped. A file
    with both index and worktree changes yields a staged and an unstaged
    entry.
    """
    entries: list[StatusEntry] = []
    fields = iter(text.split("\0"))
    for field in fields:
        if len(field) < 4:
            continue
        status = field[:2]
        rel_path = field[3:]
        if "R" in status or "C" in status:
            next(fields, None)
        if status == "??":
            entries.append(StatusEntry(rel_path=rel_path, file_type=FILE_TYPE_UNTRACKED))
            continue
        index_char, worktree_char = status[0], status[1]
        if index_char != " ":
            entries.append(StatusEntry(rel_path=rel_path, file_type=FILE_TYPE_STAGED))
        if worktree_char != " ":
            entries.append(StatusEntry(rel_path=rel_path, file_type=FILE_TYPE_UNSTAGED))
    return entries


def parse_numstat(text: str) -> dict[str, DiffStats]:
    """Parse `git diff --numstat -z` into per-path counts.

    A rename leaves the path column empty and is followed by the origin
    and destination paths; counts are keyed by the destination.
    """
    stats: dict[str, DiffStats] = {}
    fields = iter(text.split("\0"))
    for field in fields:
        parts = field.split("\t", 2)
        if len(parts) < 3:
            continue
        path = parts[2]
        if not path:
            next(fields, None)
            path = next(fields, "")
            if not path:
                continue
        stats[path] = DiffStats(added=_as_count(parts[0]), removed=_as_count(parts[1]))
    return stats


def load_files(alphabet: Sequence[str], cwd: Path | None = None) -> list[GitFile]:
    """Return every changed file ordered unstaged, untracked, staged.

    Display ids are assigned across the whole set before ordering; within a
    category files are sorted oldest modification first.
    """
    git_root = find_git_root(cwd)
    entries = parse_porcelain(run_git(["status", "--porcelain", "-z", "-uall"], cwd=git_root))
    unstaged_stats = parse_numstat(_numstat_or_empty(git_root, cached=False))
    staged_stats = parse_numstat(_numstat_or_empty(git_root, cached=True))

    ids = assign_display_ids([entry.rel_path for entry in entries], alphabet)
    files: list[GitFile] = []
    for entry, stable_id in zip(entries, ids, strict=True):
        abs_path = git_root / entry.rel_path
        if entry.file_type == FILE_TYPE_UNTRACKED:
            diff_stats = _untracked_stats(abs_path)
        elif entry.file_type == FILE_TYPE_STAGED:
            diff_stats = staged_stats.get(entry.rel_path)
        else:
            diff_stats = unstaged_stats.get(entry.rel_path)
        files.append(
            GitFile(
                rel_path=entry.rel_path,
                abs_path=abs_path,
                file_type=entry.file_type,
                stable_id=stable_id,
                diff_stats=diff_stats,
                mtime=_mtime_seconds(abs_path),
            )
        )
    return order_files(files)


def order_files(files: Sequence[GitFile]) -> list[GitFile]:
    """Group by category order, oldest modification first within a group."""
    ordered: list[GitFile] = []
    for file_type in FILE_TYPE_ORDER:
        group = [file for file in files if file.file_type == file_type]
        group.sort(key=lambda file: file.mtime)
        ordered.extend(group)
    return ordered


def _numstat_or_empty(git_root: Path, cached: bool) -> str:
    args = ["diff", "--numstat", "-z"]
    if cached:
        args.append("--cached")
    try:
        return run_git(args, cwd=git_root)
    except GitCommandError:
        return ""


def _as_count(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        return 0


def _untracked_stats(path: Path) -> DiffStats | None:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return DiffStats(added=len(content.splitlines()), removed=0)


def _mtime_seconds(path: Path) -> int:
    try:
        return int(path.stat().st_mtime)
    except OSError:
        return 0
