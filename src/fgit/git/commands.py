"""Hand control to git, the editor or watch by replacing this process."""

from __future__ import annotations

import os
import re
import subprocess
import sys
from collections.abc import Mapping, Sequence

import click

from fgit.git.models import FILE_TYPE_STAGED, FILE_TYPE_UNTRACKED, GitFile
from fgit.logging import EventLogger, NullEventLogger

ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m")
INLINE_DIFF_MAX_CHANGES = 6


def exec_program(
    argv: Sequence[str],
    env: Mapping[str, str] | None = None,
    logger: EventLogger | None = None,
) -> int:
    """Replace the current process with argv.

    Only returns when exec itself fails, reporting the error and yielding
    exit code 1.
    """
    (logger or NullEventLogger()).emit("exec", {"program": argv[0], "arg_count": len(argv) - 1})
    sys.stdout.flush()
    try:
        if env is None:
            os.execvp(argv[0], list(argv))
        else:
            os.execvpe(argv[0], list(argv), dict(env))
    except OSError as exc:
        click.echo(f"Failed to exec {argv[0]}: {exc}", err=True)
    return 1


def diff_argv(file: GitFile) -> list[str]:
    """Return the git diff command for a working-tree file."""
    if file.file_type == FILE_TYPE_UNTRACKED:
        return ["git", "diff", "--no-index", "/dev/null", str(file.abs_path)]
    return ["git", "diff", str(file.abs_path)]


def staged_diff_argv(file: GitFile) -> list[str]:
    return ["git", "diff", "--staged", str(file.abs_path)]


def add_argv(file: GitFile) -> list[str]:
    return ["git", "add", str(file.abs_path)]


def edit_argv(file: GitFile, editor: str) -> list[str]:
    return [editor, str(file.abs_path)]


def commit_argv(message: Sequence[str]) -> list[str]:
    """Return the commit command; message words are joined with spaces."""
    if not message:
        raise ValueError("Commit message required")
    return ["git", "commit", "-m", " ".join(message)]


def watch_argv(interval: int, program: str) -> list[str]:
    return ["watch", f"-n{interval}", "-c", program]


def watch_env() -> dict[str, str]:
    """Environment for watch so the inner listing keeps its colors."""
    env = dict(os.environ)
    env["CLICOLOR_FORCE"] = "1"
    return env


def inline_diff_lines(file: GitFile) -> list[str]:
    """Return the colored +/- lines of a small change, headers excluded."""
    argv = diff_argv(file)
    argv.insert(2, "--color=always")
    try:
        completed = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError:
        return []
    lines: list[str] = []
    for line in completed.stdout.splitlines():
        plain = ANSI_ESCAPE_PATTERN.sub("", line)
        if plain.startswith(("+++", "---")):
            continue
        if plain.startswith(("+", "-")):
            lines.append(line)
    return lines


def wants_inline_diff(file: GitFile) -> bool:
    """Small unstaged or untracked changes are shown inline in listings."""
    if file.file_type == FILE_TYPE_STAGED or file.diff_stats is None:
        return False
    return 0 < file.diff_stats.total <= INLINE_DIFF_MAX_CHANGES
