"""Styled listing of changed files."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import click

from fgit.git.commands import inline_diff_lines, wants_inline_diff
from fgit.git.models import (
    FILE_TYPE_STAGED,
    FILE_TYPE_UNSTAGED,
    FILE_TYPE_UNTRACKED,
    GitFile,
)

CATEGORY_STYLES = {
    FILE_TYPE_UNSTAGED: ("Unstaged", "yellow"),
    FILE_TYPE_UNTRACKED: ("Untracked", "green"),
    FILE_TYPE_STAGED: ("Staged", "cyan"),
}
ID_COLUMN_WIDTH = 5
INLINE_DIFF_INDENT = " " * 9


def category_header(file_type: str) -> str:
    name, color = CATEGORY_STYLES[file_type]
    return click.style(f"── {name} ──", fg=color)


def format_stats(file: GitFile) -> str:
    stats = file.diff_stats
    if stats is None or (stats.added == 0 and stats.removed == 0):
        return ""
    added = click.style(f"+{stats.added}", fg="green")
    removed = click.style(f"/-{stats.removed}", fg="red")
    return f" {added}{removed}"


def render_file_list(
    files: Sequence[GitFile],
    inline_diff: Callable[[GitFile], list[str]] = inline_diff_lines,
) -> list[str]:
    """Return the listing lines, grouped under one header per category."""
    if not files:
        return [click.style("No changed files", dim=True)]
    lines: list[str] = []
    last_type: str | None = None
    for file in files:
        if file.file_type != last_type:
            if last_type is not None:
                lines.append("")
            lines.append(category_header(file.file_type))
            last_type = file.file_type
        id_column = click.style(str(file.stable_id).ljust(ID_COLUMN_WIDTH), fg="cyan")
        lines.append(f"  {id_column} {file.rel_path}{format_stats(file)}")
        if wants_inline_diff(file):
            lines.extend(f"{INLINE_DIFF_INDENT}{line}" for line in inline_diff(file))
    return lines


def echo_file_list(files: Sequence[GitFile], color: bool | None = None) -> None:
    for line in render_file_list(files):
        click.echo(line, color=color)
