"""Command-line entrypoint for the `f` git file manager."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass

import click

from fgit.config import AppConfig, load_effective_config, overrides_from_env
from fgit.display import echo_file_list
from fgit.git import GitCommandError, GitFile, load_files
from fgit.git.commands import (
    add_argv,
    commit_argv,
    diff_argv,
    edit_argv,
    exec_program,
    staged_diff_argv,
    watch_argv,
    watch_env,
)
from fgit.ids import AmbiguousMatch, UniqueMatch, first_actionable, resolve
from fgit.logging import EventLogger, JsonlEventLogger, NullEventLogger
from fgit.picker.terminal import action_lines, pick_file, read_action

SUBCOMMAND_ALIASES: dict[str, tuple[str, ...]] = {
    "list": ("l",),
    "diff": ("d",),
    "staged-diff": ("sd",),
    "add": ("a",),
    "edit": ("e", "v"),
    "commit": ("c",),
    "push": ("p",),
    "interactive": ("i",),
    "watch": ("w",),
}
SUBCOMMAND_NAMES = frozenset(
    list(SUBCOMMAND_ALIASES)
    + [alias for aliases in SUBCOMMAND_ALIASES.values() for alias in aliases]
)
ID_FIRST_ACTIONS = {
    "a": "add",
    "add": "add",
    "d": "diff",
    "diff": "diff",
    "sd": "staged-diff",
    "staged-diff": "staged-diff",
    "e": "edit",
    "v": "edit",
    "edit": "edit",
}
PICKER_ACTIONS = {"a": "add", "d": "diff", "s": "staged-diff", "e": "edit"}
VERBOSE_FLAGS = ("-v", "--verbose")


@dataclass(slots=True, frozen=True)
class RunContext:
    """Per-invocation settings shared by every command."""

    config: AppConfig
    logger: EventLogger
    color: bool | None = None


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for subcommands and their aliases."""
    parser = argparse.ArgumentParser(
        prog="f",
        description="A keyboard-driven git file manager",
        epilog="ID-first syntax:\n  f <id> <cmd>   Run command on file (e.g., f df d, f gk a)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("list", aliases=["l"], help="List changed files")
    for name, help_text in (
        ("diff", "Show diff for a file"),
        ("staged-diff", "Show staged diff for a file"),
        ("add", "Stage a file"),
        ("edit", "Edit a file in $EDITOR"),
    ):
        sub = subparsers.add_parser(name, aliases=list(SUBCOMMAND_ALIASES[name]), help=help_text)
        sub.add_argument("id", nargs="?", default=None, help="File ID (defaults to first unstaged)")
    commit = subparsers.add_parser("commit", aliases=["c"], help="Commit staged changes")
    commit.add_argument("message", nargs="*", help="Commit message")
    subparsers.add_parser("push", aliases=["p"], help="Push to remote")
    subparsers.add_parser("interactive", aliases=["i"], help="Interactive file picker")
    watch = subparsers.add_parser("watch", aliases=["w"], help="Watch file status")
    watch.add_argument(
        "-n", "--interval", type=int, default=2, help="Refresh interval in seconds"
    )
    return parser


def canonical_command(name: str | None) -> str:
    """Map an alias to its subcommand name; no subcommand means list."""
    if name is None:
        return "list"
    for command, aliases in SUBCOMMAND_ALIASES.items():
        if name == command or name in aliases:
            return command
    return name


def is_file_id(text: str, alphabet: str) -> bool:
    return bool(text) and all(char in alphabet for char in text)


def is_id_first(args: Sequence[str], alphabet: str) -> bool:
    """`f <id> <action>`: first word is made of id characters and is not a subcommand."""
    return len(args) >= 2 and args[0] not in SUBCOMMAND_NAMES and is_file_id(args[0], alphabet)


def build_logger(config: AppConfig, verbose: bool) -> EventLogger:
    stream = sys.stderr if verbose else None
    if stream is None and config.log_path is None:
        return NullEventLogger()
    return JsonlEventLogger(stream=stream, path=config.log_path)


def color_override() -> bool | None:
    """CLICOLOR_FORCE=1 keeps colors when stdout is not a terminal (e.g. under watch)."""
    if os.environ.get("CLICOLOR_FORCE", "") == "1":
        return True
    return None


def report_error(message: str) -> int:
    click.echo(message, err=True)
    return 1


def resolve_file(ctx: RunContext, files: Sequence[GitFile], file_id: str | None) -> GitFile | None:
    """Resolve an explicit id or fall back to the first actionable file.

    Ambiguous and unknown ids are reported to stderr and yield None.
    """
    if file_id is None:
        file = first_actionable(files)
        ctx.logger.emit("id_resolved", {"verdict": "fallback", "found": file is not None})
        if file is None:
            report_error("No matching file found")
        return file
    match = resolve(files, file_id)
    if isinstance(match, UniqueMatch):
        ctx.logger.emit("id_resolved", {"id": file_id, "verdict": "unique"})
        return match.file
    if isinstance(match, AmbiguousMatch):
        ctx.logger.emit(
            "id_resolved", {"id": file_id, "verdict": "ambiguous", "count": match.count}
        )
        report_error(f"ID '{file_id}' matches {match.count} files - be more specific")
        return None
    ctx.logger.emit("id_resolved", {"id": file_id, "verdict": "not_found"})
    report_error(f"No file matches ID: {file_id}")
    return None


def perform_action(ctx: RunContext, action: str, file: GitFile) -> int:
    """Hand the file to git or the editor; returns only if exec fails."""
    if action == "add":
        click.echo(f"Adding: {file.rel_path}")
        return exec_program(add_argv(file), logger=ctx.logger)
    if action == "diff":
        return exec_program(diff_argv(file), logger=ctx.logger)
    if action == "staged-diff":
        return exec_program(staged_diff_argv(file), logger=ctx.logger)
    if action == "edit":
        return exec_program(edit_argv(file, ctx.config.editor), logger=ctx.logger)
    return report_error(f"Unknown action: {action}")


def load_current_files(ctx: RunContext) -> list[GitFile]:
    files = load_files(ctx.config.alphabet)
    ctx.logger.emit("files_loaded", {"count": len(files)})
    return files


def cmd_list(ctx: RunContext) -> int:
    echo_file_list(load_current_files(ctx), color=ctx.color)
    return 0


def cmd_file_action(ctx: RunContext, action: str, file_id: str | None) -> int:
    file = resolve_file(ctx, load_current_files(ctx), file_id)
    if file is None:
        return 1
    return perform_action(ctx, action, file)


def cmd_id_first(ctx: RunContext, file_id: str, action_word: str) -> int:
    action = ID_FIRST_ACTIONS.get(action_word)
    if action is None:
        return report_error(f"Unknown action: {action_word}")
    return cmd_file_action(ctx, action, file_id)


def cmd_commit(ctx: RunContext, message: Sequence[str]) -> int:
    try:
        argv = commit_argv(message)
    except ValueError as exc:
        return report_error(str(exc))
    ctx.logger.emit("command", {"command": "commit", "message": " ".join(message)})
    return exec_program(argv, logger=ctx.logger)


def cmd_push(ctx: RunContext) -> int:
    return exec_program(["git", "push"], logger=ctx.logger)


def cmd_watch(ctx: RunContext, interval: int) -> int:
    program = os.path.abspath(sys.argv[0]) if sys.argv and sys.argv[0] else "f"
    return exec_program(watch_argv(interval, program), env=watch_env(), logger=ctx.logger)


def cmd_interactive(ctx: RunContext) -> int:
    files = load_current_files(ctx)
    if not files:
        click.echo(click.style("No changed files", dim=True))
        return 0
    selected = pick_file(files, ctx.config.alphabet)
    click.clear()
    if selected is None:
        ctx.logger.emit("picker", {"verdict": "cancelled"})
        return 0
    ctx.logger.emit("picker", {"verdict": "selected", "path": selected.rel_path})
    for line in action_lines(selected):
        click.echo(line)
    key = read_action()
    if key is None:
        return 0
    return perform_action(ctx, PICKER_ACTIONS[key], selected)


def dispatch(ctx: RunContext, args: argparse.Namespace) -> int:
    command = canonical_command(args.command)
    if command == "list":
        return cmd_list(ctx)
    if command in ("diff", "staged-diff", "add", "edit"):
        return cmd_file_action(ctx, command, args.id)
    if command == "commit":
        return cmd_commit(ctx, args.message)
    if command == "push":
        return cmd_push(ctx)
    if command == "watch":
        return cmd_watch(ctx, args.interval)
    if command == "interactive":
        return cmd_interactive(ctx)
    return report_error(f"Unknown command: {command}")


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the f command."""
    args_list = list(sys.argv[1:] if argv is None else argv)
    try:
        config = load_effective_config(overrides=overrides_from_env())
    except (OSError, ValueError) as exc:
        return report_error(f"Error: {exc}")

    args: argparse.Namespace | None = None
    if is_id_first(args_list, config.alphabet):
        verbose = any(flag in args_list[2:] for flag in VERBOSE_FLAGS)
    else:
        args = build_arg_parser().parse_args(args_list)
        verbose = args.verbose

    try:
        ctx = RunContext(
            config=config, logger=build_logger(config, verbose), color=color_override()
        )
        return run(ctx, args, args_list)
    except OSError as exc:
        return report_error(f"Error: {exc}")


def run(ctx: RunContext, args: argparse.Namespace | None, args_list: Sequence[str]) -> int:
    """Run the parsed command, reporting git failures with their hint."""
    try:
        if args is None:
            return cmd_id_first(ctx, args_list[0], args_list[1])
        return dispatch(ctx, args)
    except GitCommandError as exc:
        ctx.logger.emit("git_error", {"reason": exc.reason}, ok=False)
        report_error(f"Error: {exc.reason}")
        if exc.hint:
            report_error(exc.hint)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
