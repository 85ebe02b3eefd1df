"""Terminal front end for the interactive picker, built on click."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Sequence

import click

from fgit.display import category_header
from fgit.git.models import GitFile
from fgit.picker.keys import generate_keys
from fgit.picker.narrowing import Narrowing, PickerEvent, Signal, TypedChar, run_picker

CANCEL_KEYS = frozenset({"q"})
CLEAR_KEY = "\x1b"
INTERRUPT_CHARS = frozenset({"\x03", "\x04"})

ACTIONS = (
    ("a", "add"),
    ("d", "diff"),
    ("s", "staged diff"),
    ("e", "edit"),
)

KeyReader = Callable[[], str]


def translate_keys(raw: str) -> list[PickerEvent]:
    """Map one raw read to picker events, one per typed character.

    A read may carry several keys typed in quick succession. Escape
    sequences (arrows, function keys) are ignored as a whole.
    """
    if raw == CLEAR_KEY:
        return [Signal.CLEAR]
    if raw.startswith(CLEAR_KEY):
        return []
    events: list[PickerEvent] = []
    for char in raw:
        if char in CANCEL_KEYS or char in INTERRUPT_CHARS:
            events.append(Signal.CANCEL)
        else:
            events.append(TypedChar(char=char))
    return events


class KeyEventReader:
    """Feed raw terminal reads to the picker one event at a time."""

    def __init__(self, read_key: KeyReader = click.getchar) -> None:
        self._read_key = read_key
        self._pending: deque[PickerEvent] = deque()

    def __call__(self) -> PickerEvent | None:
        """Block for the next event; Ctrl-C and Ctrl-D cancel."""
        if not self._pending:
            try:
                raw = self._read_key()
            except (KeyboardInterrupt, EOFError):
                return Signal.CANCEL
            self._pending.extend(translate_keys(raw))
            if not self._pending:
                return None
        return self._pending.popleft()


def picker_lines(narrowing: Narrowing[GitFile]) -> list[str]:
    """Styled lines for the files still reachable from the typed prefix."""
    prefix = narrowing.state.prefix
    lines = [click.style("── Select file ──", fg="yellow")]
    if prefix:
        lines.append(f"  Prefix: {click.style(prefix, fg='cyan')}")
    last_type: str | None = None
    for key, file in narrowing.visible():
        if file.file_type != last_type:
            if last_type is not None:
                lines.append("")
            lines.append(category_header(file.file_type))
            last_type = file.file_type
        typed = click.style(key[: len(prefix)], fg="cyan", bold=True)
        remaining = click.style(key[len(prefix) :], fg="cyan")
        lines.append(f"  {typed}{remaining}  {file.rel_path}")
    lines.append("")
    lines.append(f"  {click.style('q', dim=True)}   quit")
    return lines


def render(narrowing: Narrowing[GitFile]) -> None:
    click.clear()
    for line in picker_lines(narrowing):
        click.echo(line)


def action_lines(file: GitFile) -> list[str]:
    lines = ["", f"{click.style('Selected:', fg='green')} {file.rel_path}"]
    lines.append(click.style("── Action ──", fg="yellow"))
    for key, label in ACTIONS:
        lines.append(f"  {click.style(key, fg='cyan')}  {label}")
    lines.append(f"  {click.style('q', dim=True)}  quit")
    return lines


def read_action(read_key: KeyReader = click.getchar) -> str | None:
    """Wait for an action key; q, Esc, Ctrl-C and Ctrl-D return None."""
    valid = {key for key, _ in ACTIONS}
    while True:
        try:
            raw = read_key()
        except (KeyboardInterrupt, EOFError):
            return None
        if raw.startswith(CLEAR_KEY) and raw != CLEAR_KEY:
            continue
        for char in raw:
            if char in CANCEL_KEYS or char == CLEAR_KEY or char in INTERRUPT_CHARS:
                return None
            if char in valid:
                return char


def pick_file(
    files: Sequence[GitFile],
    alphabet: Sequence[str],
    read_key: KeyReader = click.getchar,
) -> GitFile | None:
    """Run one picker session over files; None means the user cancelled."""
    keys = generate_keys(len(files), alphabet)
    narrowing = Narrowing(keys, files, alphabet)
    return run_picker(narrowing, KeyEventReader(read_key), render)
