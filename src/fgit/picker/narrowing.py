"""Keystroke-driven narrowing over positional picker keys."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

PHASE_COLLECTING = "collecting"
PHASE_SELECTED = "selected"
PHASE_CANCELLED = "cancelled"


class Signal(enum.Enum):
    """Control events that are not typed characters."""

    CLEAR = "clear"
    CANCEL = "cancel"


@dataclass(slots=True, frozen=True)
class TypedChar:
    """A single typed character."""

    char: str


PickerEvent = TypedChar | Signal


@dataclass(slots=True, frozen=True)
class NarrowingState:
    """Current phase plus the typed prefix or the selected position."""

    phase: str
    prefix: str = ""
    selected_index: int | None = None

    @property
    def terminal(self) -> bool:
        return self.phase != PHASE_COLLECTING


_EMPTY = NarrowingState(phase=PHASE_COLLECTING)


class Narrowing(Generic[T]):
    """Single-consumer state machine selecting one item by its key."""

    def __init__(self, keys: Sequence[str], items: Sequence[T], alphabet: Sequence[str]) -> None:
        if len(keys) != len(items):
            raise ValueError("keys and items must have the same length")
        self._keys = tuple(keys)
        self._items = tuple(items)
        self._alphabet = frozenset(alphabet)
        self._state = _EMPTY

    @property
    def state(self) -> NarrowingState:
        return self._state

    @property
    def selected(self) -> T | None:
        """Return the selected item once the machine has selected one."""
        if self._state.selected_index is None:
            return None
        return self._items[self._state.selected_index]

    def visible(self) -> Iterator[tuple[str, T]]:
        """Yield (key, item) pairs still reachable from the typed prefix."""
        for key, item in zip(self._keys, self._items, strict=True):
            if key.startswith(self._state.prefix):
                yield key, item

    def feed(self, event: PickerEvent) -> NarrowingState:
        """Apply one input event; terminal states ignore further input."""
        if self._state.terminal:
            return self._state
        self._state = self._transition(event)
        return self._state

    def _transition(self, event: PickerEvent) -> NarrowingState:
        if event is Signal.CLEAR:
            return _EMPTY
        if event is Signal.CANCEL:
            return NarrowingState(phase=PHASE_CANCELLED)
        if event.char not in self._alphabet:
            return NarrowingState(phase=PHASE_CANCELLED)
        prefix = self._state.prefix + event.char
        if prefix in self._keys:
            return NarrowingState(
                phase=PHASE_SELECTED,
                prefix=prefix,
                selected_index=self._keys.index(prefix),
            )
        if not any(key.startswith(prefix) for key in self._keys):
            return _EMPTY
        return NarrowingState(phase=PHASE_COLLECTING, prefix=prefix)


def run_picker(
    narrowing: Narrowing[T],
    read_event: Callable[[], PickerEvent | None],
    render: Callable[[Narrowing[T]], None],
) -> T | None:
    """Drive narrowing until it selects or cancels.

    Renders on entry and after every event that leaves the machine
    collecting. ``read_event`` may return None for input to ignore.
    """
    render(narrowing)
    while True:
        event = read_event()
        if event is None:
            continue
        state = narrowing.feed(event)
        if state.phase == PHASE_SELECTED:
            return narrowing.selected
        if state.phase == PHASE_CANCELLED:
            return None
        render(narrowing)
