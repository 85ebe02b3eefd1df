"""Sequential keys and keystroke narrowing for the interactive picker."""

from .keys import generate_keys, key_length
from .narrowing import (
    PHASE_CANCELLED,
    PHASE_COLLECTING,
    PHASE_SELECTED,
    Narrowing,
    NarrowingState,
    Signal,
    TypedChar,
    run_picker,
)

__all__ = [
    "Narrowing",
    "NarrowingState",
    "PHASE_CANCELLED",
    "PHASE_COLLECTING",
    "PHASE_SELECTED",
    "Signal",
    "TypedChar",
    "generate_keys",
    "key_length",
    "run_picker",
]
