"""Path fingerprints, display ids and id resolution."""

from .display import StableId, assign_display_ids
from .fingerprint import FINGERPRINT_LENGTH, fingerprint, fnv1a_64
from .resolver import AmbiguousMatch, IdMatch, NoMatch, UniqueMatch, first_actionable, resolve

__all__ = [
    "AmbiguousMatch",
    "FINGERPRINT_LENGTH",
    "IdMatch",
    "NoMatch",
    "StableId",
    "UniqueMatch",
    "assign_display_ids",
    "fingerprint",
    "first_actionable",
    "fnv1a_64",
    "resolve",
]
