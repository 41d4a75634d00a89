"""Domain Types — identity types, the UNSET marker, and search constants.

Invariants:
    - WriterId, WorkId wrap int; ids are issued by the database, never computed
    - UNSET means "field absent in the request"; None means "explicitly cleared"
    - SIMILARITY_THRESHOLD is strict: a score must be greater than it to match

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Single-member Enum for UNSET: a singleton the type checker can narrow on
      (`value is UNSET`), unlike a bare object() sentinel
"""

from enum import Enum
from typing import NewType, TypeVar, Union


# ─── Identity Types ──────────────────────────────────────────────

WriterId = NewType("WriterId", int)
WorkId = NewType("WorkId", int)


# ─── Three-way optional fields ───────────────────────────────────

class Unset(Enum):
    """Marker type for a field that was not supplied at all."""
    UNSET = "unset"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = Unset.UNSET

T = TypeVar("T")

# present value | explicit null | absent
Patch = Union[T, None, Unset]


def resolve_patch(new: "Patch[T]", current: T | None) -> T | None:
    """Apply a three-way field: absent keeps `current`, anything else replaces it."""
    if new is UNSET:
        return current
    return new


# ─── Search ──────────────────────────────────────────────────────

SIMILARITY_THRESHOLD = 0.3

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

# Raised verbatim by the storage triggers and matched by the stores
SELF_OPINION_MARKER = "writer cannot express opinion about their own work"
