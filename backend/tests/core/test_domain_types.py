"""Domain Types — verifies identity types, the UNSET marker and patch resolution.

Tests:
    - NewType wrappers are plain ints at runtime
    - UNSET is falsy and distinct from None
    - resolve_patch: absent keeps, None clears, value replaces
"""

from what_writers_like.core.domain_types import (
    UNSET, WorkId, WriterId, resolve_patch,
)


def test_identity_types_wrap_int():
    assert WriterId(3) == 3
    assert WorkId(4) == 4


def test_unset_is_falsy_and_not_none():
    assert not UNSET
    assert UNSET is not None
    assert repr(UNSET) == "UNSET"


def test_absent_keeps_current():
    assert resolve_patch(UNSET, 1817) == 1817


def test_explicit_none_clears():
    assert resolve_patch(None, 1817) is None


def test_value_replaces():
    assert resolve_patch(1818, 1817) == 1818
