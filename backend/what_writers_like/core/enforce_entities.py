"""Entity Enforcement — field-level and cross-entity rules for writers, works, opinions.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return an error instance on violation, None on success (callers raise)
    - Composite validators preserve check order: the first failing rule wins
    - check_not_self_opinion uses the same predicate as the storage trigger

Design Decisions:
    - Errors returned, not raised: composable with `or`, trivially testable
    - Required text is stripped before the emptiness check: "   " is rejected
      exactly like "", so a blank name or quote never reaches storage
"""

from what_writers_like.core.entities import Work
from what_writers_like.core.errors import (
    SelfOpinionViolationError,
    ValidationError,
)


# --- Field rules --------------------------------------------------------------

def check_required_text(value: str | None, field: str) -> ValidationError | None:
    """Required strings must be present and not blank."""
    if value is None or not value.strip():
        return ValidationError(f"{field} is required", field)
    return None


def check_positive_year(value: int | None, field: str) -> ValidationError | None:
    if value is None or value <= 0:
        return ValidationError(f"{field.replace('_', ' ')} must be positive", field)
    return None


# --- Cross-entity rules -------------------------------------------------------

def check_not_self_opinion(work: Work, writer_id: int) -> SelfOpinionViolationError | None:
    """A writer may not hold an opinion about a work they authored."""
    if work.author_id == writer_id:
        return SelfOpinionViolationError(writer_id, work.id, source="application")
    return None


# --- Composite validators -----------------------------------------------------

def validate_writer_fields(name: str | None, birth_year: int | None) -> ValidationError | None:
    """Name before birth year."""
    return (
        check_required_text(name, "name")
        or check_positive_year(birth_year, "birth_year")
    )


def validate_work_fields(title: str | None) -> ValidationError | None:
    return check_required_text(title, "title")


def validate_opinion_fields(quote: str | None, source: str | None) -> ValidationError | None:
    """Quote before source."""
    return (
        check_required_text(quote, "quote")
        or check_required_text(source, "source")
    )
