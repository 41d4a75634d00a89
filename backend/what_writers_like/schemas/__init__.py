"""Pydantic Schemas — request/response contracts for the HTTP API.

Invariants:
    - Schemas check shape and types only; business rules (non-empty, positive
      year, references) are the services' job so their check order holds
    - Responses serialize unset optional fields as null

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""

from pydantic import BaseModel

from what_writers_like.core.domain_types import UNSET, Patch


def patch_field(body: BaseModel, name: str) -> Patch:
    """Value of an optional field, or UNSET if the client omitted it."""
    if name not in body.model_fields_set:
        return UNSET
    return getattr(body, name)
