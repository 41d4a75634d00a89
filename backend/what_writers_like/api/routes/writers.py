"""Writer Routes — CRUD and fuzzy search for writers.

Invariants:
    - GET /writers with a non-blank ?search= ranks by similarity; otherwise lists by id
    - PUT keeps death_year/bio when the body omits them, clears them on explicit null
    - DELETE returns 204; 409 while the writer still authors works
"""

from fastapi import APIRouter, Depends, Query, Response, status

from what_writers_like.api.dependencies import get_writer_service, get_writer_store
from what_writers_like.core.domain_types import (
    DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT, WriterId,
)
from what_writers_like.infrastructure.writer_store import SqlWriterStore
from what_writers_like.schemas import patch_field
from what_writers_like.schemas.writer import WriterCreate, WriterResponse, WriterUpdate
from what_writers_like.services.search import search_writers
from what_writers_like.services.writer_service import WriterService

router = APIRouter(prefix="/api/v1/writers", tags=["writers"])


@router.post(
    "", response_model=WriterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_writer(
    body: WriterCreate, service: WriterService = Depends(get_writer_service),
):
    writer = await service.create_writer(
        body.name, body.birth_year, body.death_year, body.bio,
    )
    return WriterResponse.from_entity(writer)


@router.get("", response_model=list[WriterResponse])
async def list_writers(
    search: str | None = Query(None),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    store: SqlWriterStore = Depends(get_writer_store),
):
    """List writers, or rank them by name/bio similarity when searching."""
    writers = await search_writers(store, search, limit, offset)
    return [WriterResponse.from_entity(w) for w in writers]


@router.get("/{writer_id}", response_model=WriterResponse)
async def get_writer(
    writer_id: int, service: WriterService = Depends(get_writer_service),
):
    return WriterResponse.from_entity(await service.get_writer(WriterId(writer_id)))


@router.put("/{writer_id}", response_model=WriterResponse)
async def update_writer(
    writer_id: int,
    body: WriterUpdate,
    service: WriterService = Depends(get_writer_service),
):
    writer = await service.update_writer(
        WriterId(writer_id),
        body.name,
        body.birth_year,
        death_year=patch_field(body, "death_year"),
        bio=patch_field(body, "bio"),
    )
    return WriterResponse.from_entity(writer)


@router.delete("/{writer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_writer(
    writer_id: int, service: WriterService = Depends(get_writer_service),
):
    await service.delete_writer(WriterId(writer_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
