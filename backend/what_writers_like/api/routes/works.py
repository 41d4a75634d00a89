"""Work Routes — CRUD, per-author listing and title search for works.

Invariants:
    - DELETE removes the work's opinions with it
    - PUT to an author who already holds an opinion about the work → 422
"""

from fastapi import APIRouter, Depends, Query, Response, status

from what_writers_like.api.dependencies import get_work_service, get_work_store
from what_writers_like.core.domain_types import (
    DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT, WorkId, WriterId,
)
from what_writers_like.infrastructure.work_store import SqlWorkStore
from what_writers_like.schemas.work import WorkCreate, WorkResponse, WorkUpdate
from what_writers_like.services.search import search_works
from what_writers_like.services.work_service import WorkService

router = APIRouter(prefix="/api/v1/works", tags=["works"])


@router.post(
    "", response_model=WorkResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_work(
    body: WorkCreate, service: WorkService = Depends(get_work_service),
):
    work = await service.create_work(body.title, WriterId(body.author_id))
    return WorkResponse.from_entity(work)


@router.get("", response_model=list[WorkResponse])
async def list_works(
    search: str | None = Query(None),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    store: SqlWorkStore = Depends(get_work_store),
):
    works = await search_works(store, search, limit, offset)
    return [WorkResponse.from_entity(w) for w in works]


@router.get("/author/{author_id}", response_model=list[WorkResponse])
async def get_works_by_author(
    author_id: int, service: WorkService = Depends(get_work_service),
):
    """Works by one author; empty list for an unknown author."""
    works = await service.get_works_by_author(WriterId(author_id))
    return [WorkResponse.from_entity(w) for w in works]


@router.get("/{work_id}", response_model=WorkResponse)
async def get_work(
    work_id: int, service: WorkService = Depends(get_work_service),
):
    return WorkResponse.from_entity(await service.get_work(WorkId(work_id)))


@router.put("/{work_id}", response_model=WorkResponse)
async def update_work(
    work_id: int,
    body: WorkUpdate,
    service: WorkService = Depends(get_work_service),
):
    work = await service.update_work(
        WorkId(work_id), body.title, WriterId(body.author_id),
    )
    return WorkResponse.from_entity(work)


@router.delete("/{work_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_work(
    work_id: int, service: WorkService = Depends(get_work_service),
):
    await service.delete_work(WorkId(work_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
