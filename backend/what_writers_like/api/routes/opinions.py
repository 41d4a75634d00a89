"""Opinion Routes — what writers said about other writers' works.

Invariants:
    - An opinion is addressed by its (writer_id, work_id) pair
    - A self-opinion is 422 whether the service or the storage trigger caught it
    - A duplicate pair is 409
"""

from fastapi import APIRouter, Depends, Query, Response, status

from what_writers_like.api.dependencies import get_opinion_service
from what_writers_like.core.domain_types import (
    DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT, WorkId, WriterId,
)
from what_writers_like.schemas import patch_field
from what_writers_like.schemas.opinion import (
    OpinionCreate, OpinionResponse, OpinionUpdate,
)
from what_writers_like.services.opinion_service import OpinionService

router = APIRouter(prefix="/api/v1/opinions", tags=["opinions"])


@router.post(
    "", response_model=OpinionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_opinion(
    body: OpinionCreate, service: OpinionService = Depends(get_opinion_service),
):
    opinion = await service.create_opinion(
        WriterId(body.writer_id),
        WorkId(body.work_id),
        body.sentiment,
        body.quote,
        body.source,
        page=body.page,
        statement_year=body.statement_year,
    )
    return OpinionResponse.from_entity(opinion)


@router.get("", response_model=list[OpinionResponse])
async def list_opinions(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    service: OpinionService = Depends(get_opinion_service),
):
    opinions = await service.list_opinions(limit, offset)
    return [OpinionResponse.from_entity(o) for o in opinions]


@router.get("/writer/{writer_id}", response_model=list[OpinionResponse])
async def get_opinions_by_writer(
    writer_id: int, service: OpinionService = Depends(get_opinion_service),
):
    opinions = await service.get_opinions_by_writer(WriterId(writer_id))
    return [OpinionResponse.from_entity(o) for o in opinions]


@router.get("/work/{work_id}", response_model=list[OpinionResponse])
async def get_opinions_by_work(
    work_id: int, service: OpinionService = Depends(get_opinion_service),
):
    opinions = await service.get_opinions_by_work(WorkId(work_id))
    return [OpinionResponse.from_entity(o) for o in opinions]


@router.get(
    "/writer/{writer_id}/work/{work_id}", response_model=OpinionResponse,
)
async def get_opinion(
    writer_id: int,
    work_id: int,
    service: OpinionService = Depends(get_opinion_service),
):
    opinion = await service.get_opinion(WriterId(writer_id), WorkId(work_id))
    return OpinionResponse.from_entity(opinion)


@router.put(
    "/writer/{writer_id}/work/{work_id}", response_model=OpinionResponse,
)
async def update_opinion(
    writer_id: int,
    work_id: int,
    body: OpinionUpdate,
    service: OpinionService = Depends(get_opinion_service),
):
    opinion = await service.update_opinion(
        WriterId(writer_id),
        WorkId(work_id),
        body.sentiment,
        body.quote,
        body.source,
        page=patch_field(body, "page"),
        statement_year=patch_field(body, "statement_year"),
    )
    return OpinionResponse.from_entity(opinion)


@router.delete(
    "/writer/{writer_id}/work/{work_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_opinion(
    writer_id: int,
    work_id: int,
    service: OpinionService = Depends(get_opinion_service),
):
    await service.delete_opinion(WriterId(writer_id), WorkId(work_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
