"""Opinion Schemas — create/update requests and the opinion response.

Invariants:
    - The (writer_id, work_id) key comes from the body on create and from the
      path on update; it is never changed by an update
"""

from pydantic import BaseModel, Field

from what_writers_like.core.entities import Opinion


class OpinionCreate(BaseModel):
    writer_id: int = Field(gt=0)
    work_id: int = Field(gt=0)
    sentiment: bool
    quote: str
    source: str = Field(max_length=255)
    page: str | None = Field(None, max_length=100)
    statement_year: int | None = None


class OpinionUpdate(BaseModel):
    sentiment: bool
    quote: str
    source: str = Field(max_length=255)
    page: str | None = Field(None, max_length=100)
    statement_year: int | None = None


class OpinionResponse(BaseModel):
    writer_id: int
    work_id: int
    sentiment: bool
    quote: str
    source: str
    page: str | None = None
    statement_year: int | None = None

    @classmethod
    def from_entity(cls, opinion: Opinion) -> "OpinionResponse":
        return cls(
            writer_id=opinion.writer_id,
            work_id=opinion.work_id,
            sentiment=opinion.sentiment,
            quote=opinion.quote,
            source=opinion.source,
            page=opinion.page,
            statement_year=opinion.statement_year,
        )
