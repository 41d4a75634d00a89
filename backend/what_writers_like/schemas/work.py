"""Work Schemas — create/update requests and the work response."""

from pydantic import BaseModel, Field

from what_writers_like.core.entities import Work


class WorkCreate(BaseModel):
    title: str = Field(max_length=255)
    author_id: int = Field(gt=0)


class WorkUpdate(BaseModel):
    title: str = Field(max_length=255)
    author_id: int = Field(gt=0)


class WorkResponse(BaseModel):
    id: int
    title: str
    author_id: int

    @classmethod
    def from_entity(cls, work: Work) -> "WorkResponse":
        return cls(id=work.id, title=work.title, author_id=work.author_id)
