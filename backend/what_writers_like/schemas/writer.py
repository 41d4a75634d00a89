"""Writer Schemas — create/update requests and the writer response."""

from pydantic import BaseModel, Field

from what_writers_like.core.entities import Writer


class WriterCreate(BaseModel):
    name: str = Field(max_length=255)
    birth_year: int
    death_year: int | None = None
    bio: str | None = None


class WriterUpdate(BaseModel):
    """Full replace of name/birth_year; omitted optional fields are kept."""
    name: str = Field(max_length=255)
    birth_year: int
    death_year: int | None = None
    bio: str | None = None


class WriterResponse(BaseModel):
    id: int
    name: str
    birth_year: int
    death_year: int | None = None
    bio: str | None = None

    @classmethod
    def from_entity(cls, writer: Writer) -> "WriterResponse":
        return cls(
            id=writer.id,
            name=writer.name,
            birth_year=writer.birth_year,
            death_year=writer.death_year,
            bio=writer.bio,
        )
