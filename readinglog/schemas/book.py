import datetime as dt
from typing import Annotated, Literal

from pydantic import Field, field_validator

from readinglog.schemas.common import Blank, CamelModel, CellInt, CellText, RecordId, RecordModel

BookStatus = Literal["wishlist", "reading", "completed"]


def split_tags(value) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(t).strip() for t in value if str(t).strip()]


class BookCreate(CamelModel):
    title: str | None = None
    author: str | None = None
    publisher: str | None = None
    status: BookStatus | None = None
    started_date: Annotated[dt.date | None, Blank] = None
    completion_date: Annotated[dt.date | None, Blank] = None
    pages: Annotated[int | None, Blank] = Field(None, ge=0)
    current_page: Annotated[int | None, Blank] = Field(None, ge=0)
    tags: list[str] | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, value):
        return None if value is None else split_tags(value)


class BookUpdate(BookCreate):
    """Partial update: only fields present in the payload are written."""


class BookRecord(RecordModel):
    id: RecordId
    created_at: CellText = None
    updated_at: CellText = None
    title: CellText = None
    author: CellText = None
    publisher: CellText = None
    status: CellText = None
    started_date: CellText = None
    completion_date: CellText = None
    pages: CellInt = None
    current_page: CellInt = None
    tags: list[str] = []

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, value):
        return split_tags(value if value != "" else None)


class BookDetail(BookRecord):
    review: "ReviewRecord | None" = None


from readinglog.schemas.review import ReviewRecord  # noqa: E402

BookDetail.model_rebuild()
