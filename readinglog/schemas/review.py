from typing import Annotated

from pydantic import Field

from readinglog.schemas.common import Blank, CamelModel, CellInt, CellText, RecordId, RecordModel


class ReviewCreate(CamelModel):
    book_id: RecordId | None = None
    rating: Annotated[int | None, Blank] = Field(None, ge=1, le=5)
    short_review: str | None = None
    detailed_review: str | None = None


class ReviewUpdate(CamelModel):
    rating: Annotated[int | None, Blank] = Field(None, ge=1, le=5)
    short_review: str | None = None
    detailed_review: str | None = None


class ReviewRecord(RecordModel):
    id: RecordId
    created_at: CellText = None
    book_id: CellText = None
    rating: CellInt = None
    short_review: CellText = None
    detailed_review: CellText = None
