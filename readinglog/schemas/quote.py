from typing import Annotated

from pydantic import Field

from readinglog.schemas.common import Blank, CamelModel, CellInt, CellText, RecordId, RecordModel


class QuoteCreate(CamelModel):
    book_id: RecordId | None = None
    book_title: str | None = None
    book_author: str | None = None
    quote_text: str | None = None
    page_number: Annotated[int | None, Blank] = Field(None, ge=0)


class QuoteUpdate(QuoteCreate):
    pass


class QuoteRecord(RecordModel):
    id: RecordId
    created_at: CellText = None
    book_id: CellText = None
    book_title: CellText = None
    book_author: CellText = None
    quote_text: CellText = None
    page_number: CellInt = None
