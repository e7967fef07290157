"""One request model per action, combined into a union discriminated on ``action``."""

from typing import Annotated, Literal, Union

from pydantic import Field

from readinglog.schemas.book import BookCreate, BookUpdate
from readinglog.schemas.common import CamelModel, RecordId
from readinglog.schemas.quote import QuoteCreate, QuoteUpdate
from readinglog.schemas.review import ReviewCreate


class EmptyPayload(CamelModel):
    pass


class StatusFilter(CamelModel):
    statuses: str | list[str] | None = None

    def status_set(self) -> set[str]:
        value = self.statuses
        if isinstance(value, str):
            value = value.split(",")
        return {s.strip() for s in value or [] if s.strip()}


class BookIdPayload(CamelModel):
    book_id: RecordId


class IdPayload(CamelModel):
    id: RecordId


class BookUpdatePayload(CamelModel):
    book_id: RecordId
    data: BookUpdate = Field(default_factory=BookUpdate)


class QuoteListPayload(CamelModel):
    limit: int | None = Field(None, ge=1)


class QuoteIdPayload(CamelModel):
    quote_id: RecordId


class QuoteUpdatePayload(CamelModel):
    quote_id: RecordId
    data: QuoteUpdate = Field(default_factory=QuoteUpdate)


class GoalMonth(CamelModel):
    year: int = Field(ge=1)
    month: int = Field(ge=1, le=12)


class GoalPayload(GoalMonth):
    target: int = Field(ge=0)


class GetBooks(CamelModel):
    action: Literal["getBooks"]
    payload: StatusFilter = Field(default_factory=StatusFilter)


class GetBookById(CamelModel):
    action: Literal["getBookById"]
    payload: IdPayload


class AddBook(CamelModel):
    action: Literal["addBook"]
    payload: BookCreate = Field(default_factory=BookCreate)


class UpdateBook(CamelModel):
    action: Literal["updateBook"]
    payload: BookUpdatePayload


class DeleteBook(CamelModel):
    action: Literal["deleteBook"]
    payload: BookIdPayload


class GetQuotes(CamelModel):
    action: Literal["getQuotes"]
    payload: QuoteListPayload = Field(default_factory=QuoteListPayload)


class GetQuotesByBookId(CamelModel):
    action: Literal["getQuotesByBookId"]
    payload: BookIdPayload


class AddQuote(CamelModel):
    action: Literal["addQuote"]
    payload: QuoteCreate = Field(default_factory=QuoteCreate)


class UpdateQuote(CamelModel):
    action: Literal["updateQuote"]
    payload: QuoteUpdatePayload


class DeleteQuote(CamelModel):
    action: Literal["deleteQuote"]
    payload: QuoteIdPayload


class AddBookReview(CamelModel):
    action: Literal["addBookReview"]
    payload: ReviewCreate = Field(default_factory=ReviewCreate)


class SetReadingGoal(CamelModel):
    action: Literal["setReadingGoal"]
    payload: GoalPayload


class GetReadingGoalProgress(CamelModel):
    action: Literal["getReadingGoalProgress"]
    payload: GoalMonth


class GetCompletedBooksStats(CamelModel):
    action: Literal["getCompletedBooksStats"]
    payload: EmptyPayload = Field(default_factory=EmptyPayload)


class GetDetailedStats(CamelModel):
    action: Literal["getDetailedStats"]
    payload: EmptyPayload = Field(default_factory=EmptyPayload)


ACTION_MODELS = (
    GetBooks,
    GetBookById,
    AddBook,
    UpdateBook,
    DeleteBook,
    GetQuotes,
    GetQuotesByBookId,
    AddQuote,
    UpdateQuote,
    DeleteQuote,
    AddBookReview,
    SetReadingGoal,
    GetReadingGoalProgress,
    GetCompletedBooksStats,
    GetDetailedStats,
)

ActionRequest = Annotated[Union[ACTION_MODELS], Field(discriminator="action")]


def action_name(model: type[CamelModel]) -> str:
    return model.model_fields["action"].annotation.__args__[0]
