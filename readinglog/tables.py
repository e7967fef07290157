from dataclasses import dataclass

from readinglog.config import SHEET_BOOKS, SHEET_GOALS, SHEET_QUOTES, SHEET_REVIEWS


@dataclass(frozen=True)
class TableSpec:
    """A sheet name plus the column names the services rely on.

    Column order in the sheet is free; only presence matters.
    """

    name: str
    columns: tuple[str, ...]
    key: str = "id"

    def __str__(self) -> str:
        return self.name


BOOKS = TableSpec(
    SHEET_BOOKS,
    (
        "id", "createdAt", "updatedAt", "title", "author", "publisher", "status",
        "startedDate", "completionDate", "pages", "currentPage", "tags",
    ),
)
QUOTES = TableSpec(
    SHEET_QUOTES,
    ("id", "createdAt", "bookId", "bookTitle", "bookAuthor", "quoteText", "pageNumber"),
)
REVIEWS = TableSpec(
    SHEET_REVIEWS,
    ("id", "createdAt", "bookId", "rating", "shortReview", "detailedReview"),
)
GOALS = TableSpec(SHEET_GOALS, ("year_month", "year", "month", "target"), key="year_month")

ALL_TABLES = (BOOKS, QUOTES, REVIEWS, GOALS)
