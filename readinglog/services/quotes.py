import logging
from datetime import UTC, datetime

from readinglog.dates import parse_timestamp
from readinglog.id import normalize_key
from readinglog.schemas.common import MutationResult
from readinglog.schemas.quote import QuoteCreate, QuoteRecord
from readinglog.services.base import EntityService
from readinglog.tables import BOOKS, QUOTES

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=UTC)


class QuoteService(EntityService):
    """Quotes keep a copy of the book's title and author as they were when the quote was saved.

    Renaming a book later does not touch its existing quotes.
    """

    table = QUOTES
    record_model = QuoteRecord
    noun = "Quote"
    required = ("bookId", "quoteText")

    async def list_for_book(self, book_id) -> list[QuoteRecord]:
        wanted = normalize_key(book_id)
        return [q for q in await super().list() if normalize_key(q.book_id) == wanted]

    async def list(self, limit: int | None = None) -> list[QuoteRecord]:
        """Newest ``createdAt`` first; undated quotes sort last."""
        quotes = await super().list()
        quotes.sort(key=lambda q: parse_timestamp(q.created_at) or _OLDEST, reverse=True)
        return quotes[:limit] if limit else quotes

    async def add(self, data: QuoteCreate) -> MutationResult:
        record = self.new_record(data)
        async with self.gate.hold(QUOTES, BOOKS):
            if record.get("bookId") and not (record.get("bookTitle") and record.get("bookAuthor")):
                found = await self.store.find_by_key(BOOKS, BOOKS.key, record["bookId"])
                if found is not None:
                    book = found[1]
                    record["bookTitle"] = record.get("bookTitle") or book.get("title")
                    record["bookAuthor"] = record.get("bookAuthor") or book.get("author")
            await self.store.append(QUOTES, record)
        logger.info("Added quote %s for book %s", record["id"], record.get("bookId") or "-")
        return MutationResult(id=record["id"], message="Quote added successfully.")
