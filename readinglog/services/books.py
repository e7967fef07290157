import logging

from readinglog.config import DELETE_LOCK_TIMEOUT
from readinglog.id import normalize_key
from readinglog.schemas.book import BookDetail, BookRecord
from readinglog.schemas.common import MutationResult
from readinglog.services.base import EntityService
from readinglog.services.reviews import ReviewService
from readinglog.tables import BOOKS, QUOTES, REVIEWS

logger = logging.getLogger(__name__)


class BookService(EntityService):
    table = BOOKS
    record_model = BookRecord
    noun = "Book"
    required = ("title", "author", "status")

    def __init__(
        self,
        store,
        gate,
        reviews: ReviewService,
        delete_timeout: float = DELETE_LOCK_TIMEOUT,
        **kwargs,
    ) -> None:
        super().__init__(store, gate, **kwargs)
        self.reviews = reviews
        self.delete_timeout = delete_timeout

    async def list(self, statuses=None) -> list[BookRecord]:
        """All books, or only those whose status is in ``statuses`` when it is non-empty."""
        books = await super().list()
        if statuses:
            wanted = set(statuses)
            books = [b for b in books if b.status in wanted]
        return books

    async def get_by_id(self, book_id) -> BookDetail:
        book = await super().get_by_id(book_id)
        review = await self.reviews.find_for_book(book.id)
        return BookDetail(**book.model_dump(by_alias=True), review=review)

    async def delete(self, book_id) -> MutationResult:
        """Delete the book, then its quotes, then its reviews, under one lock acquisition."""
        book_id = normalize_key(book_id)
        async with self.gate.hold(BOOKS, QUOTES, REVIEWS, timeout=self.delete_timeout):
            found = await self.store.find_by_key(BOOKS, BOOKS.key, book_id)
            if found is None:
                return MutationResult(id=book_id, message="Item not found.")
            await self.store.delete_row(BOOKS, found[0])
            quotes = await self.store.delete_all_matching(QUOTES, "bookId", book_id)
            reviews = await self.store.delete_all_matching(REVIEWS, "bookId", book_id)
        logger.info("Deleted book %s with %d quote(s) and %d review(s)", book_id, quotes, reviews)
        return MutationResult(id=book_id, message="Book and all associated data deleted successfully.")
