from readinglog.id import normalize_key
from readinglog.schemas.review import ReviewRecord
from readinglog.services.base import EntityService
from readinglog.tables import REVIEWS


class ReviewService(EntityService):
    """Reviews reference a book by id. Nothing stops a book from having several."""

    table = REVIEWS
    record_model = ReviewRecord
    noun = "Review"
    required = ("bookId", "rating")

    async def list_for_book(self, book_id) -> list[ReviewRecord]:
        wanted = normalize_key(book_id)
        return [r for r in await self.list() if normalize_key(r.book_id) == wanted]

    async def find_for_book(self, book_id) -> ReviewRecord | None:
        found = await self.store.find_by_key(self.table, "bookId", book_id)
        return self.parse(found[1]) if found else None
