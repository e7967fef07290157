import logging
from datetime import date

from readinglog.config import BOOTSTRAP, DELETE_LOCK_TIMEOUT, MISSING_FIELDS, STORE_BACKEND
from readinglog.database import async_session, init_db
from readinglog.errors import ConfigurationError
from readinglog.gate import MutationGate
from readinglog.schemas.goal import GoalProgress
from readinglog.schemas.stats import CompletionStats, DetailedStats
from readinglog.services import stats
from readinglog.services.books import BookService
from readinglog.services.goals import GoalService
from readinglog.services.quotes import QuoteService
from readinglog.services.reviews import ReviewService
from readinglog.store import HeaderCache, MemoryWorkbook, RowStore, SqlWorkbook, Workbook
from readinglog.tables import ALL_TABLES

logger = logging.getLogger(__name__)


class Library:
    """Every entity service over one workbook, sharing a row store and a mutation gate."""

    def __init__(
        self,
        workbook: Workbook,
        gate: MutationGate | None = None,
        headers: HeaderCache | None = None,
        missing_fields: str = MISSING_FIELDS,
        delete_timeout: float = DELETE_LOCK_TIMEOUT,
    ) -> None:
        self.workbook = workbook
        self.store = RowStore(workbook, headers)
        self.gate = gate or MutationGate()
        self.reviews = ReviewService(self.store, self.gate, missing_fields=missing_fields)
        self.books = BookService(
            self.store, self.gate, self.reviews, delete_timeout=delete_timeout, missing_fields=missing_fields
        )
        self.quotes = QuoteService(self.store, self.gate, missing_fields=missing_fields)
        self.goals = GoalService(self.store, self.gate)

    async def completed_books_stats(self, today: date | None = None) -> CompletionStats:
        books = await self.books.list({"completed"})
        return stats.completion_stats(books, today or date.today())

    async def detailed_stats(self, today: date | None = None) -> DetailedStats:
        books = await self.books.list({"completed"})
        reviews = await self.reviews.list()
        return DetailedStats(
            monthly_data=stats.monthly_trend(books, today or date.today()),
            rating_data=stats.rating_histogram(reviews),
            tag_data=stats.tag_frequency(books),
        )

    async def goal_progress(self, year: int, month: int) -> GoalProgress:
        goal = await self.goals.get(year, month)
        if goal is None or not goal.target:
            return GoalProgress()
        books = await self.books.list({"completed"})
        return stats.goal_progress(goal, stats.completed_in(books, year, month))


async def open_library(backend: str = STORE_BACKEND, bootstrap: bool = BOOTSTRAP) -> Library:
    """Build the configured workbook and wrap it in a Library."""
    if backend == "memory":
        workbook = MemoryWorkbook()
    elif backend == "sqlite":
        await init_db()
        workbook = SqlWorkbook(async_session)
    else:
        raise ConfigurationError(
            f"CONFIGURATION ERROR: Unknown store backend {backend!r}. "
            "Set READINGLOG_STORE to 'sqlite' or 'memory'."
        )
    if bootstrap:
        created = await workbook.ensure_sheets(ALL_TABLES)
        if created:
            logger.info("Created sheet(s) %s", ", ".join(created))
    return Library(workbook)
