"""Read-only statistics computed from already-loaded books, reviews and goals.

Nothing here touches the store; callers pass the collections and the
reference date.
"""

import math
from collections import Counter
from datetime import date

from readinglog.dates import parse_date
from readinglog.schemas.book import BookRecord, split_tags
from readinglog.schemas.goal import GoalProgress, GoalRecord
from readinglog.schemas.review import ReviewRecord
from readinglog.schemas.stats import CompletionStats, MonthBucket, NamedCount

TREND_MONTHS = 12


def _month_index(year: int, month: int) -> int:
    return year * 12 + month - 1


def completed_in(books: list[BookRecord], year: int, month: int) -> int:
    """Books whose completion date falls in the given calendar month."""
    count = 0
    for book in books:
        finished = parse_date(book.completion_date)
        if finished and finished.year == year and finished.month == month:
            count += 1
    return count


def completion_stats(completed_books: list[BookRecord], today: date) -> CompletionStats:
    this_year = this_month = total_pages = 0
    for book in completed_books:
        total_pages += book.pages or 0
        finished = parse_date(book.completion_date)
        if finished and finished.year == today.year:
            this_year += 1
            if finished.month == today.month:
                this_month += 1
    return CompletionStats(
        completed_books=len(completed_books),
        this_year_books=this_year,
        this_month_books=this_month,
        total_pages=total_pages,
    )


def monthly_trend(completed_books: list[BookRecord], today: date) -> list[MonthBucket]:
    """Completions per month for the twelve months ending with ``today``'s month, oldest first."""
    last = _month_index(today.year, today.month)
    first = last - TREND_MONTHS + 1
    counts = Counter()
    for book in completed_books:
        finished = parse_date(book.completion_date)
        if finished:
            index = _month_index(finished.year, finished.month)
            if first <= index <= last:
                counts[index] += 1
    return [
        MonthBucket(name=f"{index // 12}-{index % 12 + 1:02d}", books=counts[index], month=index % 12 + 1)
        for index in range(first, last + 1)
    ]


def rating_histogram(reviews: list[ReviewRecord]) -> list[NamedCount]:
    counts = Counter(r.rating for r in reviews if r.rating in (1, 2, 3, 4, 5))
    return [NamedCount(name=f"★{rating}", value=counts[rating]) for rating in (1, 2, 3, 4, 5) if counts[rating]]


def tag_frequency(books: list[BookRecord]) -> list[NamedCount]:
    counts = Counter()
    for book in books:
        counts.update(split_tags(book.tags))
    # most_common keeps first-seen order among equal counts
    return [NamedCount(name=tag, value=n) for tag, n in counts.most_common()]


def goal_progress(goal: GoalRecord | None, achieved: int) -> GoalProgress:
    if goal is None or not goal.target:
        return GoalProgress()
    # Halves round up
    progress = math.floor(achieved / goal.target * 100 + 0.5)
    return GoalProgress(target=goal.target, achieved=achieved, progress=min(progress, 100))
