from readinglog.schemas.common import CamelModel


class CompletionStats(CamelModel):
    completed_books: int
    this_year_books: int
    this_month_books: int
    total_pages: int


class MonthBucket(CamelModel):
    name: str
    books: int
    # Calendar month 1-12, for short labels
    month: int


class NamedCount(CamelModel):
    name: str
    value: int


class DetailedStats(CamelModel):
    monthly_data: list[MonthBucket]
    rating_data: list[NamedCount]
    tag_data: list[NamedCount]
