from fastmcp import FastMCP

from readinglog.mcp.client import ReadingLogClient
from readinglog.mcp.tools.books import (
    add_book as _add_book,
    finish_book as _finish_book,
    get_book as _get_book,
    list_books as _list_books,
    remove_book as _remove_book,
    update_progress as _update_progress,
)
from readinglog.mcp.tools.goals import goal_progress as _goal_progress, set_goal as _set_goal
from readinglog.mcp.tools.quotes import list_quotes as _list_quotes, save_quote as _save_quote
from readinglog.mcp.tools.reviews import review_book as _review_book
from readinglog.mcp.tools.stats import reading_stats as _reading_stats


def create_mcp_server(client: ReadingLogClient) -> FastMCP:
    mcp = FastMCP(
        name="readinglog",
        instructions=(
            "Reading Log is a personal reading journal. Use these tools to track "
            "books (wishlist, reading, completed), save quotes, review finished "
            "books, set monthly reading goals and look at reading statistics. "
            "Books are identified by the id returned from add_book or list_books."
        ),
    )

    @mcp.tool()
    async def list_books(status: str | None = None) -> list[dict]:
        """List books, optionally filtered by status ('wishlist', 'reading',
        'completed', or several separated by commas)."""
        return await _list_books(client, status=status)

    @mcp.tool()
    async def get_book(book_id: str) -> dict:
        """Get a book with its review, if it has one."""
        return await _get_book(client, book_id=book_id)

    @mcp.tool()
    async def add_book(
        title: str,
        author: str,
        status: str = "wishlist",
        publisher: str | None = None,
        pages: int | None = None,
        tags: list[str] | None = None,
    ) -> dict:
        """Add a book. Status is 'wishlist', 'reading' or 'completed'; a book
        added as 'reading' is marked as started today."""
        return await _add_book(
            client, title=title, author=author, status=status,
            publisher=publisher, pages=pages, tags=tags,
        )

    @mcp.tool()
    async def update_progress(book_id: str, current_page: int) -> dict:
        """Record the page you are on. A wishlist book moves to 'reading'."""
        return await _update_progress(client, book_id=book_id, current_page=current_page)

    @mcp.tool()
    async def finish_book(book_id: str, completion_date: str | None = None) -> dict:
        """Mark a book completed today (or on completion_date, YYYY-MM-DD)."""
        return await _finish_book(client, book_id=book_id, completion_date=completion_date)

    @mcp.tool()
    async def remove_book(book_id: str) -> dict:
        """Delete a book together with its quotes and reviews."""
        return await _remove_book(client, book_id=book_id)

    @mcp.tool()
    async def save_quote(book_id: str, quote_text: str, page_number: int | None = None) -> dict:
        """Save a quote from a book, optionally with its page number."""
        return await _save_quote(client, book_id=book_id, quote_text=quote_text, page_number=page_number)

    @mcp.tool()
    async def list_quotes(book_id: str | None = None, limit: int = 50) -> list[dict]:
        """List the newest quotes, or every quote from one book."""
        return await _list_quotes(client, book_id=book_id, limit=limit)

    @mcp.tool()
    async def review_book(
        book_id: str,
        rating: int,
        short_review: str | None = None,
        detailed_review: str | None = None,
    ) -> dict:
        """Review a book with a 1-5 rating and optional text."""
        return await _review_book(
            client, book_id=book_id, rating=rating,
            short_review=short_review, detailed_review=detailed_review,
        )

    @mcp.tool()
    async def set_goal(target: int, year: int | None = None, month: int | None = None) -> dict:
        """Set how many books to finish in a month (defaults to the current month)."""
        return await _set_goal(client, target=target, year=year, month=month)

    @mcp.tool()
    async def goal_progress(year: int | None = None, month: int | None = None) -> dict:
        """Progress toward a month's reading goal (defaults to the current month)."""
        return await _goal_progress(client, year=year, month=month)

    @mcp.tool()
    async def reading_stats() -> dict:
        """Completed-book totals, the last twelve months of completions,
        the rating distribution and the most common tags."""
        return await _reading_stats(client)

    return mcp
