import json
from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from readinglog.app import create_app
from readinglog.gate import MutationGate
from readinglog.services.library import Library
from readinglog.store import MemoryWorkbook
from readinglog.tables import ALL_TABLES, QUOTES


async def call(client, action, payload=None):
    body = {"action": action}
    if payload is not None:
        body["payload"] = payload
    return await client.post("/api", json=body)


async def data(client, action, payload=None):
    resp = await call(client, action, payload)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["success"] is True
    return body["data"]


@pytest.mark.asyncio
async def test_add_and_get_book(client):
    added = await data(client, "addBook", {
        "title": "Dune", "author": "Frank Herbert", "status": "reading",
        "pages": 412, "currentPage": 0, "tags": ["fiction", "favorite"], "startedDate": "2024-03-01",
    })
    assert added["message"] == "Book added successfully."

    book = await data(client, "getBookById", {"id": added["id"]})
    assert book["id"] == added["id"]
    assert book["title"] == "Dune"
    assert book["tags"] == ["fiction", "favorite"]
    assert book["startedDate"] == "2024-03-01"
    assert book["createdAt"] == book["updatedAt"]
    assert book["review"] is None


@pytest.mark.asyncio
async def test_get_books_with_status_filter(client):
    for title, status in [("A", "wishlist"), ("B", "reading"), ("C", "completed")]:
        await data(client, "addBook", {"title": title, "author": "X", "status": status})
    assert len(await data(client, "getBooks")) == 3
    books = await data(client, "getBooks", {"statuses": "reading,completed"})
    assert [b["title"] for b in books] == ["B", "C"]


@pytest.mark.asyncio
async def test_update_book(client):
    book_id = (await data(client, "addBook", {"title": "Duen", "author": "Frank Herbert"}))["id"]
    before = await data(client, "getBookById", {"id": book_id})
    result = await data(client, "updateBook", {"bookId": book_id, "data": {"title": "Dune", "id": "hijack"}})
    assert result == {"id": book_id, "message": "Book updated successfully."}
    after = await data(client, "getBookById", {"id": book_id})
    assert after["title"] == "Dune"
    assert after["id"] == book_id
    assert after["updatedAt"] >= before["updatedAt"]


@pytest.mark.asyncio
async def test_update_missing_book_is_404(client):
    resp = await call(client, "updateBook", {"bookId": "nope", "data": {"title": "x"}})
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Book with ID nope not found."}


@pytest.mark.asyncio
async def test_get_missing_book_is_404(client):
    resp = await call(client, "getBookById", {"id": "nope"})
    assert resp.status_code == 404
    assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_quote_lifecycle_and_cascade(client):
    book_id = (await data(client, "addBook", {
        "title": "A", "author": "B", "status": "reading", "pages": 300, "currentPage": 0,
    }))["id"]
    await data(client, "addQuote", {"bookId": book_id, "quoteText": "Memorable", "pageNumber": 150})

    quotes = await data(client, "getQuotesByBookId", {"bookId": book_id})
    assert len(quotes) == 1
    assert quotes[0]["pageNumber"] == 150
    assert quotes[0]["bookTitle"] == "A"

    deleted = await data(client, "deleteBook", {"bookId": book_id})
    assert deleted["message"] == "Book and all associated data deleted successfully."
    assert await data(client, "getQuotesByBookId", {"bookId": book_id}) == []


@pytest.mark.asyncio
async def test_delete_missing_book_succeeds(client):
    result = await data(client, "deleteBook", {"bookId": "ghost"})
    assert result == {"id": "ghost", "message": "Item not found."}


@pytest.mark.asyncio
async def test_update_and_delete_quote(client):
    quote_id = (await data(client, "addQuote", {"bookId": "b1", "quoteText": "Draft"}))["id"]
    await data(client, "updateQuote", {"quoteId": quote_id, "data": {"quoteText": "Final"}})
    quotes = await data(client, "getQuotes")
    assert [q["quoteText"] for q in quotes] == ["Final"]
    assert (await data(client, "deleteQuote", {"quoteId": quote_id}))["message"] == "Quote deleted successfully."
    assert await data(client, "getQuotes", {"limit": 50}) == []


@pytest.mark.asyncio
async def test_review_attached_to_book(client):
    book_id = (await data(client, "addBook", {"title": "A", "author": "B", "status": "completed"}))["id"]
    await data(client, "addBookReview", {"bookId": book_id, "rating": 4, "shortReview": "Good"})
    book = await data(client, "getBookById", {"id": book_id})
    assert book["review"]["rating"] == 4
    assert book["review"]["shortReview"] == "Good"


@pytest.mark.asyncio
async def test_goal_progress_scenario(client):
    first = await data(client, "setReadingGoal", {"year": 2024, "month": 3, "target": 5})
    assert first == {"id": "2024-03", "message": "Goal set successfully.", "outcome": "inserted"}
    again = await data(client, "setReadingGoal", {"year": 2024, "month": 3, "target": 5})
    assert again["outcome"] == "updated"
    for day in (3, 14, 28):
        await data(client, "addBook", {
            "title": f"Book {day}", "author": "X", "status": "completed", "completionDate": f"2024-03-{day:02d}",
        })
    progress = await data(client, "getReadingGoalProgress", {"year": 2024, "month": 3})
    assert progress == {"target": 5, "achieved": 3, "progress": 60}


@pytest.mark.asyncio
async def test_goal_progress_without_goal(client):
    assert await data(client, "getReadingGoalProgress", {"year": "2024", "month": "7"}) == {
        "target": 0, "achieved": 0, "progress": 0,
    }


@pytest.mark.asyncio
async def test_stats_actions(client):
    today = date.today()
    book_id = (await data(client, "addBook", {
        "title": "A", "author": "B", "status": "completed", "pages": 200,
        "completionDate": today.isoformat(), "tags": ["sci-fi", "classic"],
    }))["id"]
    await data(client, "addBook", {"title": "C", "author": "D", "status": "reading", "pages": 999, "tags": "sci-fi"})
    await data(client, "addBookReview", {"bookId": book_id, "rating": 5})

    summary = await data(client, "getCompletedBooksStats")
    assert summary == {"completedBooks": 1, "thisYearBooks": 1, "thisMonthBooks": 1, "totalPages": 200}

    detailed = await data(client, "getDetailedStats")
    assert len(detailed["monthlyData"]) == 12
    assert detailed["monthlyData"][-1] == {"name": f"{today.year}-{today.month:02d}", "books": 1, "month": today.month}
    assert detailed["ratingData"] == [{"name": "★5", "value": 1}]
    assert detailed["tagData"] == [{"name": "sci-fi", "value": 1}, {"name": "classic", "value": 1}]


@pytest.mark.asyncio
async def test_text_plain_body_accepted(client):
    resp = await client.post(
        "/api",
        content=json.dumps({"action": "getBooks", "payload": {}}),
        headers={"Content-Type": "text/plain;charset=utf-8"},
    )
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": []}


@pytest.mark.asyncio
async def test_null_payload_treated_as_empty(client):
    resp = await client.post("/api", json={"action": "getCompletedBooksStats", "payload": None})
    assert resp.json()["success"] is True


@pytest.mark.asyncio
async def test_unknown_action(client):
    resp = await call(client, "launchRockets", {})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Unknown action: launchRockets"}


@pytest.mark.asyncio
async def test_malformed_json(client):
    resp = await client.post("/api", content=b"{not json")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Request body is not valid JSON."


@pytest.mark.asyncio
async def test_invalid_payload_lists_fields(client):
    resp = await call(client, "setReadingGoal", {"year": 2024, "month": 13})
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error.startswith("Invalid payload for setReadingGoal:")
    assert "month" in error
    assert "target" in error


@pytest.mark.asyncio
async def test_invalid_status_rejected(client):
    resp = await call(client, "addBook", {"title": "A", "status": "abandoned"})
    assert resp.status_code == 400
    assert "status" in resp.json()["error"]


@pytest.mark.asyncio
async def test_lock_timeout_is_503(library, client):
    library.gate.timeout = 0.05
    async with library.gate.hold():
        resp = await call(client, "addBook", {"title": "A"})
    assert resp.status_code == 503
    assert "try again" in resp.json()["error"]
    assert await data(client, "getBooks") == []


@pytest.mark.asyncio
async def test_missing_sheet_is_configuration_error():
    workbook = MemoryWorkbook.with_tables([t for t in ALL_TABLES if t is not QUOTES])
    app = create_app(Library(workbook, gate=MutationGate(timeout=1.0)))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        resp = await call(c, "getQuotes")
    assert resp.status_code == 500
    assert resp.json()["error"].startswith("CONFIGURATION ERROR")
    assert '"Quotes"' in resp.json()["error"]


@pytest.mark.asyncio
async def test_no_library_is_configuration_error():
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        resp = await call(c, "getBooks")
    assert resp.status_code == 500
    assert "No backing store" in resp.json()["error"]


@pytest.mark.asyncio
async def test_unexpected_error_is_500(library, client, monkeypatch):
    async def explode(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(library.books, "list", explode)
    resp = await call(client, "getBooks")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "An unexpected server error occurred: disk on fire"}
