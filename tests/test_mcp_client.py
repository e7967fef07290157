import pytest
from readinglog.mcp.client import ReadingLogClient


@pytest.mark.asyncio
async def test_call_returns_data(client):
    rl = ReadingLogClient(client)
    added = await rl.call("addBook", {"title": "Dune", "author": "Frank Herbert"})
    assert added["message"] == "Book added successfully."
    books = await rl.call("getBooks")
    assert isinstance(books, list)
    assert books[0]["title"] == "Dune"


@pytest.mark.asyncio
async def test_call_404(client):
    """A failure envelope becomes an error dict with the status code."""
    rl = ReadingLogClient(client)
    result = await rl.call("getBookById", {"id": "nope"})
    assert result == {"error": True, "status": 404, "detail": "Book with ID nope not found."}


@pytest.mark.asyncio
async def test_call_unknown_action(client):
    rl = ReadingLogClient(client)
    result = await rl.call("nothing")
    assert result["error"] is True
    assert result["status"] == 400


@pytest.mark.asyncio
async def test_call_wrong_path(client):
    rl = ReadingLogClient(client, path="/missing")
    result = await rl.call("getBooks")
    assert result["error"] is True
    assert result["status"] == 404
