from datetime import date

from readinglog.mcp.client import ReadingLogClient


def _failed(result) -> bool:
    return isinstance(result, dict) and bool(result.get("error"))


async def list_books(client: ReadingLogClient, status: str | None = None) -> list[dict]:
    payload = {"statuses": status} if status else {}
    result = await client.call("getBooks", payload)
    if _failed(result):
        return []
    return result


async def get_book(client: ReadingLogClient, book_id: str) -> dict:
    return await client.call("getBookById", {"id": book_id})


async def add_book(
    client: ReadingLogClient,
    title: str,
    author: str,
    status: str = "wishlist",
    publisher: str | None = None,
    pages: int | None = None,
    tags: list[str] | None = None,
) -> dict:
    body = {"title": title, "author": author, "status": status}
    if publisher is not None:
        body["publisher"] = publisher
    if pages is not None:
        body["pages"] = pages
    if tags:
        body["tags"] = tags
    if status == "reading":
        body["startedDate"] = date.today().isoformat()
        body["currentPage"] = 0
    return await client.call("addBook", body)


async def update_progress(client: ReadingLogClient, book_id: str, current_page: int) -> dict:
    book = await client.call("getBookById", {"id": book_id})
    if _failed(book):
        return book
    data = {"currentPage": current_page}
    # Logging progress on a wishlist book means it has been started
    if book.get("status") == "wishlist":
        data["status"] = "reading"
        data["startedDate"] = date.today().isoformat()
    return await client.call("updateBook", {"bookId": book_id, "data": data})


async def finish_book(client: ReadingLogClient, book_id: str, completion_date: str | None = None) -> dict:
    book = await client.call("getBookById", {"id": book_id})
    if _failed(book):
        return book
    data = {"status": "completed", "completionDate": completion_date or date.today().isoformat()}
    if book.get("pages"):
        data["currentPage"] = book["pages"]
    return await client.call("updateBook", {"bookId": book_id, "data": data})


async def remove_book(client: ReadingLogClient, book_id: str) -> dict:
    return await client.call("deleteBook", {"bookId": book_id})
