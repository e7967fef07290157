from readinglog.mcp.client import ReadingLogClient


async def save_quote(
    client: ReadingLogClient,
    book_id: str,
    quote_text: str,
    page_number: int | None = None,
) -> dict:
    body = {"bookId": book_id, "quoteText": quote_text}
    if page_number is not None:
        body["pageNumber"] = page_number
    return await client.call("addQuote", body)


async def list_quotes(client: ReadingLogClient, book_id: str | None = None, limit: int = 50) -> list[dict]:
    if book_id:
        result = await client.call("getQuotesByBookId", {"bookId": book_id})
    else:
        result = await client.call("getQuotes", {"limit": limit})
    if isinstance(result, dict) and result.get("error"):
        return []
    return result
