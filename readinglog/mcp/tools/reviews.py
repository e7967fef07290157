from readinglog.mcp.client import ReadingLogClient


async def review_book(
    client: ReadingLogClient,
    book_id: str,
    rating: int,
    short_review: str | None = None,
    detailed_review: str | None = None,
) -> dict:
    body = {"bookId": book_id, "rating": rating}
    if short_review is not None:
        body["shortReview"] = short_review
    if detailed_review is not None:
        body["detailedReview"] = detailed_review
    return await client.call("addBookReview", body)
