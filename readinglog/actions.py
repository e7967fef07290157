"""Parse ``{action, payload}`` envelopes and route them to the services."""

import json
import logging

from pydantic import TypeAdapter, ValidationError

from readinglog.errors import InvalidPayloadError
from readinglog.schemas.actions import (
    ACTION_MODELS,
    ActionRequest,
    AddBook,
    AddBookReview,
    AddQuote,
    DeleteBook,
    DeleteQuote,
    GetBookById,
    GetBooks,
    GetCompletedBooksStats,
    GetDetailedStats,
    GetQuotes,
    GetQuotesByBookId,
    GetReadingGoalProgress,
    SetReadingGoal,
    UpdateBook,
    UpdateQuote,
    action_name,
)
from readinglog.services.library import Library

logger = logging.getLogger(__name__)

_adapter = TypeAdapter(ActionRequest)
ACTIONS = {action_name(model) for model in ACTION_MODELS}


async def _get_books(library: Library, req: GetBooks):
    return await library.books.list(req.payload.status_set())


async def _get_book_by_id(library: Library, req: GetBookById):
    return await library.books.get_by_id(req.payload.id)


async def _add_book(library: Library, req: AddBook):
    return await library.books.add(req.payload)


async def _update_book(library: Library, req: UpdateBook):
    return await library.books.update(req.payload.book_id, req.payload.data)


async def _delete_book(library: Library, req: DeleteBook):
    return await library.books.delete(req.payload.book_id)


async def _get_quotes(library: Library, req: GetQuotes):
    return await library.quotes.list(limit=req.payload.limit)


async def _get_quotes_by_book_id(library: Library, req: GetQuotesByBookId):
    return await library.quotes.list_for_book(req.payload.book_id)


async def _add_quote(library: Library, req: AddQuote):
    return await library.quotes.add(req.payload)


async def _update_quote(library: Library, req: UpdateQuote):
    return await library.quotes.update(req.payload.quote_id, req.payload.data)


async def _delete_quote(library: Library, req: DeleteQuote):
    return await library.quotes.delete(req.payload.quote_id)


async def _add_book_review(library: Library, req: AddBookReview):
    return await library.reviews.add(req.payload)


async def _set_reading_goal(library: Library, req: SetReadingGoal):
    p = req.payload
    return await library.goals.set(p.year, p.month, p.target)


async def _get_reading_goal_progress(library: Library, req: GetReadingGoalProgress):
    return await library.goal_progress(req.payload.year, req.payload.month)


async def _get_completed_books_stats(library: Library, req: GetCompletedBooksStats):
    return await library.completed_books_stats()


async def _get_detailed_stats(library: Library, req: GetDetailedStats):
    return await library.detailed_stats()


HANDLERS = {
    GetBooks: _get_books,
    GetBookById: _get_book_by_id,
    AddBook: _add_book,
    UpdateBook: _update_book,
    DeleteBook: _delete_book,
    GetQuotes: _get_quotes,
    GetQuotesByBookId: _get_quotes_by_book_id,
    AddQuote: _add_quote,
    UpdateQuote: _update_quote,
    DeleteQuote: _delete_quote,
    AddBookReview: _add_book_review,
    SetReadingGoal: _set_reading_goal,
    GetReadingGoalProgress: _get_reading_goal_progress,
    GetCompletedBooksStats: _get_completed_books_stats,
    GetDetailedStats: _get_detailed_stats,
}

_unhandled = [model.__name__ for model in ACTION_MODELS if model not in HANDLERS]
if _unhandled:
    raise RuntimeError(f"No handler registered for: {', '.join(_unhandled)}")


def _describe(exc: ValidationError, action: str) -> str:
    problems = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"] if part not in (action, "payload"))
        problems.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return "; ".join(problems)


def parse_request(body: bytes | str | dict):
    """Turn a raw request body into the request model for its action.

    Raises InvalidPayloadError for malformed JSON, an unknown action, or a
    payload that fails validation.
    """
    if isinstance(body, (bytes, str)):
        try:
            body = json.loads(body)
        except ValueError:
            raise InvalidPayloadError("Request body is not valid JSON.") from None
    if not isinstance(body, dict):
        raise InvalidPayloadError("Request body must be a JSON object with 'action' and 'payload'.")
    action = body.get("action")
    if not isinstance(action, str) or action not in ACTIONS:
        raise InvalidPayloadError(f"Unknown action: {action}")
    payload = body.get("payload")
    envelope = {"action": action, "payload": {} if payload is None else payload}
    try:
        return _adapter.validate_python(envelope)
    except ValidationError as e:
        raise InvalidPayloadError(f"Invalid payload for {action}: {_describe(e, action)}") from None


async def dispatch(library: Library, request):
    logger.debug("Dispatching %s", type(request).__name__)
    return await HANDLERS[type(request)](library, request)
