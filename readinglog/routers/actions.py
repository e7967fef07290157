import logging

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from readinglog.actions import dispatch, parse_request
from readinglog.errors import ConfigurationError, ReadingLogError
from readinglog.services.library import Library

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["actions"])


def get_library(request: Request) -> Library:
    library = getattr(request.app.state, "library", None)
    if library is None:
        raise ConfigurationError(
            "CONFIGURATION ERROR: No backing store is attached to the service. "
            "Set READINGLOG_STORE to 'sqlite' or 'memory' and restart."
        )
    return library


def success_response(data) -> JSONResponse:
    return JSONResponse({"success": True, "data": jsonable_encoder(data, by_alias=True)})


def error_response(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"success": False, "error": message}, status_code=status_code)


@router.post("")
async def handle_action(request: Request, library: Library = Depends(get_library)):
    """Single entry point: ``{action, payload}`` in, ``{success, data | error}`` out.

    The body is read raw so clients posting ``text/plain`` are accepted.
    """
    try:
        action = parse_request(await request.body())
        data = await dispatch(library, action)
    except ReadingLogError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        logger.exception("Error handling action")
        return error_response(f"An unexpected server error occurred: {e}", 500)
    return success_response(data)
