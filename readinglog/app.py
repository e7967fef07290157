from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from readinglog.errors import ReadingLogError
from readinglog.routers import actions
from readinglog.services.library import Library, open_library


async def reading_log_error_handler(request: Request, exc: ReadingLogError):
    return actions.error_response(exc.message, exc.status_code)


def create_app(library: Library | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.library is None:
            app.state.library = await open_library()
        yield

    app = FastAPI(title="Reading Log", version="0.1.0", lifespan=lifespan)
    app.state.library = library
    app.include_router(actions.router)
    app.add_exception_handler(ReadingLogError, reading_log_error_handler)
    return app


app = create_app()
