import asyncio
import logging

from httpx import ASGITransport, AsyncClient

from readinglog.app import create_app
from readinglog.config import STORE_BACKEND
from readinglog.database import engine
from readinglog.mcp.client import ReadingLogClient
from readinglog.mcp.server import create_mcp_server
from readinglog.services.library import open_library


async def prepare_library():
    library = await open_library()
    if STORE_BACKEND == "sqlite":
        # Pooled connections are bound to this loop; the server runs its own
        await engine.dispose()
    return library


def main():
    # basicConfig logs to stderr; stdout carries the MCP protocol
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    library = asyncio.run(prepare_library())
    app = create_app(library)
    transport = ASGITransport(app=app)
    http = AsyncClient(transport=transport, base_url="http://localhost")
    client = ReadingLogClient(http)
    mcp = create_mcp_server(client)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
