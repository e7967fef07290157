import logging

from readinglog.store.base import Sheet

logger = logging.getLogger(__name__)


class HeaderCache:
    """Column names per sheet, read once and reused until invalidated."""

    def __init__(self) -> None:
        self._headers: dict[str, list[str]] = {}

    async def get(self, sheet: Sheet) -> list[str]:
        cached = self._headers.get(sheet.name)
        if cached is None:
            cached = await sheet.header()
            self._headers[sheet.name] = cached
        return cached

    def peek(self, name: str) -> list[str] | None:
        return self._headers.get(name)

    def invalidate(self, name: str | None = None) -> None:
        if name is None:
            self._headers.clear()
            logger.warning("Header cache cleared")
        elif self._headers.pop(name, None) is not None:
            logger.warning("Header cache invalidated for sheet %r", name)
