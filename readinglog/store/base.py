"""Workbook and sheet interfaces shared by the storage backends.

A sheet is an ordered grid of rows whose first row holds the column names.
Positions passed to the row methods are zero-based indexes into the data
rows; the header row is not counted.
"""

from abc import ABC, abstractmethod
from typing import Any

Row = list[Any]


class Sheet(ABC):
    name: str

    @abstractmethod
    async def values(self) -> list[Row]:
        """Every row including the header, in order."""

    async def header(self) -> list[str]:
        values = await self.values()
        return [str(h) for h in values[0]] if values else []

    @abstractmethod
    async def read_row(self, position: int) -> Row: ...

    @abstractmethod
    async def append_row(self, row: Row) -> None: ...

    @abstractmethod
    async def write_row(self, position: int, row: Row) -> None: ...

    @abstractmethod
    async def delete_row(self, position: int) -> None:
        """Remove a data row; every later row moves up by one position."""


class Workbook(ABC):
    @abstractmethod
    async def get_sheet(self, name: str) -> Sheet | None: ...

    @abstractmethod
    async def create_sheet(self, name: str, headers: list[str]) -> Sheet: ...

    @abstractmethod
    async def sheet_names(self) -> list[str]: ...

    async def ensure_sheets(self, tables) -> list[str]:
        """Create any missing sheet with its canonical headers. Returns the names created."""
        existing = set(await self.sheet_names())
        created = []
        for table in tables:
            if table.name not in existing:
                await self.create_sheet(table.name, list(table.columns))
                created.append(table.name)
        return created
