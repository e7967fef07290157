import asyncio

from readinglog.store.base import Row, Sheet, Workbook


class MemorySheet(Sheet):
    """A sheet held in a plain list of rows.

    ``latency`` adds an ``await asyncio.sleep`` before every operation so
    tests can force concurrent requests to interleave.
    """

    def __init__(self, name: str, rows: list[Row] | None = None, latency: float = 0.0) -> None:
        self.name = name
        self.rows: list[Row] = [list(r) for r in rows or []]
        self.latency = latency

    async def _io(self) -> None:
        if self.latency:
            await asyncio.sleep(self.latency)

    async def values(self) -> list[Row]:
        await self._io()
        return [list(r) for r in self.rows]

    async def read_row(self, position: int) -> Row:
        await self._io()
        if position < 0 or position + 1 >= len(self.rows):
            raise IndexError(f"Row {position} out of range in sheet {self.name!r}")
        return list(self.rows[position + 1])

    async def append_row(self, row: Row) -> None:
        await self._io()
        self.rows.append(list(row))

    async def write_row(self, position: int, row: Row) -> None:
        await self._io()
        if position < 0 or position + 1 >= len(self.rows):
            raise IndexError(f"Row {position} out of range in sheet {self.name!r}")
        self.rows[position + 1] = list(row)

    async def delete_row(self, position: int) -> None:
        await self._io()
        if position < 0 or position + 1 >= len(self.rows):
            raise IndexError(f"Row {position} out of range in sheet {self.name!r}")
        del self.rows[position + 1]


class MemoryWorkbook(Workbook):
    def __init__(self, latency: float = 0.0) -> None:
        self.sheets: dict[str, MemorySheet] = {}
        self.latency = latency

    @classmethod
    def with_tables(cls, tables, latency: float = 0.0) -> "MemoryWorkbook":
        workbook = cls(latency=latency)
        for table in tables:
            workbook.sheets[table.name] = MemorySheet(table.name, [list(table.columns)], latency)
        return workbook

    async def get_sheet(self, name: str) -> MemorySheet | None:
        return self.sheets.get(name)

    async def create_sheet(self, name: str, headers: list[str]) -> MemorySheet:
        sheet = MemorySheet(name, [list(headers)], self.latency)
        self.sheets[name] = sheet
        return sheet

    async def sheet_names(self) -> list[str]:
        return list(self.sheets)
