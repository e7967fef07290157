"""Row-level access to the workbook, keyed by each sheet's header row."""

import logging
from datetime import date, datetime
from typing import Any

from readinglog.errors import ConfigurationError
from readinglog.id import normalize_key
from readinglog.store.base import Row, Sheet, Workbook
from readinglog.store.headers import HeaderCache
from readinglog.tables import TableSpec

logger = logging.getLogger(__name__)

Record = dict[str, Any]


def to_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _as_record(header: list[str], row: Row) -> Record:
    return {h: (row[i] if i < len(row) else "") for i, h in enumerate(header)}


class RowStore:
    def __init__(self, workbook: Workbook, headers: HeaderCache | None = None) -> None:
        self.workbook = workbook
        self.headers = headers or HeaderCache()

    async def sheet(self, table: TableSpec) -> Sheet:
        sheet = await self.workbook.get_sheet(table.name)
        if sheet is None:
            raise ConfigurationError(
                f'CONFIGURATION ERROR: A sheet named "{table.name}" was not found in the workbook. '
                "Check the READINGLOG_SHEET_* settings and make sure they exactly match the sheet names, "
                "including case and surrounding spaces."
            )
        return sheet

    async def columns(self, table: TableSpec, sheet: Sheet | None = None) -> list[str]:
        """Cached header for ``table``, verified to hold every required column.

        A missing column invalidates the cache and re-reads the header once
        before failing, so a sheet fixed underneath a running process is
        picked up.
        """
        sheet = sheet or await self.sheet(table)
        header = await self.headers.get(sheet)
        missing = [c for c in table.columns if c not in header]
        if missing:
            self.headers.invalidate(table.name)
            header = await self.headers.get(sheet)
            missing = [c for c in table.columns if c not in header]
        if missing:
            raise ConfigurationError(
                f"CONFIGURATION ERROR: Sheet '{table.name}' is missing required column(s): "
                f"{', '.join(missing)}. Add them to the sheet's first row; column order does not matter."
            )
        return header

    def _check_header(self, table: TableSpec, header: list[str]) -> None:
        cached = self.headers.peek(table.name)
        if cached is not None and cached != header:
            self.headers.invalidate(table.name)

    async def read_all(self, table: TableSpec) -> list[Record]:
        sheet = await self.sheet(table)
        values = await sheet.values()
        if len(values) < 2:
            return []
        header = [str(h) for h in values[0]]
        self._check_header(table, header)
        return [_as_record(header, row) for row in values[1:]]

    async def find_by_key(self, table: TableSpec, column: str, value: Any) -> tuple[int, Record] | None:
        sheet = await self.sheet(table)
        values = await sheet.values()
        if len(values) < 2:
            return None
        header = [str(h) for h in values[0]]
        self._check_header(table, header)
        if column not in header:
            raise ConfigurationError(
                f"CONFIGURATION ERROR: Sheet '{table.name}' must have a '{column}' column."
            )
        index = header.index(column)
        wanted = normalize_key(value)
        for position, row in enumerate(values[1:]):
            cell = row[index] if index < len(row) else ""
            if normalize_key(cell) == wanted:
                return position, _as_record(header, row)
        return None

    async def append(self, table: TableSpec, record: Record) -> None:
        sheet = await self.sheet(table)
        header = await self.columns(table, sheet)
        await sheet.append_row([to_cell(record.get(h)) for h in header])

    async def update_in_place(self, table: TableSpec, position: int, changes: Record) -> Record:
        """Rewrite the row at ``position``; only columns named in ``changes`` change."""
        sheet = await self.sheet(table)
        header = await self.columns(table, sheet)
        current = await sheet.read_row(position)
        row = []
        for i, h in enumerate(header):
            if h in changes:
                row.append(to_cell(changes[h]))
            else:
                row.append(current[i] if i < len(current) else "")
        await sheet.write_row(position, row)
        return _as_record(header, row)

    async def delete_row(self, table: TableSpec, position: int) -> None:
        sheet = await self.sheet(table)
        await sheet.delete_row(position)

    async def delete_all_matching(self, table: TableSpec, column: str, value: Any) -> int:
        sheet = await self.sheet(table)
        values = await sheet.values()
        if len(values) < 2:
            return 0
        header = [str(h) for h in values[0]]
        if column not in header:
            return 0
        index = header.index(column)
        wanted = normalize_key(value)
        positions = [
            position
            for position, row in enumerate(values[1:])
            if index < len(row) and normalize_key(row[index]) == wanted
        ]
        # Bottom-up so earlier positions stay valid
        for position in reversed(positions):
            await sheet.delete_row(position)
        if positions:
            logger.info("Deleted %d row(s) from %s where %s=%s", len(positions), table.name, column, wanted)
        return len(positions)
