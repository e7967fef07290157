"""Workbook persisted in SQLite through SQLAlchemy's async ORM."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from readinglog.models import Sheet as SheetModel
from readinglog.models import SheetRow
from readinglog.store.base import Row, Sheet, Workbook


class SqlSheet(Sheet):
    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession], name: str) -> None:
        self.sessionmaker = sessionmaker
        self.name = name

    async def _row_at(self, session: AsyncSession, position: int) -> SheetRow:
        if position < 0:
            raise IndexError(f"Row {position} out of range in sheet {self.name!r}")
        result = await session.execute(
            select(SheetRow)
            .where(SheetRow.sheet_name == self.name)
            .order_by(SheetRow.id)
            .offset(position)
            .limit(1)
        )
        row = result.scalar_one_or_none()
        if row is None:
            raise IndexError(f"Row {position} out of range in sheet {self.name!r}")
        return row

    async def header(self) -> list[str]:
        async with self.sessionmaker() as session:
            sheet = await session.get(SheetModel, self.name)
            return [str(h) for h in sheet.headers] if sheet and sheet.headers else []

    async def values(self) -> list[Row]:
        async with self.sessionmaker() as session:
            sheet = await session.get(SheetModel, self.name)
            if sheet is None or not sheet.headers:
                return []
            result = await session.execute(
                select(SheetRow.cells).where(SheetRow.sheet_name == self.name).order_by(SheetRow.id)
            )
            return [list(sheet.headers)] + [list(cells) for cells in result.scalars().all()]

    async def read_row(self, position: int) -> Row:
        async with self.sessionmaker() as session:
            return list((await self._row_at(session, position)).cells)

    async def append_row(self, row: Row) -> None:
        async with self.sessionmaker() as session:
            session.add(SheetRow(sheet_name=self.name, cells=list(row)))
            await session.commit()

    async def write_row(self, position: int, row: Row) -> None:
        async with self.sessionmaker() as session:
            existing = await self._row_at(session, position)
            existing.cells = list(row)
            await session.commit()

    async def delete_row(self, position: int) -> None:
        async with self.sessionmaker() as session:
            existing = await self._row_at(session, position)
            await session.delete(existing)
            await session.commit()


class SqlWorkbook(Workbook):
    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self.sessionmaker = sessionmaker

    async def get_sheet(self, name: str) -> SqlSheet | None:
        async with self.sessionmaker() as session:
            if await session.get(SheetModel, name) is None:
                return None
        return SqlSheet(self.sessionmaker, name)

    async def create_sheet(self, name: str, headers: list[str]) -> SqlSheet:
        async with self.sessionmaker() as session:
            session.add(SheetModel(name=name, headers=list(headers)))
            await session.commit()
        return SqlSheet(self.sessionmaker, name)

    async def sheet_names(self) -> list[str]:
        async with self.sessionmaker() as session:
            result = await session.execute(select(SheetModel.name).order_by(SheetModel.name))
            return list(result.scalars().all())
