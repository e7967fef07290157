import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from readinglog.app import create_app
from readinglog.database import Base
from readinglog.gate import MutationGate
from readinglog.schemas.book import BookCreate
from readinglog.services.library import Library
from readinglog.store import MemoryWorkbook, SqlWorkbook
from readinglog.tables import ALL_TABLES
import readinglog.models  # noqa: F401

TEST_DB_URL = "sqlite+aiosqlite://"  # in-memory


@pytest.fixture
def workbook():
    return MemoryWorkbook.with_tables(ALL_TABLES)


@pytest.fixture
def library(workbook):
    return Library(workbook, gate=MutationGate(timeout=1.0), missing_fields="fill", delete_timeout=1.0)


@pytest.fixture
async def client(library):
    app = create_app(library)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def sql_workbook():
    engine = create_async_engine(TEST_DB_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield SqlWorkbook(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))
    await engine.dispose()


@pytest.fixture
def make_book(library):
    async def _make(**fields):
        fields.setdefault("title", "Dune")
        fields.setdefault("author", "Frank Herbert")
        fields.setdefault("status", "wishlist")
        return (await library.books.add(BookCreate(**fields))).id

    return _make
