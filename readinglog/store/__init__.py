from readinglog.store.base import Sheet, Workbook
from readinglog.store.headers import HeaderCache
from readinglog.store.memory import MemorySheet, MemoryWorkbook
from readinglog.store.rows import Record, RowStore
from readinglog.store.sql import SqlSheet, SqlWorkbook

__all__ = [
    "HeaderCache",
    "MemorySheet",
    "MemoryWorkbook",
    "Record",
    "RowStore",
    "Sheet",
    "SqlSheet",
    "SqlWorkbook",
    "Workbook",
]
