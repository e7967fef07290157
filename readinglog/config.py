import os
from pathlib import Path

DB_PATH = os.environ.get("READINGLOG_DB_PATH", str(Path.cwd() / "readinglog.db"))
DATABASE_URL = f"sqlite+aiosqlite:///{DB_PATH}"

# "sqlite" or "memory"
STORE_BACKEND = os.environ.get("READINGLOG_STORE", "sqlite")

# Sheet (tab) names; must match the workbook exactly
SHEET_BOOKS = os.environ.get("READINGLOG_SHEET_BOOKS", "Books")
SHEET_QUOTES = os.environ.get("READINGLOG_SHEET_QUOTES", "Quotes")
SHEET_REVIEWS = os.environ.get("READINGLOG_SHEET_REVIEWS", "Reviews")
SHEET_GOALS = os.environ.get("READINGLOG_SHEET_GOALS", "Goals")

# Mutation gate settings
LOCK_TIMEOUT = float(os.environ.get("READINGLOG_LOCK_TIMEOUT", "15.0"))
DELETE_LOCK_TIMEOUT = float(os.environ.get("READINGLOG_DELETE_LOCK_TIMEOUT", "30.0"))
LOCK_GRANULARITY = os.environ.get("READINGLOG_LOCK_GRANULARITY", "global")

# "fill" persists absent fields as empty cells, "reject" refuses the write
MISSING_FIELDS = os.environ.get("READINGLOG_MISSING_FIELDS", "fill")

BOOTSTRAP = os.environ.get("READINGLOG_BOOTSTRAP", "1") not in ("0", "false", "no")
