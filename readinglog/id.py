import uuid
from datetime import UTC, datetime


def new_id() -> str:
    return str(uuid.uuid4())


def normalize_key(value) -> str:
    """Coerce a key to the string form used for every id comparison.

    Integral floats render as integers so that a cell holding ``5.0`` matches
    a payload id of ``5`` or ``"5"``.
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def year_month_key(year: int, month: int) -> str:
    return f"{int(year)}-{int(month):02d}"


def utc_timestamp(not_before: str | None = None) -> str:
    stamp = datetime.now(UTC).isoformat(timespec="microseconds")
    if not_before and isinstance(not_before, str) and not_before > stamp:
        return not_before
    return stamp
