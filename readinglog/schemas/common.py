from datetime import date, datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from readinglog.id import normalize_key


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _lenient_int(value):
    value = _blank_to_none(value)
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def _lenient_text(value):
    value = _blank_to_none(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, (int, float)):
        return normalize_key(value)
    return value


# Form fields arrive as "" when left empty
Blank = BeforeValidator(_blank_to_none)

RecordId = Annotated[str, BeforeValidator(normalize_key)]
CellInt = Annotated[int | None, BeforeValidator(_lenient_int)]
CellText = Annotated[str | None, BeforeValidator(_lenient_text)]


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire and in the sheets."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecordModel(CamelModel):
    """A row read back from a sheet. Unknown columns are carried through."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class MutationResult(BaseModel):
    id: str
    message: str
