from enum import StrEnum

from pydantic import Field

from readinglog.schemas.common import CamelModel, CellInt, CellText


class UpsertOutcome(StrEnum):
    INSERTED = "inserted"
    UPDATED = "updated"


class GoalRecord(CamelModel):
    year_month: CellText = Field(None, alias="year_month")
    year: CellInt = None
    month: CellInt = None
    target: CellInt = None


class GoalSetResult(CamelModel):
    id: str
    message: str
    outcome: UpsertOutcome


class GoalProgress(CamelModel):
    target: int = 0
    achieved: int = 0
    progress: int = 0
