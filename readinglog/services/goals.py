import logging

from readinglog.gate import MutationGate
from readinglog.id import year_month_key
from readinglog.schemas.common import MutationResult
from readinglog.schemas.goal import GoalRecord, GoalSetResult, UpsertOutcome
from readinglog.store import RowStore
from readinglog.tables import GOALS

logger = logging.getLogger(__name__)


class GoalService:
    """Monthly reading targets, one row per ``year_month`` key."""

    table = GOALS

    def __init__(self, store: RowStore, gate: MutationGate) -> None:
        self.store = store
        self.gate = gate

    async def get(self, year: int, month: int) -> GoalRecord | None:
        found = await self.store.find_by_key(GOALS, GOALS.key, year_month_key(year, month))
        return GoalRecord.model_validate(found[1]) if found else None

    async def list(self):
        return [GoalRecord.model_validate(r) for r in await self.store.read_all(GOALS)]

    async def set(self, year: int, month: int, target: int) -> GoalSetResult:
        """Insert the goal, or overwrite the existing row for the same year and month."""
        key = year_month_key(year, month)
        record = {GOALS.key: key, "year": int(year), "month": int(month), "target": int(target)}
        async with self.gate.hold(GOALS):
            found = await self.store.find_by_key(GOALS, GOALS.key, key)
            if found is None:
                await self.store.append(GOALS, record)
                outcome = UpsertOutcome.INSERTED
            else:
                await self.store.update_in_place(GOALS, found[0], record)
                outcome = UpsertOutcome.UPDATED
        logger.info("Goal %s %s with target %d", key, outcome, int(target))
        return GoalSetResult(id=key, message="Goal set successfully.", outcome=outcome)

    async def delete(self, year: int, month: int) -> MutationResult:
        key = year_month_key(year, month)
        async with self.gate.hold(GOALS):
            found = await self.store.find_by_key(GOALS, GOALS.key, key)
            if found is None:
                return MutationResult(id=key, message="Item not found.")
            await self.store.delete_row(GOALS, found[0])
        logger.info("Deleted goal %s", key)
        return MutationResult(id=key, message="Goal deleted successfully.")
