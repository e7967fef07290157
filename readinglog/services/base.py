"""Generic CRUD over one sheet, shared by the entity services."""

import logging
from enum import StrEnum

from pydantic import BaseModel

from readinglog.config import MISSING_FIELDS
from readinglog.errors import InvalidPayloadError, NotFoundError
from readinglog.gate import MutationGate
from readinglog.id import new_id, normalize_key, utc_timestamp
from readinglog.schemas.common import MutationResult, RecordModel
from readinglog.store import RowStore
from readinglog.tables import TableSpec

logger = logging.getLogger(__name__)

# Never writable through add/update
_SYSTEM_FIELDS = ("id", "createdAt", "updatedAt")


class MissingFieldPolicy(StrEnum):
    FILL = "fill"
    REJECT = "reject"


def _is_blank(value) -> bool:
    return value is None or value == "" or value == []


class EntityService:
    table: TableSpec
    record_model: type[RecordModel]
    noun = "Item"
    required: tuple[str, ...] = ()

    def __init__(
        self,
        store: RowStore,
        gate: MutationGate,
        missing_fields: MissingFieldPolicy | str = MISSING_FIELDS,
    ) -> None:
        self.store = store
        self.gate = gate
        self.missing_fields = MissingFieldPolicy(missing_fields)

    def parse(self, record: dict) -> RecordModel:
        return self.record_model.model_validate(record)

    async def list(self) -> list:
        return [self.parse(r) for r in await self.store.read_all(self.table)]

    async def get_by_id(self, record_id):
        found = await self.store.find_by_key(self.table, self.table.key, record_id)
        if found is None:
            raise NotFoundError(f"{self.noun} with ID {normalize_key(record_id)} not found.")
        return self.parse(found[1])

    def check_required(self, fields: dict) -> None:
        if self.missing_fields is MissingFieldPolicy.FILL:
            return
        missing = [name for name in self.required if _is_blank(fields.get(name))]
        if missing:
            raise InvalidPayloadError(f"Missing required field(s) for {self.noun.lower()}: {', '.join(missing)}")

    def new_record(self, data: BaseModel) -> dict:
        """Payload fields plus a fresh id and creation stamp; caller-supplied system fields are dropped."""
        fields = data.model_dump(by_alias=True)
        self.check_required(fields)
        for name in _SYSTEM_FIELDS:
            fields.pop(name, None)
        now = utc_timestamp()
        fields["id"] = new_id()
        fields["createdAt"] = now
        if "updatedAt" in self.table.columns:
            fields["updatedAt"] = now
        return fields

    async def add(self, data: BaseModel) -> MutationResult:
        record = self.new_record(data)
        async with self.gate.hold(self.table):
            await self.store.append(self.table, record)
        logger.info("Added %s %s", self.noun.lower(), record["id"])
        return MutationResult(id=record["id"], message=f"{self.noun} added successfully.")

    async def update(self, record_id, data: BaseModel) -> MutationResult:
        changes = data.model_dump(by_alias=True, exclude_unset=True)
        for name in _SYSTEM_FIELDS:
            changes.pop(name, None)
        async with self.gate.hold(self.table):
            found = await self.store.find_by_key(self.table, self.table.key, record_id)
            if found is None:
                raise NotFoundError(f"{self.noun} with ID {normalize_key(record_id)} not found.")
            position, current = found
            if "updatedAt" in current:
                changes["updatedAt"] = utc_timestamp(not_before=current["updatedAt"])
            await self.store.update_in_place(self.table, position, changes)
        logger.info("Updated %s %s (%s)", self.noun.lower(), normalize_key(record_id), ", ".join(changes) or "no fields")
        return MutationResult(id=normalize_key(record_id), message=f"{self.noun} updated successfully.")

    async def delete(self, record_id) -> MutationResult:
        record_id = normalize_key(record_id)
        async with self.gate.hold(self.table):
            found = await self.store.find_by_key(self.table, self.table.key, record_id)
            if found is None:
                return MutationResult(id=record_id, message="Item not found.")
            await self.store.delete_row(self.table, found[0])
        logger.info("Deleted %s %s", self.noun.lower(), record_id)
        return MutationResult(id=record_id, message=f"{self.noun} deleted successfully.")
