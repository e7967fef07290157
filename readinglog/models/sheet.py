from datetime import UTC, datetime

from sqlalchemy import JSON, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from readinglog.database import Base


class Sheet(Base):
    __tablename__ = "sheets"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    headers: Mapped[list] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))

    rows: Mapped[list["SheetRow"]] = relationship(
        back_populates="sheet", cascade="all, delete-orphan", order_by="SheetRow.id"
    )


class SheetRow(Base):
    """One data row. Autoincrement ids give the row order."""

    __tablename__ = "sheet_rows"

    id: Mapped[int] = mapped_column(primary_key=True)
    sheet_name: Mapped[str] = mapped_column(ForeignKey("sheets.name", ondelete="CASCADE"), index=True)
    cells: Mapped[list] = mapped_column(JSON, default=list)

    sheet: Mapped["Sheet"] = relationship(back_populates="rows")
