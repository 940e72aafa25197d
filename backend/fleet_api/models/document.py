"""Document ORM — one row per stored entity of any kind.

Invariants:
    - id is an integer primary key assigned by the database, unique across kinds
    - (kind, id) is the logical key; lookups always filter on both
    - owner mirrors data["owner"] when present, so owner filters run in SQL
    - data never contains "id": the key lives in its own column

Design Decisions:
    - JSON column for data: the store is schemaless, entity shape is enforced by schemas/
    - owner promoted to an indexed column: owner-scoped pages are filtered by the query,
      not after it
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from fleet_api.db.base import Base


class Document(Base):
    """Schemaless entity row keyed by (kind, id)."""
    __tablename__ = "documents"
    __table_args__ = (
        Index("ix_documents_kind_id", "kind", "id"),
        Index("ix_documents_kind_owner_id", "kind", "owner", "id"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    owner: Mapped[str | None] = mapped_column(String(255), nullable=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
