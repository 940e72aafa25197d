"""Documents table — one schemaless row per Truck, Load or User.

Revision ID: 001_documents
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_documents"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "documents",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("owner", sa.String(255), nullable=True),
        sa.Column("data", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_documents_kind_id", "documents", ["kind", "id"])
    op.create_index("ix_documents_kind_owner_id", "documents", ["kind", "owner", "id"])


def downgrade() -> None:
    op.drop_index("ix_documents_kind_owner_id", table_name="documents")
    op.drop_index("ix_documents_kind_id", table_name="documents")
    op.drop_table("documents")
