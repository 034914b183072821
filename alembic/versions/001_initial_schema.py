"""Initial schema: tenant-partitioned record table.

Revision ID: 001
Revises:
Create Date: 2026-10-19

Changes:
- Create tenant_records table holding every per-user collection
  (profile, chat_sessions, notes, decks, quiz_results, goals,
  progress_stats, study_streak) as JSON payloads
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ==========================================================================
    # TENANT RECORDS TABLE
    # ==========================================================================
    op.create_table(
        "tenant_records",
        sa.Column(
            "seq",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            primary_key=True,
            autoincrement=True,
        ),
        sa.Column("tenant", sa.String(255), nullable=False),
        sa.Column("collection", sa.String(64), nullable=False),
        sa.Column("record_id", sa.String(255), nullable=False),
        sa.Column("data", sa.JSON().with_variant(JSONB(), "postgresql"), nullable=False),

        # Timestamps
        sa.Column("created_at", TIMESTAMP(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("updated_at", TIMESTAMP(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),

        sa.UniqueConstraint("tenant", "collection", "record_id", name="unique_tenant_collection_record"),
    )

    op.create_index(
        "idx_tenant_records_tenant_collection",
        "tenant_records",
        ["tenant", "collection"],
    )


def downgrade() -> None:
    op.drop_index("idx_tenant_records_tenant_collection", table_name="tenant_records")
    op.drop_table("tenant_records")
