"""
SQLAlchemy 2.0 Models for StudyDesk.

Uses modern declarative syntax with Mapped[] type annotations.

Every domain record lives in one table, partitioned by tenant (the caller's
identity subject) and collection name. Payloads are JSON documents validated
by the pydantic models in studydesk.schemas; nested ordered sequences
(chat messages, deck cards) stay inside their parent's payload.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, BigInteger, Index, Integer, String, UniqueConstraint, func, text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from studydesk.db.base import Base


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
PayloadType = JSON().with_variant(JSONB(), "postgresql")

# BIGINT autoincrement is not supported on SQLite, INTEGER is
SequenceType = BigInteger().with_variant(Integer(), "sqlite")


class TenantRecord(Base):
    """
    One entity of one collection inside one tenant partition.

    `seq` is the insertion order; it is kept across upserts so collections
    read back in the order their records were first written.
    """

    __tablename__ = "tenant_records"
    __table_args__ = (
        UniqueConstraint("tenant", "collection", "record_id", name="unique_tenant_collection_record"),
        Index("idx_tenant_records_tenant_collection", "tenant", "collection"),
    )

    seq: Mapped[int] = mapped_column(SequenceType, primary_key=True, autoincrement=True)
    tenant: Mapped[str] = mapped_column(String(255), nullable=False)
    collection: Mapped[str] = mapped_column(String(64), nullable=False)
    record_id: Mapped[str] = mapped_column(String(255), nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(PayloadType, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=text("CURRENT_TIMESTAMP"), onupdate=func.now(), nullable=False
    )
