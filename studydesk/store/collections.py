"""
Tenant-partitioned collection store.

Key patterns:
1. Every read and write is scoped by tenant at the SQL level (WHERE tenant = ...)
2. A tenant's operations are serialized by a per-tenant asyncio.Lock;
   different tenants never share a lock. Across processes, single-record
   reads take a row lock (SELECT ... FOR UPDATE) held until commit
3. One partition block = one session = one transaction

Usage:

    async with collection_store.partition(tenant) as part:
        notes = await part.get("notes")
        await part.put("notes", note_id, payload)
"""

import asyncio
import copy
import itertools
import logging
import threading
import weakref
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from studydesk.clock import Clock
from studydesk.db.models import TenantRecord
from studydesk.exceptions import NotFoundError

logger = logging.getLogger(__name__)

Payload = dict[str, Any]


class IdGenerator:
    """
    Mint opaque record IDs from the clock plus a process-wide sequence.

    Two IDs minted at the same clock reading still differ, and because
    neither component ever repeats, IDs are not reused after deletion.
    """

    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._sequence = itertools.count(1)
        self._lock = threading.Lock()

    def new_id(self, prefix: str) -> str:
        with self._lock:
            return f"{prefix}-{self._clock.now_ns()}-{next(self._sequence)}"


def record_query(tenant: str, collection: str, record_id: str) -> Select[tuple[TenantRecord]]:
    """
    Select one record and lock its row until the partition commits.

    TenantLocks only serialize within one process. The row lock keeps a
    read-modify-write (appending a message, rescheduling a card) from losing
    updates when several workers share a PostgreSQL database. SQLite has no
    row locks and ignores FOR UPDATE.
    """
    return (
        select(TenantRecord)
        .where(
            TenantRecord.tenant == tenant,
            TenantRecord.collection == collection,
            TenantRecord.record_id == record_id,
        )
        .with_for_update()
    )


class TenantLocks:
    """
    Registry of one asyncio.Lock per tenant, released once nobody holds a reference.

    The locks live in this process only; across workers, `record_query` row
    locks guard single records.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def lock_for(self, tenant: str) -> asyncio.Lock:
        lock = self._locks.get(tenant)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[tenant] = lock
        return lock

    @asynccontextmanager
    async def hold(self, tenant: str) -> AsyncIterator[None]:
        lock = self.lock_for(tenant)
        async with lock:
            yield


class TenantPartition:
    """A single tenant's view of the store, bound to one open session."""

    def __init__(self, db: AsyncSession, tenant: str) -> None:
        self.db = db
        self.tenant = tenant

    async def _row(self, collection: str, record_id: str) -> TenantRecord | None:
        result = await self.db.execute(record_query(self.tenant, collection, record_id))
        return result.scalar_one_or_none()

    async def get(self, collection: str) -> dict[str, Payload]:
        """Return the whole collection in insertion order; empty if it was never written."""
        result = await self.db.execute(
            select(TenantRecord)
            .where(TenantRecord.tenant == self.tenant, TenantRecord.collection == collection)
            .order_by(TenantRecord.seq)
        )
        return {row.record_id: copy.deepcopy(row.data) for row in result.scalars()}

    async def find(self, collection: str, record_id: str) -> Payload | None:
        row = await self._row(collection, record_id)
        return None if row is None else copy.deepcopy(row.data)

    async def get_entity(self, collection: str, record_id: str) -> Payload:
        payload = await self.find(collection, record_id)
        if payload is None:
            raise NotFoundError(collection, record_id)
        return payload

    async def put(self, collection: str, record_id: str, payload: Payload) -> None:
        """Upsert; last write wins and the record keeps its original position."""
        row = await self._row(collection, record_id)
        if row is None:
            self.db.add(
                TenantRecord(
                    tenant=self.tenant,
                    collection=collection,
                    record_id=record_id,
                    data=copy.deepcopy(payload),
                )
            )
            logger.debug("Inserted %s/%s for tenant %s", collection, record_id, self.tenant)
        else:
            # Reassign rather than mutate so the JSON column is flagged dirty
            row.data = copy.deepcopy(payload)
            logger.debug("Replaced %s/%s for tenant %s", collection, record_id, self.tenant)
        await self.db.flush()

    async def remove(self, collection: str, record_id: str) -> bool:
        """Delete if present. Returns whether anything was removed."""
        result = await self.db.execute(
            delete(TenantRecord).where(
                TenantRecord.tenant == self.tenant,
                TenantRecord.collection == collection,
                TenantRecord.record_id == record_id,
            )
        )
        removed = bool(result.rowcount)
        logger.debug(
            "Remove %s/%s for tenant %s (removed=%s)", collection, record_id, self.tenant, removed
        )
        return removed


class CollectionStore:
    """Maps a tenant to its named collections of JSON records."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], clock: Clock) -> None:
        self._session_factory = session_factory
        self._locks = TenantLocks()
        self._ids = IdGenerator(clock)

    def new_id(self, prefix: str) -> str:
        return self._ids.new_id(prefix)

    @asynccontextmanager
    async def partition(self, tenant: str) -> AsyncIterator[TenantPartition]:
        """
        Open the tenant's partition as one atomic unit.

        Holds the tenant lock for the whole block, commits on normal exit and
        rolls back if the block raises.
        """
        async with self._locks.hold(tenant):
            async with self._session_factory() as db:
                try:
                    yield TenantPartition(db, tenant)
                    await db.commit()
                except Exception:
                    await db.rollback()
                    raise

    async def get(self, tenant: str, collection: str) -> dict[str, Payload]:
        async with self.partition(tenant) as part:
            return await part.get(collection)

    async def get_entity(self, tenant: str, collection: str, record_id: str) -> Payload:
        async with self.partition(tenant) as part:
            return await part.get_entity(collection, record_id)

    async def put(self, tenant: str, collection: str, record_id: str, payload: Payload) -> None:
        async with self.partition(tenant) as part:
            await part.put(collection, record_id, payload)

    async def remove(self, tenant: str, collection: str, record_id: str) -> bool:
        async with self.partition(tenant) as part:
            return await part.remove(collection, record_id)
