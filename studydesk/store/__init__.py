"""Tenant-partitioned persistence."""

from studydesk.store.collections import CollectionStore, IdGenerator, TenantLocks, TenantPartition

__all__ = ["CollectionStore", "IdGenerator", "TenantLocks", "TenantPartition"]
