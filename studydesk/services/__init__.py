"""Application services."""

from studydesk.clock import system_clock
from studydesk.db.session import AsyncSessionLocal
from studydesk.services.study_store import MissingPolicy, StudyStore
from studydesk.store import CollectionStore

study_store = StudyStore(CollectionStore(AsyncSessionLocal, system_clock), system_clock)

__all__ = ["MissingPolicy", "StudyStore", "study_store"]
