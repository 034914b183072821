"""Typed failures raised by the study store.

The API layer maps these to HTTP responses in studydesk.main.
"""


class StoreError(Exception):
    """Base class for expected, caller-visible store failures."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(StoreError):
    """A record the operation requires does not exist in the caller's partition."""

    status_code = 404

    def __init__(self, collection: str, record_id: str) -> None:
        super().__init__(f"{collection} record {record_id!r} not found")
        self.collection = collection
        self.record_id = record_id


class AlreadyExistsError(StoreError):
    """A singleton record was created twice."""

    status_code = 409

    def __init__(self, collection: str, record_id: str) -> None:
        super().__init__(f"{collection} record {record_id!r} already exists")
        self.collection = collection
        self.record_id = record_id


class InvalidValueError(StoreError):
    """An input breaks a record invariant (e.g. ease factor below its floor)."""

    status_code = 422
