"""
error types

the store/service layer raises these as plain python exceptions and never
deals with http status codes. api/handlers.py turns them into responses.

taxonomy:
- RecordNotFoundError: an operation referenced an id that is not in the store
- BatchLoadError: a concurrent page load failed (all-or-nothing, see loader.py)
- RegistrationError: a patient registration payload failed field validation
- InvalidRecordError: an update merged into a record that no longer validates

unresolved foreign keys are NOT errors, enrichment degrades them to
placeholder labels instead.
"""

from __future__ import annotations


class RecordNotFoundError(LookupError):
    def __init__(self, entity: str, record_id: object) -> None:
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} with ID {record_id} not found")


class BatchLoadError(RuntimeError):
    """
    Raised when any store in a concurrent batch fails.

    The view shows one generic failure and the client retries the whole load,
    so the underlying exception is only kept around for logging.
    """

    def __init__(self, view: str, cause: BaseException) -> None:
        self.view = view
        self.cause = cause
        super().__init__(f"Failed to load {view} data")


class RegistrationError(ValueError):
    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__("Please fix the errors in the form")


class InvalidRecordError(ValueError):
    """An update would leave the stored record invalid, e.g. a required field set to null."""

    def __init__(self, entity: str, record_id: object, errors: list[dict]) -> None:
        self.entity = entity
        self.record_id = record_id
        self.errors = errors
        super().__init__(f"Invalid update for {entity} with ID {record_id}")
