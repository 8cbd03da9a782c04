"""
Exceptions raised by the Feedback Hub data-access layer.
"""

from typing import Any


class FeedbackHubError(Exception):
    """Base class for all data-access errors."""


class ClientNotInitializedError(FeedbackHubError):
    """No record client has been configured."""

    def __init__(self, message: str = "Record client not initialized"):
        super().__init__(message)


class NotFoundError(FeedbackHubError):
    """
    A single record could not be loaded.

    Attributes:
        entity: Human-readable entity name (e.g., "Post").
        record_id: The id that was requested.
    """

    def __init__(self, entity: str, record_id: Any, message: str = None):
        self.entity = entity
        self.record_id = record_id
        super().__init__(message or f"{entity} with id {record_id} not found")


class OperationFailedError(FeedbackHubError):
    """A create, update, or delete was rejected by the backend."""
