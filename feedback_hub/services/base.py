"""
Base service for record-backed entities.

A RecordService wraps one backend table and converts rows into one model
class. Subclasses declare the model and add entity-specific queries; the
base class supplies get_by_id, update and delete plus the shared error
policy:

- list reads log the failure and return an empty list
- single reads raise NotFoundError
- writes raise OperationFailedError with the backend's message
- a missing client raises ClientNotInitializedError everywhere
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from feedback_hub.client.base import RecordClient, RecordResponse
from feedback_hub.client.provider import get_record_client
from feedback_hub.client.query import FetchParams
from feedback_hub.errors import (
    ClientNotInitializedError,
    FeedbackHubError,
    NotFoundError,
    OperationFailedError,
)

logger = logging.getLogger(__name__)


class RecordService:
    """
    CRUD access to one table.

    Args:
        client: Backend to use. Defaults to the process-wide client from
            feedback_hub.client.provider, resolved on every call.
    """

    # Model class with TABLE, FIELDS, UPDATABLE, from_record() and encode()
    model: Any = None

    # Entity name used in error messages (e.g., "Post")
    entity_name: str = "Record"

    # Page size for list reads
    list_limit: int = 100

    def __init__(self, client: Optional[RecordClient] = None):
        self._client = client

    @property
    def client(self) -> RecordClient:
        if self._client is not None:
            return self._client
        return get_record_client()

    @property
    def table(self) -> str:
        return self.model.TABLE

    def _fields(self) -> List[str]:
        """Columns requested on every read."""
        return ["Id"] + list(self.model.FIELDS.values())

    def _coerce_id(self, record_id: Any) -> int:
        try:
            return int(record_id)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid {self.entity_name.lower()} id: {record_id!r}")

    # =========================================================================
    # Reads
    # =========================================================================

    def _list(self, params: FetchParams, what: str) -> list:
        """
        Fetch and decode rows, degrading to [] on any backend failure.

        Args:
            params: Query to run against this service's table.
            what: Description used in log messages.
        """
        try:
            response = self.client.fetch_records(self.table, params.to_dict())
            if not response.success:
                logger.error("Error fetching %s: %s", what, response.message)
                return []
            return [self.model.from_record(row) for row in response.data or []]

        except ClientNotInitializedError:
            raise
        except Exception as e:
            logger.error("Error fetching %s: %s", what, e)
            return []

    def get_by_id(self, record_id: Any):
        """
        Load a single record.

        Raises:
            NotFoundError: If the backend fails or has no such row.
            ValueError: If the id is not an integer.
        """
        record_id = self._coerce_id(record_id)
        params = FetchParams(fields=self._fields()).to_dict()

        try:
            response = self.client.get_record_by_id(self.table, record_id, params)
        except ClientNotInitializedError:
            raise
        except Exception as e:
            logger.error("Error fetching %s %s: %s", self.entity_name.lower(), record_id, e)
            raise NotFoundError(self.entity_name, record_id) from e

        if not response.success or not response.data:
            logger.error(
                "Error fetching %s %s: %s",
                self.entity_name.lower(), record_id, response.message or "no such record",
            )
            raise NotFoundError(self.entity_name, record_id)

        return self.model.from_record(response.data)

    # =========================================================================
    # Writes
    # =========================================================================

    def _call(self, action: str, call: Callable[..., RecordResponse], params: Dict[str, Any]) -> RecordResponse:
        """Invoke a write, turning transport exceptions into OperationFailedError."""
        try:
            response = call(self.table, params)
        except FeedbackHubError:
            raise
        except Exception as e:
            logger.error("Error trying to %s %s: %s", action, self.entity_name.lower(), e)
            raise OperationFailedError(str(e)) from e

        if not response.success:
            logger.error("Error trying to %s %s: %s", action, self.entity_name.lower(), response.message)
            raise OperationFailedError(response.message or f"Failed to {action} {self.entity_name.lower()}")

        return response

    def _write(
        self,
        action: str,
        call: Callable[..., RecordResponse],
        record: Dict[str, Any],
        failure_message: str = None,
    ) -> Dict[str, Any]:
        """
        Send a single-record create/update and return the stored row.

        Raises:
            OperationFailedError: If the envelope or the per-record result
                is unsuccessful.
        """
        response = self._call(action, call, {"records": [record]})

        result = response.first_result
        if not result or not result.get("success"):
            message = (
                (result or {}).get("message")
                or failure_message
                or f"Failed to {action} {self.entity_name.lower()}"
            )
            logger.error("Error trying to %s %s: %s", action, self.entity_name.lower(), message)
            raise OperationFailedError(message)

        return result.get("data") or {}

    def _check_fields(self, data: Dict[str, Any], allowed) -> None:
        unknown = sorted(set(data) - set(allowed))
        if unknown:
            raise ValueError(f"Cannot set {self.entity_name.lower()} field(s): {', '.join(unknown)}")

    def _update_extras(self) -> Dict[str, Any]:
        """Columns written on every update (override in subclasses)."""
        return {}

    def _prepare_update(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Application fields to encode once `data` has been checked."""
        return data

    def update(self, record_id: Any, data: Dict[str, Any]):
        """
        Apply a partial update.

        Only the keys present in `data` are sent; everything else is left
        untouched on the backend.

        Args:
            record_id: Id of the record to change.
            data: Application field names to new values. Must be a subset
                of the model's UPDATABLE fields.

        Returns:
            The updated record as stored by the backend.
        """
        record_id = self._coerce_id(record_id)
        self._check_fields(data, self.model.UPDATABLE)

        record = {"Id": record_id}
        record.update(self._update_extras())
        record.update(self.model.encode(self._prepare_update(data)))

        row = self._write("update", self.client.update_record, record)
        return self.model.from_record(row)

    def delete(self, record_id: Any) -> Dict[str, bool]:
        """Delete a record. Returns {"success": True}."""
        record_id = self._coerce_id(record_id)
        self._call("delete", self.client.delete_record, {"RecordIds": [record_id]})
        return {"success": True}

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} table={self.table!r}>"
