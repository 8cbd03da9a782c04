"""
HTTP record client for Feedback Hub.

Implements the RecordClient interface against the hosted record-storage
REST API. Every call sends the query/mutation dict as a JSON body and
expects the backend's standard envelope back:

    {"success": true, "data": ..., "results": [...], "message": ""}

=============================================================================
ENDPOINTS
=============================================================================

| Operation          | Method | Path                                     |
|--------------------|--------|------------------------------------------|
| fetch_records      | POST   | /projects/{project}/tables/{table}/records/query      |
| get_record_by_id   | POST   | /projects/{project}/tables/{table}/records/{id}/query |
| create_record      | POST   | /projects/{project}/tables/{table}/records            |
| update_record      | PATCH  | /projects/{project}/tables/{table}/records            |
| delete_record      | DELETE | /projects/{project}/tables/{table}/records            |

=============================================================================
"""

import logging
from typing import Any, Dict

import requests

from feedback_hub.config import (
    RECORD_API_KEY,
    RECORD_API_URL,
    RECORD_PROJECT_ID,
    REQUEST_TIMEOUT,
)
from feedback_hub.client.base import RecordClient, RecordResponse

logger = logging.getLogger(__name__)


class HttpRecordClient(RecordClient):
    """
    REST-backed record client.

    Transport failures (connection errors, timeouts, HTTP error statuses,
    non-JSON bodies) are reported as unsuccessful RecordResponse objects
    so callers only ever inspect the envelope.

    Configuration is pulled from environment variables via feedback_hub.config:
    - RECORD_API_URL: Base URL of the API
    - RECORD_API_KEY: Bearer token
    - RECORD_PROJECT_ID: Project that owns the tables
    """

    def __init__(
        self,
        api_url: str = None,
        api_key: str = None,
        project_id: str = None,
        timeout: int = None,
    ):
        # Use provided values, or fall back to config if None (not empty string)
        self.api_url = (api_url if api_url is not None else RECORD_API_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else RECORD_API_KEY
        self.project_id = project_id if project_id is not None else RECORD_PROJECT_ID
        self.timeout = timeout if timeout is not None else REQUEST_TIMEOUT

    @property
    def name(self) -> str:
        return "http"

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _table_url(self, table: str) -> str:
        return f"{self.api_url}/projects/{self.project_id}/tables/{table}/records"

    def _validate_config(self) -> None:
        """Validate that required configuration is present."""
        if not self.api_key:
            raise ValueError("RECORD_API_KEY is not configured")
        if not self.project_id:
            raise ValueError("RECORD_PROJECT_ID is not configured")

    @staticmethod
    def parse_envelope(body: Dict[str, Any]) -> RecordResponse:
        """
        Convert a decoded JSON body into a RecordResponse.

        Args:
            body: Decoded response body.

        Returns:
            RecordResponse; a body without "success" counts as a failure.
        """
        if not isinstance(body, dict):
            return RecordResponse.failure("Malformed response body")

        return RecordResponse(
            success=bool(body.get("success", False)),
            data=body.get("data"),
            results=body.get("results") or [],
            message=body.get("message") or "",
        )

    def _send(self, method: str, url: str, payload: Dict[str, Any]) -> RecordResponse:
        self._validate_config()

        try:
            response = requests.request(
                method,
                url,
                headers=self._headers,
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return self.parse_envelope(response.json())

        except requests.exceptions.JSONDecodeError as e:
            # Subclass of RequestException, so it must be caught first
            logger.debug("%s %s returned an undecodable body: %s", method, url, e)
            return RecordResponse.failure(f"Invalid JSON response: {e}")
        except requests.RequestException as e:
            logger.debug("%s %s failed: %s", method, url, e)
            return RecordResponse.failure(str(e))

    # =========================================================================
    # RecordClient Interface Implementation
    # =========================================================================

    def fetch_records(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        return self._send("POST", f"{self._table_url(table)}/query", params)

    def get_record_by_id(self, table: str, record_id: int, params: Dict[str, Any]) -> RecordResponse:
        return self._send("POST", f"{self._table_url(table)}/{record_id}/query", params)

    def create_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        return self._send("POST", self._table_url(table), params)

    def update_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        return self._send("PATCH", self._table_url(table), params)

    def delete_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        return self._send("DELETE", self._table_url(table), params)
