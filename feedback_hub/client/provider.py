"""
Process-wide record client registry.

Services obtain their backend from here unless one is passed explicitly.
The application initializes it once at startup via set_record_client()
or create_default_client().
"""

import logging
from typing import Optional

from feedback_hub.client.base import RecordClient
from feedback_hub.client.http import HttpRecordClient
from feedback_hub.client.memory import InMemoryRecordClient
from feedback_hub.config import RECORD_API_KEY
from feedback_hub.errors import ClientNotInitializedError

logger = logging.getLogger(__name__)

_client: Optional[RecordClient] = None


def set_record_client(client: RecordClient) -> RecordClient:
    """Install the client every service will use by default."""
    global _client
    _client = client
    logger.debug("Record client set to %r", client)
    return client


def get_record_client() -> RecordClient:
    """
    Return the installed client.

    Raises:
        ClientNotInitializedError: If no client has been installed.
    """
    if _client is None:
        raise ClientNotInitializedError()
    return _client


def reset_record_client() -> None:
    """Remove the installed client (for testing)."""
    global _client
    _client = None


def create_default_client() -> RecordClient:
    """
    Install the configured backend.

    Uses the HTTP client when RECORD_API_KEY is set, otherwise an empty
    in-memory client for local development.
    """
    if RECORD_API_KEY:
        client = HttpRecordClient()
    else:
        logger.info("RECORD_API_KEY not set, using in-memory record client")
        client = InMemoryRecordClient()
    return set_record_client(client)
