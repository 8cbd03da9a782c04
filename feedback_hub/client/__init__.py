"""
Record client module.

Handles access to the remote record-storage backend or its in-memory stand-in.
"""

from feedback_hub.client.base import RecordClient, RecordResponse
from feedback_hub.client.http import HttpRecordClient
from feedback_hub.client.memory import InMemoryRecordClient
from feedback_hub.client.provider import (
    create_default_client,
    get_record_client,
    reset_record_client,
    set_record_client,
)

__all__ = [
    "RecordClient",
    "RecordResponse",
    "HttpRecordClient",
    "InMemoryRecordClient",
    "create_default_client",
    "get_record_client",
    "reset_record_client",
    "set_record_client",
]
