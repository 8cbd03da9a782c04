"""
Pytest Configuration and Fixtures

This module provides:
- Project root on sys.path so `feedback_hub` and `main` import from a checkout
- Shared record client and service fixtures
- Test category markers
"""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from feedback_hub.client import (
    InMemoryRecordClient,
    RecordClient,
    RecordResponse,
    reset_record_client,
    set_record_client,
)
from feedback_hub.services import (
    ChangelogService,
    CommentService,
    FeedbackService,
    RoadmapService,
)
from tests.test_config import CONFIG, get_rows


# =============================================================================
# CLIENT FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def clean_client_registry():
    """Make sure no test leaks an installed client into the next."""
    reset_record_client()
    yield
    reset_record_client()


@pytest.fixture
def memory_client():
    """An empty in-memory record client."""
    return InMemoryRecordClient()


@pytest.fixture
def seeded_client(memory_client):
    """In-memory client holding the sample posts and changelog entries."""
    memory_client.seed(CONFIG["tables"]["posts"], get_rows("posts"))
    memory_client.seed(CONFIG["tables"]["changelog"], get_rows("changelog"))
    return memory_client


@pytest.fixture
def installed_client(seeded_client):
    """The seeded client installed as the process-wide default."""
    set_record_client(seeded_client)
    return seeded_client


@pytest.fixture
def failing_client():
    """A client whose every call reports an unsuccessful envelope."""
    client = Mock(spec=RecordClient)
    client.name = "failing"
    failure = RecordResponse.failure("backend unavailable")
    client.fetch_records.return_value = failure
    client.get_record_by_id.return_value = failure
    client.create_record.return_value = failure
    client.update_record.return_value = failure
    client.delete_record.return_value = failure
    return client


@pytest.fixture
def raising_client():
    """A client whose every call raises a transport error."""
    client = Mock(spec=RecordClient)
    client.name = "raising"
    error = ConnectionError("connection reset")
    client.fetch_records.side_effect = error
    client.get_record_by_id.side_effect = error
    client.create_record.side_effect = error
    client.update_record.side_effect = error
    client.delete_record.side_effect = error
    return client


# =============================================================================
# SERVICE FIXTURES
# =============================================================================

@pytest.fixture
def feedback_service(seeded_client):
    return FeedbackService(seeded_client)


@pytest.fixture
def comment_service(seeded_client):
    return CommentService(seeded_client)


@pytest.fixture
def changelog_service(seeded_client):
    return ChangelogService(seeded_client)


@pytest.fixture
def roadmap_service(seeded_client):
    return RoadmapService(seeded_client, max_workers=4)


# =============================================================================
# MARKERS FOR TEST CATEGORIES
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "client: Record client tests"
    )
    config.addinivalue_line(
        "markers", "services: Data-access service tests"
    )
    config.addinivalue_line(
        "markers", "config_validation: Configuration validation tests"
    )
    config.addinivalue_line(
        "markers", "error_policy: Read/write failure handling tests"
    )
    config.addinivalue_line(
        "markers", "cli_behavior: CLI interface tests"
    )
