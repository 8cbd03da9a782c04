"""
Tests for the query vocabulary, response envelope and client registry.
"""

import pytest

from feedback_hub.client import (
    InMemoryRecordClient,
    RecordClient,
    RecordResponse,
    get_record_client,
    set_record_client,
)
from feedback_hub.client import provider
from feedback_hub.client.http import HttpRecordClient
from feedback_hub.client.query import (
    ASC,
    CONTAINS,
    DESC,
    EQUAL_TO,
    EXACT_MATCH,
    Condition,
    FetchParams,
    OrderBy,
    search_group,
)
from feedback_hub.errors import ClientNotInitializedError


# =============================================================================
# Query vocabulary
# =============================================================================

@pytest.mark.client
class TestFetchParams:
    """Tests for FetchParams.to_dict()."""

    def test_fields_use_nested_name_format(self):
        params = FetchParams(fields=["Id", "title_c"]).to_dict()
        assert params["fields"] == [{"field": {"Name": "Id"}}, {"field": {"Name": "title_c"}}]

    def test_empty_sections_are_omitted(self):
        params = FetchParams(fields=["Id"]).to_dict()
        assert "where" not in params
        assert "whereGroups" not in params
        assert "orderBy" not in params
        assert "pagingInfo" not in params

    def test_paging(self):
        params = FetchParams(limit=100).to_dict()
        assert params["pagingInfo"] == {"limit": 100, "offset": 0}

    def test_equal_to_condition(self):
        params = FetchParams(where=[Condition("post_id_c", EQUAL_TO, ["7"])]).to_dict()
        assert params["where"] == [{"FieldName": "post_id_c", "Operator": "EqualTo", "Values": ["7"]}]

    def test_exact_match_carries_include_flag(self):
        condition = Condition("status_c", EXACT_MATCH, ["planned", "completed"], include=True)
        assert condition.to_dict() == {
            "FieldName": "status_c",
            "Operator": "ExactMatch",
            "Values": ["planned", "completed"],
            "Include": True,
        }

    def test_order_by(self):
        params = FetchParams(order_by=[OrderBy("vote_count_c", DESC), OrderBy("Id", ASC)]).to_dict()
        assert params["orderBy"] == [
            {"fieldName": "vote_count_c", "sorttype": "DESC"},
            {"fieldName": "Id", "sorttype": "ASC"},
        ]

    def test_search_group_ors_contains_conditions(self):
        group = search_group("dark", ["title_c", "description_c"]).to_dict()

        assert group["operator"] == "OR"
        assert len(group["subGroups"]) == 1
        sub = group["subGroups"][0]
        assert sub["operator"] == "OR"
        assert sub["conditions"] == [
            {"fieldName": "title_c", "operator": CONTAINS, "values": ["dark"]},
            {"fieldName": "description_c", "operator": CONTAINS, "values": ["dark"]},
        ]


# =============================================================================
# Response envelope
# =============================================================================

@pytest.mark.client
class TestRecordResponse:

    def test_first_result(self):
        response = RecordResponse(success=True, results=[{"success": True, "data": {"Id": 1}}])
        assert response.first_result == {"success": True, "data": {"Id": 1}}

    def test_first_result_none_when_empty(self):
        assert RecordResponse(success=True).first_result is None

    def test_failure_constructor(self):
        response = RecordResponse.failure("boom")
        assert response.success is False
        assert response.message == "boom"
        assert response.results == []


@pytest.mark.client
class TestRecordClientInterface:

    def test_record_client_is_abstract(self):
        with pytest.raises(TypeError):
            RecordClient()

    def test_in_memory_client_is_record_client(self):
        client = InMemoryRecordClient()
        assert isinstance(client, RecordClient)
        assert client.name == "memory"
        assert "memory" in repr(client)


# =============================================================================
# Client registry
# =============================================================================

@pytest.mark.client
class TestProvider:

    def test_get_without_client_raises(self):
        with pytest.raises(ClientNotInitializedError):
            get_record_client()

    def test_set_then_get(self, memory_client):
        set_record_client(memory_client)
        assert get_record_client() is memory_client

    def test_default_client_is_memory_without_api_key(self, monkeypatch):
        monkeypatch.setattr(provider, "RECORD_API_KEY", "")
        client = provider.create_default_client()
        assert isinstance(client, InMemoryRecordClient)
        assert get_record_client() is client

    def test_default_client_is_http_with_api_key(self, monkeypatch):
        monkeypatch.setattr(provider, "RECORD_API_KEY", "secret")
        client = provider.create_default_client()
        assert isinstance(client, HttpRecordClient)
