"""
Changelog service.
"""

from typing import Any, Dict, List

from feedback_hub.client.query import DESC, FetchParams, OrderBy
from feedback_hub.models.changelog_entry import ChangelogEntry
from feedback_hub.models import fields as f
from feedback_hub.services.base import RecordService

_CREATE_FIELDS = ("title", "description", "category", "related_post_ids")


class ChangelogService(RecordService):
    """Access to the changelog_entry_c table, newest release first."""

    model = ChangelogEntry
    entity_name = "Changelog entry"
    list_limit = 100

    def get_all(self) -> List[ChangelogEntry]:
        params = FetchParams(
            fields=self._fields(),
            order_by=[OrderBy("release_date_c", DESC)],
            limit=self.list_limit,
        )
        return self._list(params, "changelog entries")

    def create(self, data: Dict[str, Any]) -> ChangelogEntry:
        """Publish an entry; the release date is always the current time."""
        self._check_fields(data, _CREATE_FIELDS)

        record = {
            "Name": data.get("title") or "Untitled",
            "title_c": data.get("title") or "",
            "description_c": data.get("description") or "",
            "category_c": data.get("category") or "",
            "release_date_c": f.utcnow().isoformat(),
            "related_post_ids_c": f.encode_delimited(data.get("related_post_ids")),
        }

        row = self._write("create", self.client.create_record, record, "Failed to create changelog entry")
        return ChangelogEntry.from_record(row)
