"""
Changelog entry model.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, List

from feedback_hub.models import fields as f


@dataclass
class ChangelogEntry:
    """
    A released change, optionally linked to the posts it addresses.

    `related_post_ids` is stored as a comma-delimited string.
    """

    TABLE: ClassVar[str] = "changelog_entry_c"

    FIELDS: ClassVar[Dict[str, str]] = {
        "title": "title_c",
        "description": "description_c",
        "category": "category_c",
        "release_date": "release_date_c",
        "related_post_ids": "related_post_ids_c",
    }

    UPDATABLE: ClassVar[tuple] = (
        "title",
        "description",
        "category",
        "release_date",
        "related_post_ids",
    )

    id: int
    title: str = ""
    description: str = ""
    category: str = ""
    release_date: datetime = field(default_factory=f.utcnow)
    related_post_ids: List[str] = field(default_factory=list)

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> "ChangelogEntry":
        return cls(
            id=row.get("Id"),
            title=f.text(row.get("title_c")),
            description=f.text(row.get("description_c")),
            category=f.text(row.get("category_c")),
            release_date=f.parse_timestamp(row.get("release_date_c")),
            related_post_ids=f.parse_delimited(row.get("related_post_ids_c")),
        )

    @classmethod
    def encode(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        record = {}
        for key, value in data.items():
            if key not in cls.FIELDS:
                raise ValueError(f"Unknown ChangelogEntry field: {key}")
            if key == "related_post_ids":
                value = f.encode_delimited(value)
            elif key == "release_date":
                value = f.encode_timestamp(value)
            record[cls.FIELDS[key]] = value
        return record

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "release_date": self.release_date.isoformat(),
            "related_post_ids": list(self.related_post_ids),
        }
