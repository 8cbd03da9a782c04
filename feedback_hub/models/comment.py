"""
Comment model.

Comments attach to either a feedback post or a roadmap item. Threading is
single-level: a reply's parent_id holds the string id of a top-level
comment in the same scope.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional

from feedback_hub.models import fields as f


@dataclass
class Comment:
    """
    A comment on a post or roadmap item.

    `replies` is only populated by build_comment_tree(); comments decoded
    straight from the backend always start with an empty list.
    """

    TABLE: ClassVar[str] = "comment_c"

    FIELDS: ClassVar[Dict[str, str]] = {
        "author_name": "author_name_c",
        "content": "content_c",
        "created_at": "created_at_c",
        "is_anonymous": "is_anonymous_c",
        "parent_id": "parent_id_c",
        "post_id": "post_id_c",
        "roadmap_item_id": "roadmap_item_id_c",
        "images": "images_c",
    }

    UPDATABLE: ClassVar[tuple] = ("content", "images")

    id: int
    author_name: str = "Anonymous"
    content: str = ""
    created_at: datetime = field(default_factory=f.utcnow)
    is_anonymous: bool = False
    parent_id: Optional[str] = None
    post_id: str = ""
    roadmap_item_id: Optional[str] = None
    images: List[Any] = field(default_factory=list)
    replies: List["Comment"] = field(default_factory=list)

    @property
    def is_top_level(self) -> bool:
        return not self.parent_id

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> "Comment":
        """Decode a backend row into a fully-populated Comment."""
        return cls(
            id=row.get("Id"),
            author_name=f.text(row.get("author_name_c"), "Anonymous"),
            content=f.text(row.get("content_c")),
            created_at=f.parse_timestamp(row.get("created_at_c")),
            is_anonymous=f.boolean(row.get("is_anonymous_c")),
            parent_id=f.optional_text(row.get("parent_id_c")),
            post_id=f.text(row.get("post_id_c")),
            roadmap_item_id=f.optional_text(row.get("roadmap_item_id_c")),
            images=f.parse_json_list(row.get("images_c")),
        )

    @classmethod
    def encode(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Map application fields present in `data` to backend columns."""
        record = {}
        for key, value in data.items():
            if key not in cls.FIELDS:
                raise ValueError(f"Unknown Comment field: {key}")
            if key == "images":
                value = f.encode_json_list(value)
            elif key == "created_at":
                value = f.encode_timestamp(value)
            elif key in ("parent_id", "post_id", "roadmap_item_id"):
                value = f.text(value)
            record[cls.FIELDS[key]] = value
        return record

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "author_name": self.author_name,
            "content": self.content,
            "created_at": self.created_at.isoformat(),
            "is_anonymous": self.is_anonymous,
            "parent_id": self.parent_id,
            "post_id": self.post_id,
            "roadmap_item_id": self.roadmap_item_id,
            "images": list(self.images),
            "replies": [r.to_dict() for r in self.replies],
        }
