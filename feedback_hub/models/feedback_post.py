"""
Feedback post model.

A FeedbackPost is a user-submitted idea or request. Posts collect votes
and comments and move through the status lifecycle
under-review -> planned -> in-progress -> completed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, List

from feedback_hub.models import fields as f

STATUS_UNDER_REVIEW = "under-review"
STATUS_PLANNED = "planned"
STATUS_IN_PROGRESS = "in-progress"
STATUS_COMPLETED = "completed"

POST_STATUSES = (
    STATUS_UNDER_REVIEW,
    STATUS_PLANNED,
    STATUS_IN_PROGRESS,
    STATUS_COMPLETED,
)


@dataclass
class FeedbackPost:
    """
    A feedback post as seen by the application.

    Attributes:
        id: Backend record id.
        title: Short summary of the request.
        description: Full text of the request.
        category: Free-form category label (e.g., "feature", "bug").
        status: One of POST_STATUSES.
        vote_count: Number of votes (>= 0).
        comment_count: Number of comments (>= 0).
        author_name: Display name of the submitter.
        is_anonymous: Whether the submitter chose to hide their identity.
        created_at: When the post was submitted.
        updated_at: When the post was last changed.
        images: Ordered image references.
    """

    TABLE: ClassVar[str] = "feedback_post_c"

    # Application field -> backend column
    FIELDS: ClassVar[Dict[str, str]] = {
        "title": "title_c",
        "description": "description_c",
        "category": "category_c",
        "status": "status_c",
        "vote_count": "vote_count_c",
        "comment_count": "comment_count_c",
        "author_name": "author_name_c",
        "is_anonymous": "is_anonymous_c",
        "created_at": "created_at_c",
        "updated_at": "updated_at_c",
        "images": "images_c",
    }

    UPDATABLE: ClassVar[tuple] = (
        "title",
        "description",
        "category",
        "status",
        "vote_count",
        "comment_count",
        "images",
    )

    id: int
    title: str = ""
    description: str = ""
    category: str = ""
    status: str = STATUS_UNDER_REVIEW
    vote_count: int = 0
    comment_count: int = 0
    author_name: str = "Anonymous"
    is_anonymous: bool = False
    created_at: datetime = field(default_factory=f.utcnow)
    updated_at: datetime = field(default_factory=f.utcnow)
    images: List[Any] = field(default_factory=list)

    @property
    def trending_score(self) -> int:
        """Client-side ranking: votes plus twice the comment count."""
        return self.vote_count + 2 * self.comment_count

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> "FeedbackPost":
        """
        Decode a backend row into a fully-populated FeedbackPost.

        Args:
            row: Backend row with "Id" and `*_c` columns.

        Returns:
            FeedbackPost with defaults substituted for missing values.
        """
        return cls(
            id=row.get("Id"),
            title=f.text(row.get("title_c")),
            description=f.text(row.get("description_c")),
            category=f.text(row.get("category_c")),
            status=f.text(row.get("status_c"), STATUS_UNDER_REVIEW),
            vote_count=f.integer(row.get("vote_count_c")),
            comment_count=f.integer(row.get("comment_count_c")),
            author_name=f.text(row.get("author_name_c"), "Anonymous"),
            is_anonymous=f.boolean(row.get("is_anonymous_c")),
            created_at=f.parse_timestamp(row.get("created_at_c")),
            updated_at=f.parse_timestamp(row.get("updated_at_c")),
            images=f.parse_json_list(row.get("images_c")),
        )

    @classmethod
    def encode(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Map application fields present in `data` to backend columns.

        Raises:
            ValueError: For an unknown field, a status outside
                POST_STATUSES, or a negative vote or comment count.
        """
        record = {}
        for key, value in data.items():
            if key not in cls.FIELDS:
                raise ValueError(f"Unknown FeedbackPost field: {key}")
            if key == "status" and value not in POST_STATUSES:
                raise ValueError(f"Invalid status: {value!r} (expected one of {', '.join(POST_STATUSES)})")
            if key in ("vote_count", "comment_count"):
                value = int(value)
                if value < 0:
                    raise ValueError(f"{key} must be >= 0, got {value}")
            if key == "images":
                value = f.encode_json_list(value)
            elif key in ("created_at", "updated_at"):
                value = f.encode_timestamp(value)
            record[cls.FIELDS[key]] = value
        return record

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "status": self.status,
            "vote_count": self.vote_count,
            "comment_count": self.comment_count,
            "author_name": self.author_name,
            "is_anonymous": self.is_anonymous,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "images": list(self.images),
        }

    def __str__(self) -> str:
        return f"[{self.status}] {self.title} ({self.vote_count} votes)"
