"""
Roadmap item model.

Each roadmap item tracks one feedback post through the delivery stages.
`position` orders items within a stage.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, ClassVar, Dict, Optional

from feedback_hub.models import fields as f
from feedback_hub.models.feedback_post import FeedbackPost

STAGE_PLANNED = "planned"
STAGE_IN_PROGRESS = "in-progress"
STAGE_COMPLETED = "completed"

ROADMAP_STAGES = (STAGE_PLANNED, STAGE_IN_PROGRESS, STAGE_COMPLETED)


@dataclass
class RoadmapItem:
    """
    A roadmap entry for a single feedback post.

    Attributes:
        id: Backend record id.
        feedback_post_id: String id of the associated FeedbackPost.
        stage: One of ROADMAP_STAGES.
        position: Render order within the stage.
        estimated_date: Expected delivery date, derived from the stage.
        post: The joined FeedbackPost, when loaded through a join.
    """

    TABLE: ClassVar[str] = "roadmap_item_c"

    FIELDS: ClassVar[Dict[str, str]] = {
        "feedback_post_id": "feedback_post_id_c",
        "stage": "stage_c",
        "position": "position_c",
        "estimated_date": "estimated_date_c",
    }

    # estimated_date is derived from stage, never set directly
    UPDATABLE: ClassVar[tuple] = ("stage", "position")

    id: int
    feedback_post_id: str = ""
    stage: str = STAGE_PLANNED
    position: int = 0
    estimated_date: Optional[date] = None
    post: Optional[FeedbackPost] = None

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> "RoadmapItem":
        """Decode a backend row; the joined post is left empty."""
        return cls(
            id=row.get("Id"),
            feedback_post_id=f.text(row.get("feedback_post_id_c")),
            stage=f.text(row.get("stage_c"), STAGE_PLANNED),
            position=f.integer(row.get("position_c")),
            estimated_date=f.parse_date(row.get("estimated_date_c")),
        )

    @classmethod
    def encode(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        record = {}
        for key, value in data.items():
            if key not in cls.FIELDS:
                raise ValueError(f"Unknown RoadmapItem field: {key}")
            if key == "estimated_date":
                value = f.encode_timestamp(value) if value else None
            elif key == "feedback_post_id":
                value = str(value)
            record[cls.FIELDS[key]] = value
        return record

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "feedback_post_id": self.feedback_post_id,
            "stage": self.stage,
            "position": self.position,
            "estimated_date": self.estimated_date.isoformat() if self.estimated_date else None,
            "post": self.post.to_dict() if self.post else None,
        }
