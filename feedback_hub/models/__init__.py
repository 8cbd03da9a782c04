"""
Data models module.

Defines the application-facing records and their backend decoders.
"""

from feedback_hub.models.feedback_post import FeedbackPost, POST_STATUSES
from feedback_hub.models.comment import Comment
from feedback_hub.models.roadmap_item import RoadmapItem, ROADMAP_STAGES
from feedback_hub.models.changelog_entry import ChangelogEntry

__all__ = [
    "FeedbackPost",
    "POST_STATUSES",
    "Comment",
    "RoadmapItem",
    "ROADMAP_STAGES",
    "ChangelogEntry",
]
