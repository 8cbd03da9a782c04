"""
Services module.

Data-access services for feedback posts, comments, roadmap items and
changelog entries.
"""

from feedback_hub.services.base import RecordService
from feedback_hub.services.feedback_service import FeedbackService, SORT_MODES, sort_trending
from feedback_hub.services.comment_service import CommentService, build_comment_tree
from feedback_hub.services.changelog_service import ChangelogService
from feedback_hub.services.roadmap_service import (
    RoadmapService,
    get_estimated_date,
    group_by_stage,
)

__all__ = [
    "RecordService",
    "FeedbackService",
    "SORT_MODES",
    "sort_trending",
    "CommentService",
    "build_comment_tree",
    "ChangelogService",
    "RoadmapService",
    "get_estimated_date",
    "group_by_stage",
]
