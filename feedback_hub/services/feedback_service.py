"""
Feedback post service.

Lists, filters and sorts feedback posts and handles their CRUD. Category,
status and free-text filters run on the backend; the "trending" sort runs
client-side because the backend cannot express it.
"""

from typing import Any, Dict, Iterable, List, Optional

from feedback_hub.client.query import (
    ASC,
    DESC,
    EXACT_MATCH,
    Condition,
    FetchParams,
    OrderBy,
    search_group,
)
from feedback_hub.models.feedback_post import FeedbackPost, STATUS_UNDER_REVIEW
from feedback_hub.models import fields as f
from feedback_hub.services.base import RecordService


SORT_VOTES = "votes"
SORT_NEWEST = "newest"
SORT_OLDEST = "oldest"
SORT_TRENDING = "trending"

SORT_MODES = (SORT_VOTES, SORT_NEWEST, SORT_OLDEST, SORT_TRENDING)

# Backend ordering for each server-side sort mode
_ORDER_BY = {
    SORT_VOTES: [OrderBy("vote_count_c", DESC)],
    SORT_NEWEST: [OrderBy("created_at_c", DESC)],
    SORT_OLDEST: [OrderBy("created_at_c", ASC)],
}

# Fields accepted by create(); status and counts always start at defaults
_CREATE_FIELDS = ("title", "description", "category", "author_name", "is_anonymous", "images")


def sort_trending(posts: Iterable[FeedbackPost]) -> List[FeedbackPost]:
    """Sort by trending score, highest first; ties keep their order."""
    return sorted(posts, key=lambda p: p.trending_score, reverse=True)


class FeedbackService(RecordService):
    """Access to the feedback_post_c table."""

    model = FeedbackPost
    entity_name = "Post"
    list_limit = 100

    def get_all(
        self,
        categories: Optional[List[str]] = None,
        statuses: Optional[List[str]] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
    ) -> List[FeedbackPost]:
        """
        List posts matching the given filters.

        Args:
            categories: Keep only posts in one of these categories.
            statuses: Keep only posts with one of these statuses.
            search: Substring to look for in title or description.
            sort_by: One of SORT_MODES. Anything else keeps backend order.

        Returns:
            Matching posts, or [] if the backend call fails.
        """
        params = FetchParams(fields=self._fields(), limit=self.list_limit)

        if categories:
            params.where.append(Condition("category_c", EXACT_MATCH, list(categories), include=True))

        if statuses:
            params.where.append(Condition("status_c", EXACT_MATCH, list(statuses), include=True))

        if search:
            params.where_groups.append(search_group(search, ["title_c", "description_c"]))

        params.order_by = list(_ORDER_BY.get(sort_by, []))

        posts = self._list(params, "feedback posts")

        if sort_by == SORT_TRENDING:
            posts = sort_trending(posts)

        return posts

    def create(self, data: Dict[str, Any]) -> FeedbackPost:
        """
        Submit a new post.

        New posts always start under review with zero votes and comments.

        Args:
            data: Any of title, description, category, author_name,
                is_anonymous, images.
        """
        self._check_fields(data, _CREATE_FIELDS)
        now = f.utcnow().isoformat()

        record = {
            "Name": data.get("title") or "Untitled",
            "title_c": data.get("title") or "",
            "description_c": data.get("description") or "",
            "category_c": data.get("category") or "",
            "status_c": STATUS_UNDER_REVIEW,
            "vote_count_c": 0,
            "comment_count_c": 0,
            "author_name_c": data.get("author_name") or "Anonymous",
            "is_anonymous_c": bool(data.get("is_anonymous", False)),
            "created_at_c": now,
            "updated_at_c": now,
            "images_c": f.encode_json_list(data.get("images")),
        }

        row = self._write("create", self.client.create_record, record, "Failed to create post")
        return FeedbackPost.from_record(row)

    def _update_extras(self) -> Dict[str, Any]:
        return {"updated_at_c": f.utcnow().isoformat()}
