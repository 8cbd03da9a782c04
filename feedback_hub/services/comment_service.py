"""
Comment service.

Loads comment threads for a post or a roadmap item and assembles them into
single-level reply trees.
"""

from dataclasses import replace
from typing import Any, Dict, List

from feedback_hub.client.query import ASC, EQUAL_TO, Condition, FetchParams, OrderBy
from feedback_hub.models.comment import Comment
from feedback_hub.models import fields as f
from feedback_hub.services.base import RecordService


_CREATE_FIELDS = ("author_name", "content", "is_anonymous", "parent_id", "post_id", "roadmap_item_id", "images")


def build_comment_tree(comments: List[Comment]) -> List[Comment]:
    """
    Group a flat comment list into top-level comments with replies.

    Each top-level comment (no parent_id) receives the comments whose
    parent_id equals its id as a string, in input order. Replies to
    replies are not attached anywhere. Input comments are not modified.

    Args:
        comments: Comments from one post or roadmap item, oldest first.

    Returns:
        Top-level comments, each with `replies` populated.
    """
    replies_by_parent: Dict[str, List[Comment]] = {}
    for comment in comments:
        if not comment.is_top_level:
            replies_by_parent.setdefault(comment.parent_id, []).append(comment)

    return [
        replace(comment, replies=list(replies_by_parent.get(str(comment.id), [])))
        for comment in comments
        if comment.is_top_level
    ]


def _has_value(value: Any) -> bool:
    return value is not None and value != ""


class CommentService(RecordService):
    """Access to the comment_c table."""

    model = Comment
    entity_name = "Comment"
    list_limit = 500

    # Page size for a single thread
    thread_limit = 200

    def _thread(self, column: str, scope_id: Any, what: str) -> List[Comment]:
        params = FetchParams(
            fields=self._fields(),
            where=[Condition(column, EQUAL_TO, [str(scope_id)])],
            order_by=[OrderBy("created_at_c", ASC)],
            limit=self.thread_limit,
        )
        return build_comment_tree(self._list(params, what))

    def get_by_post_id(self, post_id: Any) -> List[Comment]:
        """Threaded comments for a feedback post ([] on failure)."""
        return self._thread("post_id_c", post_id, f"comments for post {post_id}")

    def get_by_roadmap_item_id(self, roadmap_item_id: Any) -> List[Comment]:
        """Threaded comments for a roadmap item ([] on failure)."""
        return self._thread("roadmap_item_id_c", roadmap_item_id, f"comments for roadmap item {roadmap_item_id}")

    def get_all(self) -> List[Comment]:
        """Every comment, flat and unthreaded."""
        params = FetchParams(fields=self._fields(), limit=self.list_limit)
        return self._list(params, "all comments")

    def create(self, data: Dict[str, Any]) -> Comment:
        """
        Add a comment to a post or a roadmap item.

        Args:
            data: author_name, content, is_anonymous, parent_id, images and
                exactly one of post_id / roadmap_item_id.

        Raises:
            ValueError: If the comment is attached to neither or both scopes.
        """
        self._check_fields(data, _CREATE_FIELDS)

        has_post = _has_value(data.get("post_id"))
        has_roadmap_item = _has_value(data.get("roadmap_item_id"))
        if has_post == has_roadmap_item:
            raise ValueError("A comment must belong to exactly one of post_id or roadmap_item_id")

        author = data.get("author_name") or "Anonymous"
        record = {
            "Name": f"Comment by {author}",
            "author_name_c": author,
            "content_c": data.get("content") or "",
            "created_at_c": f.utcnow().isoformat(),
            "is_anonymous_c": bool(data.get("is_anonymous", False)),
            "parent_id_c": f.text(data.get("parent_id")),
            "post_id_c": f.text(data.get("post_id")),
            "roadmap_item_id_c": f.text(data.get("roadmap_item_id")),
            "images_c": f.encode_json_list(data.get("images")),
        }

        row = self._write("create", self.client.create_record, record, "Failed to create comment")
        return Comment.from_record(row)
