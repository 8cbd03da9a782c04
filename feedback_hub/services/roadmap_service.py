"""
Roadmap service.

Keeps one roadmap item per feedback post, derives estimated delivery dates
from the stage, and builds the stage board by joining each item with its
post.

Join failures are handled differently for the board and for a single
item: get_all() drops items whose post cannot be loaded, while get_by_id()
raises NotFoundError naming the missing post.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from feedback_hub.client.base import RecordClient
from feedback_hub.client.query import EQUAL_TO, Condition, FetchParams
from feedback_hub.config import ROADMAP_JOIN_WORKERS
from feedback_hub.errors import ClientNotInitializedError, NotFoundError
from feedback_hub.models import fields as f
from feedback_hub.models.roadmap_item import (
    ROADMAP_STAGES,
    STAGE_COMPLETED,
    STAGE_IN_PROGRESS,
    STAGE_PLANNED,
    RoadmapItem,
)
from feedback_hub.services.base import RecordService
from feedback_hub.services.feedback_service import FeedbackService

logger = logging.getLogger(__name__)

# Days from today until delivery, per stage
STAGE_LEAD_DAYS = {
    STAGE_PLANNED: 90,
    STAGE_IN_PROGRESS: 30,
    STAGE_COMPLETED: 0,
}


def get_estimated_date(stage: str, today: Optional[date] = None) -> Optional[date]:
    """
    Estimated delivery date for an item entering `stage`.

    Args:
        stage: Roadmap stage.
        today: Reference date (defaults to the current UTC date).

    Returns:
        today + 90 days for planned, + 30 days for in-progress, today for
        completed, None for any other stage.
    """
    if stage not in STAGE_LEAD_DAYS:
        return None
    if today is None:
        today = f.utcnow().date()
    return today + timedelta(days=STAGE_LEAD_DAYS[stage])


def empty_board() -> Dict[str, List[RoadmapItem]]:
    return {stage: [] for stage in ROADMAP_STAGES}


def group_by_stage(items: Iterable[RoadmapItem]) -> Dict[str, List[RoadmapItem]]:
    """
    Bucket items by stage and order each bucket by position.

    Planned and in-progress run ascending; completed runs descending so the
    most recently finished work comes first. Items in unknown stages are
    left out.
    """
    board = empty_board()
    for item in items:
        if item.stage in board:
            board[item.stage].append(item)

    for stage, bucket in board.items():
        bucket.sort(key=lambda i: i.position, reverse=(stage == STAGE_COMPLETED))

    return board


class RoadmapService(RecordService):
    """
    Access to the roadmap_item_c table.

    Args:
        client: Backend to use (defaults to the process-wide client).
        feedback_service: Service used to join posts. Defaults to a
            FeedbackService on the same client.
        max_workers: Cap on concurrent post lookups in get_all().
    """

    model = RoadmapItem
    entity_name = "Roadmap item"
    list_limit = 100

    def __init__(
        self,
        client: Optional[RecordClient] = None,
        feedback_service: Optional[FeedbackService] = None,
        max_workers: Optional[int] = None,
    ):
        super().__init__(client)
        self.feedback_service = feedback_service or FeedbackService(client)
        self.max_workers = max_workers or ROADMAP_JOIN_WORKERS

    # =========================================================================
    # Reads
    # =========================================================================

    def _with_post(self, item: RoadmapItem) -> RoadmapItem:
        post = self.feedback_service.get_by_id(item.feedback_post_id)
        return replace(item, post=post)

    def _join_posts(self, items: List[RoadmapItem]) -> Tuple[List[RoadmapItem], List[str]]:
        """
        Attach posts to items using a bounded worker pool.

        Returns:
            Tuple of (items whose post loaded, error messages for the rest).
            Joined items keep their input order.
        """
        joined, errors = [], []
        if not items:
            return joined, errors

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(items))) as pool:
            futures = [pool.submit(self._with_post, item) for item in items]
            for item, future in zip(items, futures):
                try:
                    joined.append(future.result())
                except Exception as e:
                    errors.append(f"item {item.id} (post {item.feedback_post_id!r}): {e}")

        return joined, errors

    def get_all(self) -> Dict[str, List[RoadmapItem]]:
        """
        Build the roadmap board.

        Returns:
            {"planned": [...], "in-progress": [...], "completed": [...]}
            with posts joined. Items whose post cannot be loaded are
            dropped; on total failure every bucket is empty.
        """
        try:
            params = FetchParams(fields=self._fields(), limit=self.list_limit)
            items = self._list(params, "roadmap items")

            joined, errors = self._join_posts(items)
            if errors:
                logger.warning(
                    "Dropped %d roadmap item(s) with unavailable posts: %s",
                    len(errors), "; ".join(errors),
                )

            return group_by_stage(joined)

        except ClientNotInitializedError:
            raise
        except Exception as e:
            logger.error("Error fetching roadmap items: %s", e)
            return empty_board()

    def get_by_id(self, record_id: Any) -> RoadmapItem:
        """
        Load one roadmap item with its post.

        Raises:
            NotFoundError: If the item is missing, or if its post cannot be
                loaded (the error names the post id).
        """
        item = super().get_by_id(record_id)

        try:
            return self._with_post(item)
        except (NotFoundError, ValueError) as e:
            message = f"Associated feedback post (ID: {item.feedback_post_id}) not found for roadmap item {item.id}"
            logger.error(message)
            raise NotFoundError("Post", item.feedback_post_id, message) from e

    # =========================================================================
    # Writes
    # =========================================================================

    def _find_by_post(self, feedback_post_id: str) -> Optional[Dict[str, Any]]:
        """
        Return the existing row for a post, if any.

        Raises:
            OperationFailedError: If the lookup itself fails, so a failed
                read never turns into a duplicate insert.
        """
        params = FetchParams(
            fields=["Id", "feedback_post_id_c"],
            where=[Condition("feedback_post_id_c", EQUAL_TO, [feedback_post_id])],
        )
        response = self._call("look up", self.client.fetch_records, params.to_dict())

        rows = response.data or []
        if len(rows) > 1:
            logger.warning(
                "Found %d roadmap items for post %s; using item %s",
                len(rows), feedback_post_id, rows[0].get("Id"),
            )
        return rows[0] if rows else None

    def update_stage(self, feedback_post_id: Any, new_stage: str, new_position: int = 1) -> RoadmapItem:
        """
        Move a post onto the roadmap, or to another stage.

        Creates the post's roadmap item if it has none, otherwise updates
        the existing one. The estimated date is recomputed from the stage
        either way.

        Args:
            feedback_post_id: Id of the feedback post.
            new_stage: Target stage.
            new_position: Position within the stage.

        Returns:
            The stored RoadmapItem (without a joined post).
        """
        post_key = str(feedback_post_id)
        estimated = get_estimated_date(new_stage)
        estimated_text = estimated.isoformat() if estimated else None

        existing = self._find_by_post(post_key)

        if existing is None:
            record = {
                "Name": f"Roadmap Item for Post {post_key}",
                "feedback_post_id_c": post_key,
                "stage_c": new_stage,
                "position_c": new_position,
                "estimated_date_c": estimated_text,
            }
            row = self._write("create", self.client.create_record, record, "Failed to create roadmap item")
        else:
            record = {
                "Id": existing["Id"],
                "stage_c": new_stage,
                "position_c": new_position,
                "estimated_date_c": estimated_text,
            }
            row = self._write("update", self.client.update_record, record, "Failed to update roadmap item")

        return RoadmapItem.from_record(row)

    def _prepare_update(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if "stage" in data:
            return dict(data, estimated_date=get_estimated_date(data["stage"]))
        return data

    def update_position(self, record_id: Any, new_position: int) -> RoadmapItem:
        """Change only an item's position within its stage."""
        record_id = self._coerce_id(record_id)
        record = {"Id": record_id, "position_c": new_position}
        row = self._write(
            "update",
            self.client.update_record,
            record,
            f"Failed to update position for roadmap item {record_id}",
        )
        return RoadmapItem.from_record(row)
