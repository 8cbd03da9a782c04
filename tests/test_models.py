"""
Tests for record decoding and encoding.

Every model's from_record() must return a fully-populated instance no
matter how sparse the stored row is.
"""

from datetime import date, datetime, timezone

import pytest

from feedback_hub.models import ChangelogEntry, Comment, FeedbackPost, RoadmapItem
from feedback_hub.models import fields as f
from tests.test_config import EXPECTED, get_rows


class TestFieldCodecs:

    def test_parse_timestamp_accepts_z_suffix(self):
        parsed = f.parse_timestamp("2026-01-10T09:00:00Z")
        assert parsed == datetime(2026, 1, 10, 9, 0, tzinfo=timezone.utc)

    def test_parse_timestamp_falls_back_to_now(self):
        before = f.utcnow()
        parsed = f.parse_timestamp("not-a-date")
        assert parsed >= before

    def test_parse_date_takes_date_part_of_timestamp(self):
        assert f.parse_date("2026-03-01T12:30:00Z") == date(2026, 3, 1)

    def test_parse_date_invalid_is_none(self):
        assert f.parse_date("soon") is None
        assert f.parse_date(None) is None

    def test_parse_json_list_tolerates_bad_json(self):
        assert f.parse_json_list("[not json") == []
        assert f.parse_json_list('{"a": 1}') == []
        assert f.parse_json_list('["x.png"]') == ["x.png"]

    def test_parse_delimited_drops_empty_segments(self):
        assert f.parse_delimited("1,,2,") == ["1", "2"]
        assert f.parse_delimited("") == []

    def test_boolean_from_text(self):
        assert f.boolean("true") is True
        assert f.boolean("false") is False
        assert f.boolean(None) is False

    def test_integer_defaults(self):
        assert f.integer(None) == 0
        assert f.integer("7") == 7
        assert f.integer("seven") == 0


class TestFeedbackPostDecoding:

    def test_empty_row_gets_every_default(self):
        post = FeedbackPost.from_record({"Id": 4})

        assert post.id == 4
        for name, value in EXPECTED["post_defaults"].items():
            assert getattr(post, name) == value, name
        assert isinstance(post.created_at, datetime)
        assert isinstance(post.updated_at, datetime)

    def test_complete_row(self):
        row = dict(get_rows("posts")[1], Id=2)
        post = FeedbackPost.from_record(row)

        assert post.title == "Export to CSV"
        assert post.status == "under-review"
        assert post.vote_count == 3
        assert post.comment_count == 3
        assert post.author_name == "lee"
        assert post.images == ["https://img.example.com/csv.png"]
        assert post.created_at.year == 2026

    def test_empty_author_becomes_anonymous(self):
        row = dict(get_rows("posts")[2], Id=3)
        post = FeedbackPost.from_record(row)
        assert post.author_name == "Anonymous"
        assert post.is_anonymous is True

    def test_trending_score(self):
        post = FeedbackPost(id=1, vote_count=5, comment_count=1)
        assert post.trending_score == 7

    def test_encode_maps_and_serializes(self):
        record = FeedbackPost.encode({"title": "T", "images": ["a.png"], "vote_count": 2})
        assert record == {"title_c": "T", "images_c": '["a.png"]', "vote_count_c": 2}

    def test_encode_rejects_unknown_field(self):
        with pytest.raises(ValueError):
            FeedbackPost.encode({"votes": 1})

    def test_to_dict_serializes_timestamps(self):
        data = FeedbackPost.from_record({"Id": 1, "created_at_c": "2026-01-10T09:00:00Z"}).to_dict()
        assert data["created_at"].startswith("2026-01-10T09:00:00")


class TestCommentDecoding:

    def test_defaults(self):
        comment = Comment.from_record({"Id": 1})

        assert comment.author_name == "Anonymous"
        assert comment.content == ""
        assert comment.parent_id is None
        assert comment.post_id == ""
        assert comment.roadmap_item_id is None
        assert comment.images == []
        assert comment.replies == []
        assert comment.is_top_level

    def test_empty_parent_is_top_level(self):
        comment = Comment.from_record({"Id": 1, "parent_id_c": ""})
        assert comment.parent_id is None

    def test_parent_id_is_text(self):
        comment = Comment.from_record({"Id": 2, "parent_id_c": 1})
        assert comment.parent_id == "1"
        assert not comment.is_top_level


class TestRoadmapItemDecoding:

    def test_defaults(self):
        item = RoadmapItem.from_record({"Id": 1})

        assert item.feedback_post_id == ""
        assert item.stage == "planned"
        assert item.position == 0
        assert item.estimated_date is None
        assert item.post is None

    def test_estimated_date(self):
        item = RoadmapItem.from_record({"Id": 1, "estimated_date_c": "2026-04-01"})
        assert item.estimated_date == date(2026, 4, 1)

    def test_encode_estimated_date(self):
        record = RoadmapItem.encode({"estimated_date": date(2026, 4, 1), "position": 3})
        assert record == {"estimated_date_c": "2026-04-01", "position_c": 3}


class TestChangelogEntryDecoding:

    def test_related_post_ids(self):
        entry = ChangelogEntry.from_record(dict(get_rows("changelog")[0], Id=1))
        assert entry.related_post_ids == ["1", "2"]

    def test_defaults(self):
        entry = ChangelogEntry.from_record({"Id": 1})
        assert entry.title == ""
        assert entry.related_post_ids == []
        assert isinstance(entry.release_date, datetime)

    def test_encode_joins_related_ids(self):
        record = ChangelogEntry.encode({"related_post_ids": [1, 2, 3]})
        assert record == {"related_post_ids_c": "1,2,3"}
