"""
Test Configuration - Externalized Test Data

This file contains backend rows, expected values, and test parameters
shared by the test modules. Update values here when the schema changes -
no need to modify test scripts.

Structure:
- CONFIG: General test configuration
- EXPECTED: Expected values for validation tests
- TEST_DATA: Backend rows per table
"""

import copy
from typing import Any, Dict, List


# =============================================================================
# GENERAL TEST CONFIGURATION
# =============================================================================

CONFIG = {
    "environments": {
        "production": "production",
        "development": "development",
    },

    "tables": {
        "posts": "feedback_post_c",
        "comments": "comment_c",
        "roadmap": "roadmap_item_c",
        "changelog": "changelog_entry_c",
    },

    "sort_modes": ["votes", "newest", "oldest", "trending"],
}


# =============================================================================
# EXPECTED VALUES FOR VALIDATION
# =============================================================================

EXPECTED = {
    "config": {
        "required_production_vars": [
            "RECORD_API_KEY",
            "RECORD_PROJECT_ID",
        ],
        "default_timeout_range": (5, 120),
        "default_join_workers": 8,
    },

    "post_defaults": {
        "title": "",
        "description": "",
        "category": "",
        "status": "under-review",
        "vote_count": 0,
        "comment_count": 0,
        "author_name": "Anonymous",
        "is_anonymous": False,
        "images": [],
    },

    "roadmap": {
        "stages": ["planned", "in-progress", "completed"],
        "lead_days": {"planned": 90, "in-progress": 30, "completed": 0},
    },
}


# =============================================================================
# BACKEND ROWS
# =============================================================================

TEST_DATA = {
    "posts": [
        {
            "Name": "Dark mode",
            "title_c": "Dark mode",
            "description_c": "Please add a dark theme",
            "category_c": "feature",
            "status_c": "planned",
            "vote_count_c": 5,
            "comment_count_c": 1,
            "author_name_c": "dana",
            "is_anonymous_c": False,
            "created_at_c": "2026-01-10T09:00:00Z",
            "updated_at_c": "2026-01-10T09:00:00Z",
            "images_c": "[]",
        },
        {
            "Name": "Export to CSV",
            "title_c": "Export to CSV",
            "description_c": "Download the board as a spreadsheet",
            "category_c": "feature",
            "status_c": "under-review",
            "vote_count_c": 3,
            "comment_count_c": 3,
            "author_name_c": "lee",
            "is_anonymous_c": False,
            "created_at_c": "2026-01-12T09:00:00Z",
            "updated_at_c": "2026-01-12T09:00:00Z",
            "images_c": "[\"https://img.example.com/csv.png\"]",
        },
        {
            "Name": "Login fails on Safari",
            "title_c": "Login fails on Safari",
            "description_c": "Spinner never stops after submitting the form",
            "category_c": "bug",
            "status_c": "in-progress",
            "vote_count_c": 8,
            "comment_count_c": 0,
            "author_name_c": "",
            "is_anonymous_c": True,
            "created_at_c": "2026-01-05T09:00:00Z",
            "updated_at_c": "2026-01-06T09:00:00Z",
            "images_c": None,
        },
    ],

    "changelog": [
        {
            "Name": "v1.2",
            "title_c": "v1.2",
            "description_c": "Dark mode is here",
            "category_c": "release",
            "release_date_c": "2026-02-01T00:00:00Z",
            "related_post_ids_c": "1,,2",
        },
        {
            "Name": "v1.1",
            "title_c": "v1.1",
            "description_c": "Bug fixes",
            "category_c": "fix",
            "release_date_c": "2026-01-15T00:00:00Z",
            "related_post_ids_c": "",
        },
    ],
}


def get_rows(kind: str) -> List[Dict[str, Any]]:
    """Return a deep copy of the sample rows for a table kind."""
    return copy.deepcopy(TEST_DATA[kind])


def comment_row(content: str, post_id: Any = "", parent_id: Any = "", roadmap_item_id: Any = "",
                created_at: str = "2026-01-10T10:00:00Z", author: str = "sam") -> Dict[str, Any]:
    """Build a comment_c row."""
    return {
        "Name": f"Comment by {author}",
        "author_name_c": author,
        "content_c": content,
        "created_at_c": created_at,
        "is_anonymous_c": False,
        "parent_id_c": str(parent_id) if parent_id else "",
        "post_id_c": str(post_id) if post_id else "",
        "roadmap_item_id_c": str(roadmap_item_id) if roadmap_item_id else "",
        "images_c": "[]",
    }


def roadmap_row(post_id: Any, stage: str, position: int, estimated_date: str = None) -> Dict[str, Any]:
    """Build a roadmap_item_c row."""
    return {
        "Name": f"Roadmap Item for Post {post_id}",
        "feedback_post_id_c": str(post_id),
        "stage_c": stage,
        "position_c": position,
        "estimated_date_c": estimated_date,
    }
