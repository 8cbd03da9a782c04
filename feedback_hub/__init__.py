"""
Feedback Hub data-access layer.

Typed services over a remote record-storage backend for feedback posts,
comments, roadmap items and changelog entries.
"""

__version__ = "1.0.0"
