"""
Field codecs shared by the record models.

Backend rows store timestamps as ISO strings, image lists as JSON text and
id lists as comma-delimited strings. These helpers turn stored values into
Python values, substituting a default whenever the stored value is missing,
falsy, or unparseable.
"""

import json
from datetime import date, datetime, timezone
from typing import Any, List, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def text(value: Any, default: str = "") -> str:
    """Stored value as a string, or `default` when falsy."""
    return str(value) if value else default


def optional_text(value: Any) -> Optional[str]:
    """Stored value as a string, or None when falsy."""
    return str(value) if value else None


def integer(value: Any, default: int = 0) -> int:
    if not value:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def boolean(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO timestamp, falling back to the current time.

    Accepts a trailing "Z" for UTC and datetime instances as-is.
    """
    if isinstance(value, datetime):
        return value
    if value:
        try:
            return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            pass
    return utcnow()


def parse_date(value: Any) -> Optional[date]:
    """Parse "YYYY-MM-DD" (or the date part of a timestamp), else None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def parse_json_list(value: Any) -> List[Any]:
    """Decode JSON list text; anything else decodes to []."""
    if isinstance(value, list):
        return list(value)
    if not value:
        return []
    try:
        decoded = json.loads(value)
    except (TypeError, ValueError):
        return []
    return decoded if isinstance(decoded, list) else []


def parse_delimited(value: Any, sep: str = ",") -> List[str]:
    """Split a delimited string, dropping empty segments."""
    if isinstance(value, list):
        return [str(v) for v in value if v]
    if not value:
        return []
    return [part for part in str(value).split(sep) if part]


def encode_json_list(values: Optional[List[Any]]) -> str:
    return json.dumps(list(values or []))


def encode_delimited(values: Optional[List[Any]], sep: str = ",") -> str:
    return sep.join(str(v) for v in values or [])


def encode_timestamp(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)
