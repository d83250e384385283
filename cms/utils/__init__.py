"""Utility helper functions."""

from cms.utils.helpers import (
    get_summary,
    host,
    parse_uuid,
    today_str,
    unique_ordered,
    utcnow,
)

__all__ = [
    "get_summary",
    "host",
    "parse_uuid",
    "today_str",
    "unique_ordered",
    "utcnow",
]
