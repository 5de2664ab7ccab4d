"""Content-addressed identifiers for extracted nodes.

The same document always yields the same ids, so two extraction runs
over identical input compare equal.
"""

import hashlib

_DIGEST_CHARS = 10


def content_id(prefix: str, *parts: object) -> str:
    """Build ``<prefix>-<digest>`` from the given parts.

    Example:
        content_id("week3", "doc-1", "weekly_only", 3, "Week 3 ...") -> "week3-" + 10 hex chars
    """
    digest = hashlib.sha1("\x1f".join(str(part) for part in parts).encode("utf-8")).hexdigest()
    return f"{prefix}-{digest[:_DIGEST_CHARS]}"


def week_id(document_id: str, pattern: str, week_number: int, raw_content: str) -> str:
    return content_id(f"week{week_number}", document_id, pattern, week_number, raw_content)


def day_id(document_id: str, week_number: int, day_number: int, day: str, raw_content: str) -> str:
    return content_id(f"day{week_number}.{day_number}", document_id, week_number, day_number, day, raw_content)


def session_id(
    document_id: str,
    week_number: int,
    day_number: int,
    session_number: int,
    raw_content: str,
) -> str:
    return content_id(
        f"session{week_number}.{day_number}.{session_number}",
        document_id,
        week_number,
        day_number,
        session_number,
        raw_content,
    )
