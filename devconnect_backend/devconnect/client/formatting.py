from __future__ import annotations

import datetime as dt
from typing import Optional

from ..schemas.posts import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH, PostPublic


def _aware(value: dt.datetime) -> dt.datetime:
    return value if value.tzinfo else value.replace(tzinfo=dt.timezone.utc)


def format_timestamp(post: PostPublic, now: Optional[dt.datetime] = None) -> str:
    """Relative age of the post's last edit, with " (edited)" once it was edited."""
    reference = _aware(post.contentUpdatedAt or post.updatedAt)
    created = _aware(post.createdAt)
    now = _aware(now) if now else dt.datetime.now(dt.timezone.utc)

    mins = int((now - reference).total_seconds() // 60)
    if mins < 1:
        text = "Just now"
    elif mins < 60:
        text = f"{mins} mins ago"
    elif mins < 1440:
        text = f"{mins // 60} hours ago"
    else:
        text = reference.astimezone().strftime("%Y-%m-%d %H:%M:%S")

    edited = " (edited)" if reference > created else ""
    return f"{text}{edited}"


def title_chars_left(title: str) -> str:
    return f"{TITLE_MAX_LENGTH - len(title)} characters left"


def content_chars_left(content: str) -> str:
    return f"{CONTENT_MAX_LENGTH - len(content)} characters left"
