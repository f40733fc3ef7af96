from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict

TITLE_MAX_LENGTH = 50
CONTENT_MAX_LENGTH = 500


class PostPayload(BaseModel):
    # Untyped: missing, blank and non-string values all go through post_errors().
    model_config = ConfigDict(extra="ignore")

    title: Any = None
    content: Any = None


class PostPublic(BaseModel):
    id: str
    title: str
    content: str
    likes: int = 0
    createdAt: dt.datetime
    updatedAt: dt.datetime
    contentUpdatedAt: dt.datetime | None = None


class MessageResponse(BaseModel):
    message: str


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def post_errors(title: Any, content: Any) -> list[str]:
    """Return the violated field rules for a post body, in display order."""
    errors: list[str] = []
    if _is_blank(title):
        errors.append("Title is required.")
    elif len(title) > TITLE_MAX_LENGTH:
        errors.append(f"Title must be at most {TITLE_MAX_LENGTH} characters.")
    if _is_blank(content):
        errors.append("Content is required.")
    elif len(content) > CONTENT_MAX_LENGTH:
        errors.append(f"Content must be at most {CONTENT_MAX_LENGTH} characters.")
    return errors
