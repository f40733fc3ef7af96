"""
View state for the posts screen and the transitions user actions apply to it.

``ViewState`` is immutable; every transition takes a state and returns a new
one. An edited post moves to the front of the list; a liked post keeps
its place.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from ..schemas.posts import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH, PostPublic

MIN_CONTENT_ROWS = 2


@dataclass(frozen=True)
class ViewState:
    posts: Tuple[PostPublic, ...] = ()
    title: str = ""
    content: str = ""
    rows: int = MIN_CONTENT_ROWS
    editing_id: Optional[str] = None
    loading: bool = True
    errors: Tuple[str, ...] = ()
    scroll_to_top: bool = False


def content_rows(content: str) -> int:
    return max(MIN_CONTENT_ROWS, 1 + content.count("\n"))


def _cleared_draft(state: ViewState) -> ViewState:
    return replace(state, title="", content="", rows=MIN_CONTENT_ROWS, errors=())


def posts_loaded(state: ViewState, posts: list[PostPublic]) -> ViewState:
    return replace(state, posts=tuple(posts))


def loading_finished(state: ViewState) -> ViewState:
    return replace(state, loading=False)


def error_added(state: ViewState, message: str) -> ViewState:
    if message in state.errors:
        return state
    return replace(state, errors=state.errors + (message,))


def title_changed(state: ViewState, title: str) -> ViewState:
    return replace(state, title=title[:TITLE_MAX_LENGTH])


def content_changed(state: ViewState, content: str) -> ViewState:
    content = content[:CONTENT_MAX_LENGTH]
    return replace(state, content=content, rows=content_rows(content))


def post_created(state: ViewState, post: PostPublic) -> ViewState:
    return _cleared_draft(replace(state, posts=(post,) + state.posts))


def post_updated(state: ViewState, post: PostPublic) -> ViewState:
    # remove-and-prepend
    rest = tuple(p for p in state.posts if p.id != post.id)
    return _cleared_draft(replace(state, posts=(post,) + rest, editing_id=None))


def post_liked(state: ViewState, post: PostPublic) -> ViewState:
    # replace in place
    return replace(state, posts=tuple(post if p.id == post.id else p for p in state.posts))


def post_deleted(state: ViewState, post_id: str) -> ViewState:
    return replace(state, posts=tuple(p for p in state.posts if p.id != post_id))


def edit_started(state: ViewState, post: PostPublic) -> ViewState:
    return replace(
        state,
        title=post.title,
        content=post.content,
        rows=content_rows(post.content),
        editing_id=post.id,
        scroll_to_top=True,
    )


def scrolled(state: ViewState) -> ViewState:
    return replace(state, scroll_to_top=False)
