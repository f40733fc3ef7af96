from __future__ import annotations

import datetime as dt
import logging
from typing import Optional, Protocol

from ..schemas.posts import PostPublic
from . import state as st
from .api import PostsClientError
from .formatting import content_chars_left, format_timestamp, title_chars_left


logger = logging.getLogger(__name__)

BLANK_DRAFT_MESSAGE = "Title and content are required."


class PostsApi(Protocol):
    async def list_posts(self) -> list[PostPublic]: ...

    async def create_post(self, title: str, content: str) -> PostPublic: ...

    async def update_post(self, post_id: str, title: str, content: str) -> PostPublic: ...

    async def delete_post(self, post_id: str) -> str: ...

    async def like_post(self, post_id: str) -> PostPublic: ...


class PostsView:
    """
    The posts screen: a compose/edit form above the post list.

    Each action awaits its API call and folds the result into ``state``
    through the transitions in ``devconnect.client.state``. API failures
    become entries in ``state.errors``; they are never raised to the caller.
    """

    def __init__(self, api: PostsApi, initial: Optional[st.ViewState] = None):
        self.api = api
        self.state = initial or st.ViewState()
        self._mounted = False

    def _fail(self, error: PostsClientError) -> None:
        self.state = st.error_added(self.state, error.message)

    async def mount(self) -> None:
        if self._mounted:
            return
        self._mounted = True
        try:
            posts = await self.api.list_posts()
            self.state = st.posts_loaded(self.state, posts)
        except PostsClientError as e:
            self._fail(e)
        finally:
            self.state = st.loading_finished(self.state)

    def set_title(self, title: str) -> None:
        self.state = st.title_changed(self.state, title)

    def set_content(self, content: str) -> None:
        self.state = st.content_changed(self.state, content)

    async def submit(self) -> None:
        s = self.state
        if not s.title.strip() or not s.content.strip():
            self.state = st.error_added(s, BLANK_DRAFT_MESSAGE)
            return
        try:
            if s.editing_id is not None:
                post = await self.api.update_post(s.editing_id, s.title, s.content)
                self.state = st.post_updated(self.state, post)
            else:
                post = await self.api.create_post(s.title, s.content)
                self.state = st.post_created(self.state, post)
        except PostsClientError as e:
            self._fail(e)

    async def like(self, post_id: str) -> None:
        try:
            post = await self.api.like_post(post_id)
        except PostsClientError as e:
            self._fail(e)
            return
        self.state = st.post_liked(self.state, post)

    async def delete(self, post_id: str) -> None:
        try:
            await self.api.delete_post(post_id)
        except PostsClientError as e:
            self._fail(e)
            return
        self.state = st.post_deleted(self.state, post_id)

    def start_edit(self, post: PostPublic) -> None:
        self.state = st.edit_started(self.state, post)

    def consume_scroll_request(self) -> bool:
        """Return whether the screen should jump to the form, clearing the request."""
        requested = self.state.scroll_to_top
        if requested:
            self.state = st.scrolled(self.state)
        return requested

    def render(self, now: Optional[dt.datetime] = None) -> list[str]:
        s = self.state
        lines = ["DevConnect Posts", ""]
        lines.extend(f"! {message}" for message in s.errors)
        lines.append(f"Title: {s.title}")
        lines.append(title_chars_left(s.title))
        content_lines = s.content.split("\n")
        content_lines += [""] * (s.rows - len(content_lines))
        lines.append("Content:")
        lines.extend(f"  {line}" for line in content_lines)
        lines.append(content_chars_left(s.content))
        lines.append("[Update Post]" if s.editing_id is not None else "[Add Post]")
        lines.append("")

        if s.loading:
            lines.append("Loading posts...")
        elif not s.posts:
            lines.append("No posts yet!")
        else:
            for post in s.posts:
                lines.append(f"# {post.title}")
                lines.append(post.content)
                lines.append(format_timestamp(post, now))
                lines.append(f"[Like {post.likes}] [Edit] [Delete]")
                lines.append("")
        return lines
