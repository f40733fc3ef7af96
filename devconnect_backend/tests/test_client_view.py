from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from conftest import EPOCH, make_post
from devconnect.client.api import ApiError, ServerUnreachable
from devconnect.client.state import ViewState
from devconnect.client.view import BLANK_DRAFT_MESSAGE, PostsView


@pytest.fixture
def api():
    return AsyncMock()


def _loaded(api, *ids: str) -> PostsView:
    return PostsView(api, ViewState(posts=tuple(make_post(i) for i in ids), loading=False))


class TestMount:
    @pytest.mark.asyncio
    async def test_populates_once_and_clears_loading(self, api) -> None:
        api.list_posts.return_value = [make_post("a"), make_post("b")]
        view = PostsView(api)

        await view.mount()
        await view.mount()

        assert [p.id for p in view.state.posts] == ["a", "b"]
        assert view.state.loading is False
        api.list_posts.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failure_still_clears_loading(self, api) -> None:
        api.list_posts.side_effect = ServerUnreachable()
        view = PostsView(api)

        await view.mount()

        assert view.state.loading is False
        assert view.state.posts == ()
        assert view.state.errors == ("Cannot reach server.",)


class TestSubmit:
    @pytest.mark.asyncio
    async def test_blank_draft_is_not_sent(self, api) -> None:
        view = PostsView(api)
        view.set_title("  ")
        view.set_content("body")

        await view.submit()
        await view.submit()

        assert view.state.errors == (BLANK_DRAFT_MESSAGE,)
        api.create_post.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_prepends_and_clears_draft(self, api) -> None:
        api.create_post.return_value = make_post("new", title="T", content="C")
        view = _loaded(api, "a")
        view.set_title("T")
        view.set_content("C")

        await view.submit()

        api.create_post.assert_awaited_once_with("T", "C")
        assert [p.id for p in view.state.posts] == ["new", "a"]
        assert (view.state.title, view.state.content, view.state.errors) == ("", "", ())

    @pytest.mark.asyncio
    async def test_edit_moves_post_to_front(self, api) -> None:
        view = _loaded(api, "a", "b", "c")
        view.start_edit(view.state.posts[2])
        view.set_title("changed")
        api.update_post.return_value = make_post("c", title="changed")

        await view.submit()

        api.update_post.assert_awaited_once_with("c", "changed", "Body")
        assert [p.id for p in view.state.posts] == ["c", "a", "b"]
        assert view.state.editing_id is None
        assert view.state.title == ""

    @pytest.mark.asyncio
    async def test_failure_keeps_draft_and_adds_error_once(self, api) -> None:
        api.update_post.side_effect = ApiError(404, "Post not found.")
        view = _loaded(api, "a")
        view.start_edit(view.state.posts[0])
        view.set_content("draft in progress")

        await view.submit()
        await view.submit()

        assert view.state.errors == ("Post not found.",)
        assert view.state.editing_id == "a"
        assert view.state.content == "draft in progress"
        assert [p.id for p in view.state.posts] == ["a"]


class TestPostActions:
    @pytest.mark.asyncio
    async def test_like_updates_in_place(self, api) -> None:
        api.like_post.return_value = make_post("b", likes=1)
        view = _loaded(api, "a", "b", "c")

        await view.like("b")

        assert [p.id for p in view.state.posts] == ["a", "b", "c"]
        assert view.state.posts[1].likes == 1

    @pytest.mark.asyncio
    async def test_delete_removes_post(self, api) -> None:
        api.delete_post.return_value = "Post deleted successfully."
        view = _loaded(api, "a", "b")

        await view.delete("a")

        assert [p.id for p in view.state.posts] == ["b"]

    @pytest.mark.asyncio
    async def test_delete_failure_leaves_collection(self, api) -> None:
        api.delete_post.side_effect = ApiError(404, "Post not found.")
        view = _loaded(api, "a", "b")

        await view.delete("zzz")

        assert [p.id for p in view.state.posts] == ["a", "b"]
        assert view.state.errors == ("Post not found.",)

    def test_start_edit_requests_scroll(self, api) -> None:
        view = _loaded(api, "a")

        view.start_edit(view.state.posts[0])

        assert view.consume_scroll_request() is True
        assert view.consume_scroll_request() is False


class TestRender:
    def test_loading_and_empty_states(self, api) -> None:
        assert "Loading posts..." in PostsView(api).render(now=EPOCH)
        assert "No posts yet!" in PostsView(api, ViewState(loading=False)).render(now=EPOCH)

    def test_post_lines(self, api) -> None:
        view = _loaded(api, "a")

        lines = view.render(now=EPOCH)

        assert "[Add Post]" in lines
        assert "50 characters left" in lines
        assert "# Title" in lines
        assert "Just now" in lines
        assert "[Like 0] [Edit] [Delete]" in lines

    def test_edit_mode_label_and_content_rows(self, api) -> None:
        view = _loaded(api, "a")
        view.start_edit(make_post("a", content="1\n2\n3"))

        lines = view.render(now=EPOCH)

        assert "[Update Post]" in lines
        start = lines.index("Content:")
        assert lines[start + 1 : start + 4] == ["  1", "  2", "  3"]

    def test_errors_are_listed(self, api) -> None:
        view = PostsView(api, ViewState(errors=("Cannot reach server.",)))
        assert "! Cannot reach server." in view.render(now=EPOCH)
