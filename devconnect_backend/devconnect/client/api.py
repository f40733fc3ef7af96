from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import aiohttp
from pydantic import ValidationError

from ..core import config
from ..schemas.posts import PostPublic


logger = logging.getLogger(__name__)

UNREACHABLE_MESSAGE = "Cannot reach server."


class PostsClientError(Exception):
    """Base error for calls made by the posts API client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ApiError(PostsClientError):
    """The server answered with a non-success status."""

    def __init__(self, status: int, message: str):
        self.status = status
        super().__init__(message)


class ServerUnreachable(PostsClientError):
    """No HTTP response came back at all."""

    def __init__(self, message: str = UNREACHABLE_MESSAGE):
        super().__init__(message)


class MalformedResponse(PostsClientError):
    """A success response whose body is not the expected shape."""


def _parse_post(data: Any, fallback: str) -> PostPublic:
    try:
        return PostPublic.model_validate(data)
    except ValidationError as e:
        logger.warning("unexpected post payload: %s", e)
        raise MalformedResponse(fallback) from e


class PostsApiClient:
    """
    Thin async wrapper over the ``/api/posts`` endpoints.

    The aiohttp session is owned by the caller; the client only issues
    requests on it, so one session can be shared across views.
    """

    def __init__(self, session: aiohttp.ClientSession, base_url: Optional[str] = None):
        self.session = session
        self.base_url = (base_url or config.get_api_url()).rstrip("/")

    async def _request(self, method: str, path: str, fallback: str, json: dict[str, Any] | None = None) -> Any:
        """
        Send one request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: path below the base URL
            fallback: message used when an error response carries none
            json: request body

        Raises:
            ApiError: the server answered with a non-2xx status
            ServerUnreachable: the request never got a response
        """
        url = f"{self.base_url}{path}"
        try:
            async with self.session.request(method, url, json=json) as response:
                try:
                    data = await response.json(content_type=None)
                except ValueError:
                    data = None
                if not 200 <= response.status < 300:
                    message = data.get("message") if isinstance(data, dict) else None
                    raise ApiError(response.status, message or fallback)
                return data
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ServerUnreachable() from e

    async def list_posts(self) -> list[PostPublic]:
        data = await self._request("GET", "/api/posts", "Failed to fetch posts.")
        if not isinstance(data, list):
            raise MalformedResponse("Failed to fetch posts.")
        return [_parse_post(item, "Failed to fetch posts.") for item in data]

    async def create_post(self, title: str, content: str) -> PostPublic:
        data = await self._request(
            "POST", "/api/posts", "Failed to create post.", json={"title": title, "content": content}
        )
        return _parse_post(data, "Failed to create post.")

    async def update_post(self, post_id: str, title: str, content: str) -> PostPublic:
        data = await self._request(
            "PUT", f"/api/posts/{post_id}", "Failed to update post.", json={"title": title, "content": content}
        )
        return _parse_post(data, "Failed to update post.")

    async def delete_post(self, post_id: str) -> str:
        data = await self._request("DELETE", f"/api/posts/{post_id}", "Failed to delete post.")
        return data.get("message", "") if isinstance(data, dict) else ""

    async def like_post(self, post_id: str) -> PostPublic:
        data = await self._request("POST", f"/api/posts/{post_id}/like", "Failed to like post.")
        return _parse_post(data, "Failed to like post.")
