from __future__ import annotations

import datetime as dt
import functools
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from redis.exceptions import RedisError

from ..schemas.posts import PostPublic

logger = logging.getLogger(__name__)

SEQ_KEY = "posts:seq"
INDEX_KEY = "posts:by_updated"

T = TypeVar("T")


class StoreUnavailable(Exception):
    """The document store could not be reached or failed a command."""


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _post_key(post_id: str) -> str:
    return f"post:{post_id}"


def _store_call(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    @functools.wraps(func)
    async def wrapper(self: "PostStore", *args: Any, **kwargs: Any) -> T:
        if self.client is None:
            raise StoreUnavailable("Redis not initialized")
        try:
            return await func(self, *args, **kwargs)
        except RedisError as e:
            raise StoreUnavailable(str(e)) from e

    return wrapper


class PostStore:
    """Posts kept as Redis hashes plus a sorted-set index on ``updatedAt``.

    ``post:{id}`` holds the document, ``posts:by_updated`` scores each id by
    its ``updatedAt`` epoch seconds, and ``posts:seq`` issues ids.
    """

    def __init__(self, client: Any | None, now: Callable[[], dt.datetime] = _utcnow) -> None:
        self.client = client
        self._now = now

    @staticmethod
    def _to_post(data: dict[str, Any]) -> PostPublic:
        return PostPublic(
            id=str(data["id"]),
            title=data.get("title", ""),
            content=data.get("content", ""),
            likes=int(data.get("likes") or 0),
            createdAt=data["createdAt"],
            updatedAt=data["updatedAt"],
            contentUpdatedAt=data.get("contentUpdatedAt") or None,
        )

    async def _load(self, post_id: str) -> Optional[PostPublic]:
        data = await self.client.hgetall(_post_key(post_id))
        if not data or "id" not in data:
            return None
        return self._to_post(data)

    async def _drop_partial(self, post_id: str) -> None:
        # A write raced a delete and recreated a hash without its document fields.
        logger.warning("post %s was deleted during a write; discarding partial document", post_id)
        await self.client.delete(_post_key(post_id))
        await self.client.zrem(INDEX_KEY, post_id)

    @_store_call
    async def insert(self, title: str, content: str) -> PostPublic:
        post_id = str(await self.client.incr(SEQ_KEY))
        now = self._now()
        stamp = now.isoformat()
        await self.client.hset(
            _post_key(post_id),
            mapping={
                "id": post_id,
                "title": title,
                "content": content,
                "likes": 0,
                "createdAt": stamp,
                "updatedAt": stamp,
                "contentUpdatedAt": "",
            },
        )
        await self.client.zadd(INDEX_KEY, {post_id: now.timestamp()})
        return PostPublic(id=post_id, title=title, content=content, likes=0, createdAt=now, updatedAt=now)

    @_store_call
    async def find_by_id(self, post_id: str) -> Optional[PostPublic]:
        return await self._load(post_id)

    @_store_call
    async def find_all_sorted(self) -> list[PostPublic]:
        items: list[PostPublic] = []
        for post_id in await self.client.zrevrange(INDEX_KEY, 0, -1):
            post = await self._load(post_id)
            if post is not None:
                items.append(post)
        # Ties on updatedAt: higher (newer) ids first, compared as numbers.
        items.sort(key=lambda p: (p.updatedAt, len(p.id), p.id), reverse=True)
        return items

    @_store_call
    async def update_by_id(self, post_id: str, title: str, content: str) -> Optional[PostPublic]:
        key = _post_key(post_id)
        if not await self.client.exists(key):
            return None
        now = self._now()
        stamp = now.isoformat()
        await self.client.hset(
            key,
            mapping={"title": title, "content": content, "updatedAt": stamp, "contentUpdatedAt": stamp},
        )
        await self.client.zadd(INDEX_KEY, {post_id: now.timestamp()})
        post = await self._load(post_id)
        if post is None:
            await self._drop_partial(post_id)
        return post

    @_store_call
    async def delete_by_id(self, post_id: str) -> bool:
        removed = await self.client.delete(_post_key(post_id))
        await self.client.zrem(INDEX_KEY, post_id)
        return bool(removed)

    @_store_call
    async def increment_likes(self, post_id: str) -> Optional[PostPublic]:
        key = _post_key(post_id)
        if not await self.client.exists(key):
            return None
        # HINCRBY is a single server-side step; concurrent likes never lose updates.
        await self.client.hincrby(key, "likes", 1)
        post = await self._load(post_id)
        if post is None:
            await self._drop_partial(post_id)
        return post
