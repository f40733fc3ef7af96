from __future__ import annotations

import datetime as dt

import pytest
from fastapi.testclient import TestClient

import devconnect.core.runtime as runtime
from devconnect.api.v1.endpoints.posts import get_post_store
from devconnect.core.memory_redis import AsyncMemoryRedis
from devconnect.core.post_store import PostStore
from devconnect.main import app
from devconnect.schemas.posts import PostPublic

EPOCH = dt.datetime(2026, 1, 1, 12, 0, tzinfo=dt.timezone.utc)


class FakeClock:
    """Returns a strictly increasing time, one second per call."""

    def __init__(self, start: dt.datetime = EPOCH):
        self.current = start

    def __call__(self) -> dt.datetime:
        value = self.current
        self.current += dt.timedelta(seconds=1)
        return value


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_redis():
    return AsyncMemoryRedis()


@pytest.fixture
def store(memory_redis, clock):
    return PostStore(memory_redis, now=clock)


@pytest.fixture
def client(monkeypatch, clock):
    """API client running on the in-memory store with a deterministic clock."""
    monkeypatch.setenv("USE_FAKE_REDIS", "1")
    app.dependency_overrides[get_post_store] = lambda: PostStore(runtime.redis_client, now=clock)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_post(post_id: str, title: str = "Title", content: str = "Body", likes: int = 0, **stamps) -> PostPublic:
    created = stamps.get("createdAt", EPOCH)
    return PostPublic(
        id=post_id,
        title=title,
        content=content,
        likes=likes,
        createdAt=created,
        updatedAt=stamps.get("updatedAt", created),
        contentUpdatedAt=stamps.get("contentUpdatedAt"),
    )
