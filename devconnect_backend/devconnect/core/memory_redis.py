from __future__ import annotations

import asyncio
from typing import Any, Dict, List


class AsyncMemoryRedis:
    """In-process stand-in for the subset of redis.asyncio the post store uses.

    Values are kept as strings, as with ``decode_responses=True``. Every
    command runs under a single lock, so each one is atomic.
    """

    def __init__(self) -> None:
        self._kv: Dict[str, str] = {}
        self._hash: Dict[str, Dict[str, str]] = {}
        self._zsets: Dict[str, Dict[str, float]] = {}
        self._lock = asyncio.Lock()

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None

    async def incr(self, key: str) -> int:
        async with self._lock:
            cur = int(self._kv.get(key, 0)) + 1
            self._kv[key] = str(cur)
            return cur

    async def exists(self, *keys: str) -> int:
        async with self._lock:
            return sum(1 for k in keys if k in self._kv or k in self._hash or k in self._zsets)

    async def hset(self, key: str, mapping: Dict[str, Any]) -> int:
        async with self._lock:
            h = self._hash.setdefault(key, {})
            added = sum(1 for f in mapping if f not in h)
            h.update({f: str(v) for f, v in mapping.items()})
            return added

    async def hgetall(self, key: str) -> Dict[str, str]:
        async with self._lock:
            return dict(self._hash.get(key, {}))

    async def hincrby(self, key: str, field: str, amount: int = 1) -> int:
        async with self._lock:
            h = self._hash.setdefault(key, {})
            cur = int(h.get(field, 0)) + amount
            h[field] = str(cur)
            return cur

    async def zadd(self, key: str, mapping: Dict[str, float]) -> int:
        async with self._lock:
            z = self._zsets.setdefault(key, {})
            added = sum(1 for m in mapping if m not in z)
            z.update({str(m): float(s) for m, s in mapping.items()})
            return added

    async def zrem(self, key: str, *members: str) -> int:
        async with self._lock:
            z = self._zsets.get(key, {})
            removed = 0
            for m in members:
                if z.pop(str(m), None) is not None:
                    removed += 1
            if not z:
                self._zsets.pop(key, None)
            return removed

    async def zrevrange(self, key: str, start: int, end: int) -> List[str]:
        async with self._lock:
            z = self._zsets.get(key, {})
            ordered = [m for m, _ in sorted(z.items(), key=lambda kv: (kv[1], kv[0]), reverse=True)]
            stop = None if end == -1 else end + 1
            return ordered[start:stop]

    async def delete(self, *keys: str) -> int:
        async with self._lock:
            removed = 0
            for k in keys:
                hit = False
                for store in (self._kv, self._hash, self._zsets):
                    if store.pop(k, None) is not None:
                        hit = True
                removed += 1 if hit else 0
            return removed
