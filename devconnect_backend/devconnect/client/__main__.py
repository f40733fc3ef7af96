from __future__ import annotations

import asyncio

import aiohttp

from ..core import config
from .api import PostsApiClient
from .view import PostsView


async def main() -> None:
    timeout = aiohttp.ClientTimeout(total=config.get_api_timeout_seconds())
    async with aiohttp.ClientSession(timeout=timeout) as session:
        view = PostsView(PostsApiClient(session))
        await view.mount()
        print("\n".join(view.render()))


if __name__ == "__main__":
    asyncio.run(main())
