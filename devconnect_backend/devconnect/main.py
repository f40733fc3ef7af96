from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

import redis.asyncio as redis
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from redis.exceptions import RedisError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.endpoints import posts
from .core import config, runtime
from .core.logging_config import setup_logging
from .core.memory_redis import AsyncMemoryRedis


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # type: ignore[override]
    setup_logging()
    if config.use_fake_redis():
        client: Any = AsyncMemoryRedis()
        logger.info("using in-memory post store")
    else:
        redis_url = config.get_redis_url()
        client = redis.from_url(redis_url, decode_responses=True)
        # Keep booting when redis is down; requests report 500 until it is back.
        try:
            await client.ping()
            logger.info("connected to redis at %s", redis_url)
        except RedisError as e:
            logger.error("redis ping failed at %s: %s", redis_url, e)
    runtime.redis_client = client
    yield
    runtime.redis_client = None
    await client.close()


app = FastAPI(title="DevConnect API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"message": "Invalid request body."})


@app.get("/", response_class=PlainTextResponse)
async def welcome() -> str:
    return "Welcome to DevConnect API!"


@app.get("/healthz")
async def healthz() -> dict[str, Any]:
    status: dict[str, Any] = {"ok": True}
    client = runtime.redis_client
    if client is None:
        status["redis"] = {"connected": False, "message": "redis not initialized"}
        return status
    try:
        pong = await client.ping()
        status["redis"] = {"connected": bool(pong)}
    except RedisError as e:  # pragma: no cover - diagnostic only
        status["redis"] = {"connected": False, "error": str(e)}
    return status


app.include_router(posts.router, prefix="/api", tags=["posts"])  # e.g., /api/posts


def run() -> None:
    import uvicorn

    uvicorn.run("devconnect.main:app", host=config.get_host(), port=config.get_port())


if __name__ == "__main__":
    run()
