from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

import devconnect.core.runtime as runtime
from ....core.post_store import PostStore, StoreUnavailable
from ....schemas.posts import MessageResponse, PostPayload, PostPublic, post_errors


logger = logging.getLogger(__name__)

router = APIRouter()


def get_post_store() -> PostStore:
    return PostStore(runtime.redis_client)


def _validated(payload: Optional[PostPayload]) -> PostPayload:
    payload = payload or PostPayload()
    errors = post_errors(payload.title, payload.content)
    if errors:
        raise HTTPException(status_code=400, detail=" ".join(errors))
    return payload


@router.get("/posts", response_model=List[PostPublic])
async def list_posts(store: PostStore = Depends(get_post_store)) -> List[PostPublic]:
    try:
        return await store.find_all_sorted()
    except StoreUnavailable:
        logger.exception("Error fetching posts")
        raise HTTPException(status_code=500, detail="Failed to fetch posts.")


@router.post("/posts", response_model=PostPublic, status_code=201)
async def create_post(payload: Optional[PostPayload] = None, store: PostStore = Depends(get_post_store)) -> PostPublic:
    payload = _validated(payload)
    try:
        post = await store.insert(payload.title, payload.content)
    except StoreUnavailable:
        logger.exception("Error creating post")
        raise HTTPException(status_code=500, detail="Failed to create post.")
    logger.info("created post %s", post.id)
    return post


@router.put("/posts/{post_id}", response_model=PostPublic)
async def update_post(
    post_id: str, payload: Optional[PostPayload] = None, store: PostStore = Depends(get_post_store)
) -> PostPublic:
    payload = _validated(payload)
    try:
        post = await store.update_by_id(post_id, payload.title, payload.content)
    except StoreUnavailable:
        logger.exception("Error updating post %s", post_id)
        raise HTTPException(status_code=500, detail="Failed to update post.")
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found.")
    return post


@router.delete("/posts/{post_id}", response_model=MessageResponse)
async def delete_post(post_id: str, store: PostStore = Depends(get_post_store)) -> MessageResponse:
    try:
        deleted = await store.delete_by_id(post_id)
    except StoreUnavailable:
        logger.exception("Error deleting post %s", post_id)
        raise HTTPException(status_code=500, detail="Failed to delete post.")
    if not deleted:
        raise HTTPException(status_code=404, detail="Post not found.")
    logger.info("deleted post %s", post_id)
    return MessageResponse(message="Post deleted successfully.")


@router.post("/posts/{post_id}/like", response_model=PostPublic)
async def like_post(post_id: str, store: PostStore = Depends(get_post_store)) -> PostPublic:
    try:
        post = await store.increment_likes(post_id)
    except StoreUnavailable:
        logger.exception("Error liking post %s", post_id)
        raise HTTPException(status_code=500, detail="Failed to like post.")
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found.")
    return post
