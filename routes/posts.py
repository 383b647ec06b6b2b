import logging
from typing import List, Dict, Any, Optional

from fastapi import APIRouter, HTTPException, Query

from config import settings
from dependencies import Posts, CurrentUser
from models.post import PostCreate, PostUpdate
from services.posts import PostValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", status_code=201)
async def create_post(
        db: Posts,
        post_data: PostCreate,
        current_user: CurrentUser
) -> Dict[str, Any]:
    """Create a new post authored by the current user"""
    try:
        return db.create_post(current_user.user_id, post_data.model_dump(exclude_none=True))
    except PostValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Error creating post: %s", e)
        raise HTTPException(status_code=500, detail="Failed to create post")


@router.get("")
async def get_posts(
        db: Posts,
        category: Optional[str] = None,
        page: int = Query(1, ge=1),
        limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
) -> List[Dict[str, Any]]:
    """
    List posts, newest first

    Args:
        db: Post repository
        category: Only return posts in this category
        page: 1-based page number
        limit: Number of posts per page
    """
    try:
        return db.list_posts(category, page, limit)
    except Exception as e:
        logger.exception("Error listing posts: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch posts")


@router.get("/{post_id}")
async def get_post(db: Posts, post_id: str) -> Dict[str, Any]:
    """Get a single post with its author"""
    try:
        post = db.get_post(post_id)
    except Exception as e:
        logger.exception("Error fetching post %s: %s", post_id, e)
        raise HTTPException(status_code=500, detail="Failed to fetch post")

    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.put("/{post_id}")
async def update_post(
        db: Posts,
        post_id: str,
        updates: PostUpdate,
        current_user: CurrentUser
) -> Dict[str, Any]:
    """
    Update a post written by the current user. Posts that are missing and posts
    owned by someone else both come back as 404.
    """
    try:
        post = db.update_post(post_id, current_user.user_id, updates.model_dump(exclude_none=True))
    except PostValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Error updating post %s: %s", post_id, e)
        raise HTTPException(status_code=500, detail="Failed to update post")

    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.delete("/{post_id}")
async def delete_post(db: Posts, post_id: str, current_user: CurrentUser) -> Dict[str, Any]:
    """Delete a post"""
    try:
        deleted = db.delete_post(post_id)
    except Exception as e:
        logger.exception("Error deleting post %s: %s", post_id, e)
        raise HTTPException(status_code=500, detail="Failed to delete post")

    if not deleted:
        logger.info("Delete requested by %s for missing post %s", current_user.user_id, post_id)
    return {"message": "Post deleted"}
