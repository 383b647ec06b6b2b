import logging
from typing import Annotated

from fastapi import Request, Depends, HTTPException

from models.user import User
from services.posts import PostRepository
from utils.auth import verify_token

logger = logging.getLogger(__name__)


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(request: Request) -> User:
    """
    Read the bearer token from the Authorization header and attach the user it
    names to the request. Anything short of a valid token is a 401.
    """
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthenticated("Authentication required")

    token = authorization[len("Bearer "):].strip()
    try:
        user_id = verify_token(token)
    except Exception as e:
        logger.warning("Invalid authentication token: %s", e)
        raise _unauthenticated("Invalid token")

    if not user_id:
        raise _unauthenticated("Invalid token")

    user = User(user_id=user_id)
    request.state.user = user
    return user


async def get_post_repository(request: Request) -> PostRepository:
    """Get the post repository from app state"""
    return request.app.state.post_repository


# Type annotations for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
Posts = Annotated[PostRepository, Depends(get_post_repository)]
