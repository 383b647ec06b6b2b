import html
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import bleach

from utils.slug import slugify


class PostValidationError(ValueError):
    """Raised by a repository when post data cannot be stored as given"""


def clean_post_fields(fields: Dict[str, Any], derive_slug: bool = True) -> Dict[str, Any]:
    """
    Sanitize user supplied post fields before they are stored

    Title and content have any markup stripped. A title or content that is empty
    once cleaned is rejected. With derive_slug set, a missing slug is built from
    the title.

    Raises:
        PostValidationError: If a text field is blank after cleaning
    """
    cleaned = dict(fields)
    for name in ("title", "content"):
        if name in cleaned and cleaned[name] is not None:
            # bleach escapes the text it keeps, so undo that after stripping tags
            value = html.unescape(bleach.clean(cleaned[name], tags=set(), strip=True)).strip()
            if not value:
                raise PostValidationError(f"{name} must not be empty")
            cleaned[name] = value

    slug = slugify(cleaned["slug"]) if cleaned.get("slug") else ""
    if not slug and derive_slug and cleaned.get("title"):
        slug = slugify(cleaned["title"])
    if slug:
        cleaned["slug"] = slug
    else:
        cleaned.pop("slug", None)

    return cleaned


class PostRepository(ABC):
    """Storage operations the post routes depend on"""

    @abstractmethod
    def create_post(self, author_uid: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Store a new post and return it with its id"""

    @abstractmethod
    def list_posts(self, category: Optional[str], page: int, limit: int) -> List[Dict[str, Any]]:
        """Return one page of posts, newest first, with authors populated"""

    @abstractmethod
    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        """Return a post with its author populated, or None if it does not exist"""

    @abstractmethod
    def update_post(self, post_id: str, author_uid: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Apply changes to a post owned by author_uid. Returns None both when the post
        does not exist and when it belongs to someone else.
        """

    @abstractmethod
    def delete_post(self, post_id: str) -> bool:
        """Delete a post by id, returning whether anything was removed"""
