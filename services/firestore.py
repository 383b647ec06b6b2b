import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

import firebase_admin
from firebase_admin import firestore as fs
from google.cloud import firestore
from google.cloud.firestore_v1 import FieldFilter

from models.user import Author
from services.posts import PostRepository, clean_post_fields

logger = logging.getLogger(__name__)

POSTS = "posts"
USERS = "users"


class FirestorePostRepository(PostRepository):
    def __init__(self, app: Optional[firebase_admin.App] = None, client=None):
        self.db = client if client is not None else fs.client(app)

    def collection(self, name: str):
        return self.db.collection(name)

    def _to_post(self, doc) -> Dict[str, Any]:
        post_data = doc.to_dict()
        post_data["id"] = doc.id
        return post_data

    def _get_authors(self, author_uids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """Look up each distinct author once"""
        authors = {}
        for uid in set(author_uids):
            if not uid:
                continue
            snapshot = self.collection(USERS).document(uid).get()
            user_data = snapshot.to_dict() if snapshot.exists else {}
            authors[uid] = Author(
                id=uid,
                username=user_data.get("username"),
                email=user_data.get("email"),
            ).model_dump()
        return authors

    def _populate_authors(self, posts: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        authors = self._get_authors(post.get("author") for post in posts)
        for post in posts:
            uid = post.get("author")
            if uid in authors:
                post["author"] = authors[uid]
        return posts

    def create_post(self, author_uid: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new post owned by author_uid"""
        cleaned = clean_post_fields(fields)
        now = datetime.now(timezone.utc).isoformat()

        new_post_ref = self.collection(POSTS).document()
        new_post_data = {
            "title": cleaned["title"],
            "content": cleaned["content"],
            "slug": cleaned.get("slug"),
            "category": cleaned.get("category"),
            "author": author_uid,
            "created_at": now,
            "updated_at": now,
        }
        new_post_ref.set(new_post_data)
        logger.info("Created post %s for author %s", new_post_ref.id, author_uid)

        return self._populate_authors([{"id": new_post_ref.id, **new_post_data}])[0]

    def list_posts(self, category: Optional[str], page: int, limit: int) -> List[Dict[str, Any]]:
        """Get a page of posts sorted by creation date descending"""
        query = self.collection(POSTS)
        if category:
            query = query.where(filter=FieldFilter("category", "==", category))

        posts_ref = query.order_by(
            "created_at", direction=firestore.Query.DESCENDING
        ).offset((page - 1) * limit).limit(limit).stream()

        posts = [self._to_post(doc) for doc in posts_ref]
        return self._populate_authors(posts)

    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        """Get a post by ID"""
        snapshot = self.collection(POSTS).document(post_id).get()
        if not snapshot.exists:
            return None
        return self._populate_authors([self._to_post(snapshot)])[0]

    def update_post(self, post_id: str, author_uid: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Update a post, only if author_uid wrote it"""
        post_ref = self.collection(POSTS).document(post_id)
        snapshot = post_ref.get()
        if not snapshot.exists:
            return None

        post_data = snapshot.to_dict()

        # Check if this post belongs to the user
        if post_data.get("author") != author_uid:
            return None

        updates = clean_post_fields(changes, derive_slug=False)
        updates["updated_at"] = datetime.now(timezone.utc).isoformat()
        post_ref.update(updates)

        return self._populate_authors([{"id": post_id, **post_data, **updates}])[0]

    def delete_post(self, post_id: str) -> bool:
        """Delete a post"""
        post_ref = self.collection(POSTS).document(post_id)
        if not post_ref.get().exists:
            return False

        post_ref.delete()
        logger.info("Deleted post %s", post_id)
        return True
