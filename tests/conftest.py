"""Pytest configuration and fixtures."""

import itertools
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from dependencies import get_post_repository
from main import app
from services.posts import PostRepository, clean_post_fields
from utils.auth import generate_token


class InMemoryPostRepository(PostRepository):
    """Dict backed repository that records every call it receives."""

    def __init__(self, users: Optional[Dict[str, Dict[str, Any]]] = None):
        self.posts: Dict[str, Dict[str, Any]] = {}
        self.users = users or {}
        self.calls: List[str] = []
        self._ids = itertools.count(1)
        self._clock = itertools.count(1)

    def _timestamp(self) -> str:
        return f"2025-01-01T00:00:{next(self._clock):02d}"

    def _populate(self, post: Dict[str, Any]) -> Dict[str, Any]:
        uid = post["author"]
        user = self.users.get(uid, {})
        return {**post, "author": {"id": uid, "username": user.get("username"), "email": user.get("email")}}

    def create_post(self, author_uid, fields):
        self.calls.append("create_post")
        cleaned = clean_post_fields(fields)
        now = self._timestamp()
        post = {
            "id": f"post-{next(self._ids)}",
            "title": cleaned["title"],
            "content": cleaned["content"],
            "slug": cleaned.get("slug"),
            "category": cleaned.get("category"),
            "author": author_uid,
            "created_at": now,
            "updated_at": now,
        }
        self.posts[post["id"]] = post
        return self._populate(post)

    def list_posts(self, category, page, limit):
        self.calls.append("list_posts")
        posts = [p for p in self.posts.values() if not category or p.get("category") == category]
        posts.sort(key=lambda p: p["created_at"], reverse=True)
        start = (page - 1) * limit
        return [self._populate(p) for p in posts[start:start + limit]]

    def get_post(self, post_id):
        self.calls.append("get_post")
        post = self.posts.get(post_id)
        return self._populate(post) if post else None

    def update_post(self, post_id, author_uid, changes):
        self.calls.append("update_post")
        post = self.posts.get(post_id)
        if post is None or post["author"] != author_uid:
            return None
        post.update(clean_post_fields(changes, derive_slug=False))
        post["updated_at"] = self._timestamp()
        return self._populate(post)

    def delete_post(self, post_id):
        self.calls.append("delete_post")
        return self.posts.pop(post_id, None) is not None


@pytest.fixture
def repo():
    return InMemoryPostRepository(users={
        "user-1": {"username": "testuser", "email": "test@example.com"},
        "user-2": {"username": "otheruser", "email": "other@example.com"},
    })


@pytest.fixture
def client(repo):
    app.dependency_overrides[get_post_repository] = lambda: repo
    # Not entered as a context manager, so the Firebase lifespan never runs
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {generate_token('user-1')}"}


@pytest.fixture
def other_auth_headers():
    return {"Authorization": f"Bearer {generate_token('user-2')}"}


@pytest.fixture
def existing_post(repo):
    return repo.create_post("user-1", {"title": "Test Post", "content": "Test content", "category": "cat-1"})
