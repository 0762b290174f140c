from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional
from urllib.parse import quote

from checklist_app.constants import MAX_IMAGE_BYTES, MESSAGES, PUBLIC_FEED_LIMIT
from checklist_app.data.api_client import ApiClient
from checklist_app.errors import (
    Conflict,
    NotFound,
    StoreError,
    StoreUnavailable,
    ValidationError,
)
from checklist_app.models import Comment, PublicTodo, Todo, User

logger = logging.getLogger(__name__)


def _day_iso(day) -> Optional[str]:
    if day is None:
        return None
    if isinstance(day, date):
        return day.isoformat()
    return str(day)


def _clean_text(value) -> str:
    return " ".join(str(value or "").split())


class TodoRepository:
    """Reads and writes a user's todos through the store.

    Every operation logs failures and reports them as ``False``/``None``/``[]``;
    only an unreachable store is raised from ``list_todos``.
    """

    def __init__(self, client: ApiClient, today: Callable[[], date]):
        self.client = client
        self.today = today

    def list_todos(self, user_id: str, day=None) -> List[Todo]:
        try:
            payload = self.client.request(
                "GET",
                "/v1/todos",
                params={"user_id": user_id, "date": _day_iso(day)},
            )
        except StoreUnavailable:
            logger.exception("Store unreachable while listing todos for %s", user_id)
            raise
        except StoreError as exc:
            logger.error("Error fetching todos for %s: %s", user_id, exc)
            return []
        return [Todo.from_row(row) for row in (payload or {}).get("items", [])]

    def add_todo(self, user_id: str, text: str, day=None) -> Optional[Todo]:
        clean = _clean_text(text)
        if not clean:
            raise ValidationError(MESSAGES["empty_text"])
        try:
            row = self.client.request(
                "POST",
                "/v1/todos",
                json={"user_id": user_id, "text": clean, "date": _day_iso(day or self.today())},
            )
        except StoreError as exc:
            logger.error("Error adding todo for %s: %s", user_id, exc)
            return None
        return Todo.from_row(row)

    def toggle_todo(self, todo_id: str, completed: bool) -> bool:
        try:
            self.client.request("PATCH", f"/v1/todos/{todo_id}", json={"completed": bool(completed)})
        except StoreError as exc:
            logger.error("Error toggling todo %s: %s", todo_id, exc)
            return False
        return True

    def delete_todo(self, todo_id: str) -> bool:
        try:
            self.client.request("DELETE", f"/v1/todos/{todo_id}")
        except StoreError as exc:
            logger.error("Error deleting todo %s: %s", todo_id, exc)
            return False
        return True

    def generate_mandatory_todos(self, user_name: str, day=None) -> None:
        try:
            payload = self.client.request(
                "POST",
                "/v1/rpc/generate_mandatory_todos",
                json={"user_name": user_name, "date": _day_iso(day or self.today())},
            )
        except StoreError as exc:
            logger.error("Error generating mandatory todos for %s: %s", user_name, exc)
            return
        created = int((payload or {}).get("created") or 0)
        if created:
            logger.info("Generated %d mandatory todos for %s", created, user_name)


class AccountService:
    def __init__(self, client: ApiClient, todos: TodoRepository):
        self.client = client
        self.todos = todos

    @staticmethod
    def _clean_name(name) -> str:
        clean = str(name or "").strip()
        if not clean:
            raise ValidationError(MESSAGES["empty_name"])
        return clean

    def login(self, name: str) -> User:
        clean = self._clean_name(name)
        try:
            row = self.client.request("GET", f"/v1/users/by-name/{quote(clean, safe='')}")
        except NotFound:
            raise NotFound(MESSAGES["user_not_found"])
        except StoreError as exc:
            logger.error("Login error for %s: %s", clean, exc)
            raise StoreError(MESSAGES["store_failed"], detail=exc.message)
        user = User.from_row(row)
        self.todos.generate_mandatory_todos(user.name)
        return user

    def register(self, name: str) -> User:
        clean = self._clean_name(name)
        try:
            row = self.client.request("POST", "/v1/users", json={"name": clean})
        except Conflict:
            raise Conflict(MESSAGES["name_taken"])
        except StoreError as exc:
            logger.error("Registration error for %s: %s", clean, exc)
            raise StoreError(MESSAGES["store_failed"], detail=exc.message)
        user = User.from_row(row)
        self.todos.generate_mandatory_todos(user.name)
        return user


class FeedRepository:
    def __init__(self, client: ApiClient):
        self.client = client

    def list_public_todos(self) -> List[PublicTodo]:
        try:
            payload = self.client.request("GET", "/v1/public_todos", params={"limit": PUBLIC_FEED_LIMIT})
        except StoreError as exc:
            logger.error("Error loading public todos: %s", exc)
            return []
        rows = (payload or {}).get("items", [])[:PUBLIC_FEED_LIMIT]
        return [PublicTodo.from_row(row) for row in rows]


class CommentRepository:
    def __init__(self, client: ApiClient):
        self.client = client

    def list_comments(self, todo_id: str) -> List[Comment]:
        try:
            payload = self.client.request("GET", f"/v1/todos/{todo_id}/comments")
        except StoreError as exc:
            logger.error("Error loading comments for %s: %s", todo_id, exc)
            return []
        items = [Comment.from_row(row) for row in (payload or {}).get("items", [])]
        return sorted(items, key=lambda item: item.created_at)

    def add_comment(self, todo_id: str, user_name: str, text: str) -> Optional[Comment]:
        clean = str(text or "").strip()
        if not clean:
            raise ValidationError(MESSAGES["empty_comment"])
        try:
            row = self.client.request(
                "POST",
                f"/v1/todos/{todo_id}/comments",
                json={"user_name": user_name, "comment": clean},
            )
        except StoreError as exc:
            logger.error("Error adding comment to %s: %s", todo_id, exc)
            return None
        return Comment.from_row(row)


def validate_image(content_type: str | None, size: int) -> None:
    if not str(content_type or "").startswith("image/"):
        raise ValidationError(MESSAGES["not_image"])
    if size > MAX_IMAGE_BYTES:
        raise ValidationError(MESSAGES["image_too_large"])


class ImageRepository:
    def __init__(self, client: ApiClient):
        self.client = client

    def upload_proof(self, todo_id: str, file_name: str, content_type: str, data: bytes) -> Optional[str]:
        validate_image(content_type, len(data or b""))
        try:
            payload = self.client.request(
                "POST",
                f"/v1/todos/{todo_id}/image",
                files={"file": (file_name or "upload", data, content_type)},
            )
        except StoreError as exc:
            logger.error("Error uploading image for %s: %s", todo_id, exc)
            return None
        return (payload or {}).get("image_url")

    def remove_proof(self, todo_id: str) -> bool:
        try:
            self.client.request("DELETE", f"/v1/todos/{todo_id}/image")
        except StoreError as exc:
            logger.error("Error deleting image for %s: %s", todo_id, exc)
            return False
        return True
