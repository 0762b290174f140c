from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from checklist_app.constants import MESSAGES
from checklist_app.context import SessionContext
from checklist_app.data.repositories import ImageRepository, TodoRepository
from checklist_app.errors import StoreUnavailable, ValidationError
from checklist_app.metrics import completion_stats
from checklist_app.models import Todo
from checklist_app.reconciler import ChecklistItem, reconcile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    message: str = ""
    todo: Optional[Todo] = None


def _utc_stamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


class TodoBoard:
    """Today's todos for one session.

    Mutations go to the store first; the local list changes only after the
    store confirms and only while the session is still open.
    """

    def __init__(self, session: SessionContext, todos: TodoRepository, images: ImageRepository | None = None):
        self.session = session
        self.todos_repo = todos
        self.images_repo = images
        self.todos: List[Todo] = []
        self.day = session.today().isoformat()

    def _stale(self) -> bool:
        if not self.session.active:
            logger.info("Dropping result for closed session %s", self.session.user_name)
            return True
        return False

    def reload(self) -> CommandResult:
        day = self.session.today().isoformat()
        try:
            items = self.todos_repo.list_todos(self.session.user_id, day)
        except StoreUnavailable:
            if not self._stale():
                self.todos = []
            return CommandResult(False, MESSAGES["load_failed"])
        if self._stale():
            return CommandResult(False, MESSAGES["stale_session"])
        self.day = day
        self.todos = list(items)
        self.session.needs_reload = False
        return CommandResult(True)

    def add(self, text: str) -> CommandResult:
        try:
            todo = self.todos_repo.add_todo(self.session.user_id, text, self.session.today())
        except ValidationError as exc:
            return CommandResult(False, exc.message)
        if todo is None:
            return CommandResult(False, MESSAGES["add_failed"])
        if self._stale():
            return CommandResult(False, MESSAGES["stale_session"])
        self.todos = self.todos + [todo]
        return CommandResult(True, todo=todo)

    def _find(self, todo_id: str) -> Optional[Todo]:
        for todo in self.todos:
            if todo.id == todo_id:
                return todo
        return None

    def _replace(self, updated: Todo) -> None:
        self.todos = [updated if todo.id == updated.id else todo for todo in self.todos]

    def toggle(self, todo_id: str, completed: bool) -> CommandResult:
        if not self.todos_repo.toggle_todo(todo_id, completed):
            return CommandResult(False, MESSAGES["toggle_failed"])
        if self._stale():
            return CommandResult(False, MESSAGES["stale_session"])
        current = self._find(todo_id)
        if current is None:
            return CommandResult(True)
        updated = current.with_completion(completed, _utc_stamp() if completed else None)
        self._replace(updated)
        return CommandResult(True, todo=updated)

    def toggle_item(self, item: ChecklistItem) -> CommandResult:
        if item.todo is None:
            return CommandResult(False, MESSAGES["no_backing_row"])
        return self.toggle(item.todo.id, not item.is_completed)

    def delete(self, todo_id: str) -> CommandResult:
        current = self._find(todo_id)
        if current is not None and current.is_mandatory:
            return CommandResult(False, MESSAGES["delete_mandatory"])
        if not self.todos_repo.delete_todo(todo_id):
            return CommandResult(False, MESSAGES["delete_failed"])
        if self._stale():
            return CommandResult(False, MESSAGES["stale_session"])
        self.todos = [todo for todo in self.todos if todo.id != todo_id]
        return CommandResult(True)

    def attach_image(self, todo_id: str, file_name: str, content_type: str, data: bytes) -> CommandResult:
        if self.images_repo is None:
            return CommandResult(False, MESSAGES["upload_failed"])
        try:
            image_url = self.images_repo.upload_proof(todo_id, file_name, content_type, data)
        except ValidationError as exc:
            return CommandResult(False, exc.message)
        if not image_url:
            return CommandResult(False, MESSAGES["upload_failed"])
        if self._stale():
            return CommandResult(False, MESSAGES["stale_session"])
        current = self._find(todo_id)
        if current is None:
            return CommandResult(True)
        updated = current.with_image(image_url)
        self._replace(updated)
        return CommandResult(True, todo=updated)

    def remove_image(self, todo_id: str) -> CommandResult:
        if self.images_repo is None or not self.images_repo.remove_proof(todo_id):
            return CommandResult(False, MESSAGES["image_delete_failed"])
        if self._stale():
            return CommandResult(False, MESSAGES["stale_session"])
        current = self._find(todo_id)
        if current is not None:
            self._replace(current.with_image(None))
        return CommandResult(True)

    @property
    def mandatory_todos(self) -> List[Todo]:
        return [todo for todo in self.todos if todo.is_mandatory]

    @property
    def custom_todos(self) -> List[Todo]:
        return [todo for todo in self.todos if not todo.is_mandatory]

    def checklist(self) -> List[ChecklistItem]:
        return reconcile(self.todos)

    def stats(self):
        return completion_stats(self.todos)
