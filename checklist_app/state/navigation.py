from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from checklist_app.context import SessionContext
from checklist_app.errors import InvalidTransition
from checklist_app.models import User
from checklist_app.state.session_store import SessionStore

logger = logging.getLogger(__name__)


class View(str, Enum):
    AUTH = "auth"
    TODO = "todo"
    HISTORY = "history"
    PUBLIC_FEED = "public"


TRANSITIONS = {
    (View.AUTH, "login"): View.TODO,
    (View.TODO, "logout"): View.AUTH,
    (View.TODO, "show_history"): View.HISTORY,
    (View.HISTORY, "back"): View.TODO,
    (View.TODO, "show_public"): View.PUBLIC_FEED,
    (View.PUBLIC_FEED, "back"): View.TODO,
}


class ViewRouter:
    """Screen state plus the session it belongs to."""

    def __init__(self, session_store: SessionStore, session_factory: Callable[[User], SessionContext]):
        self.session_store = session_store
        self.session_factory = session_factory
        self.view = View.AUTH
        self.session: Optional[SessionContext] = None

    def _move(self, event: str) -> View:
        target = TRANSITIONS.get((self.view, event))
        if target is None:
            raise InvalidTransition(f"Cannot {event} from {self.view.value}")
        logger.debug("View %s -> %s", self.view.value, target.value)
        self.view = target
        return target

    def restore(self) -> View:
        user = self.session_store.load_user()
        if user is None:
            self.view = View.AUTH
            return self.view
        self.session = self.session_factory(user)
        self.view = View.TODO
        return self.view

    def login(self, user: User) -> SessionContext:
        if (self.view, "login") not in TRANSITIONS:
            raise InvalidTransition(f"Cannot login from {self.view.value}")
        self.session_store.save_user(user)
        self.session = self.session_factory(user)
        self._move("login")
        return self.session

    def logout(self) -> None:
        self._move("logout")
        if self.session is not None:
            self.session.close()
        self.session = None
        self.session_store.clear_user()

    def show_history(self) -> View:
        return self._move("show_history")

    def show_public(self) -> View:
        return self._move("show_public")

    def back(self) -> View:
        return self._move("back")
