from __future__ import annotations

from dataclasses import dataclass
from functools import partial

from checklist_app.clock import local_now, local_today
from checklist_app.context import SessionContext
from checklist_app.data.api_client import ApiClient
from checklist_app.data.repositories import (
    AccountService,
    CommentRepository,
    FeedRepository,
    ImageRepository,
    TodoRepository,
)
from checklist_app.models import User
from checklist_app.state.navigation import ViewRouter
from checklist_app.state.session_store import SessionStore


@dataclass
class Services:
    client: ApiClient
    todos: TodoRepository
    accounts: AccountService
    feed: FeedRepository
    comments: CommentRepository
    images: ImageRepository
    router: ViewRouter
    timezone_name: str

    def new_session(self, user: User, start_scheduler: bool = True) -> SessionContext:
        session = SessionContext(
            user=user,
            today=partial(local_today, self.timezone_name),
            now=partial(local_now, self.timezone_name),
        )
        if start_scheduler:
            session.start_midnight_rollover(self.todos)
        return session


def build_services(base_url, token, timezone_name, session_path, http_session=None, start_scheduler=True):
    services = None

    def _current_user_id():
        if services is None or services.router is None or services.router.session is None:
            return None
        return services.router.session.user_id

    client = ApiClient(base_url, token, user_id_getter=_current_user_id, session=http_session)
    todos = TodoRepository(client, today=partial(local_today, timezone_name))
    services = Services(
        client=client,
        todos=todos,
        accounts=AccountService(client, todos),
        feed=FeedRepository(client),
        comments=CommentRepository(client),
        images=ImageRepository(client),
        router=None,
        timezone_name=timezone_name,
    )
    services.router = ViewRouter(
        SessionStore(session_path),
        lambda user: services.new_session(user, start_scheduler=start_scheduler),
    )
    return services
