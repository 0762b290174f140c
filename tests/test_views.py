from streamlit.testing.v1 import AppTest

from checklist_app.constants import MESSAGES

TODO_SCRIPT = """
from datetime import date
from types import SimpleNamespace

import streamlit as st

from checklist_app.context import SessionContext
from checklist_app.models import Todo, User
from checklist_app.views.todo_view import render_todo_view


class FlakyTodos:
    def __init__(self):
        self.toggles = []
        self.succeed = False

    def list_todos(self, user_id, day=None):
        return [
            Todo(
                id="t1",
                user_id="u1",
                text="Baca buku",
                is_mandatory=False,
                completed=False,
                date="2024-05-01",
                created_at="2024-05-01T08:00:00+00:00",
            )
        ]

    def toggle_todo(self, todo_id, completed):
        self.toggles.append((todo_id, completed))
        return self.succeed


if "fake.services" not in st.session_state:
    session = SessionContext(user=User(id="u1", name="Ana"), today=lambda: date(2024, 5, 1), now=None)
    st.session_state["fake.todos"] = FlakyTodos()
    st.session_state["fake.services"] = SimpleNamespace(
        router=SimpleNamespace(session=session),
        todos=st.session_state["fake.todos"],
        images=None,
    )

render_todo_view(st.session_state["fake.services"])
"""

FEED_SCRIPT = """
from types import SimpleNamespace

import streamlit as st

from checklist_app.models import PublicTodo
from checklist_app.views.feed_view import render_feed_view


class CountingComments:
    def __init__(self):
        self.loads = []

    def list_comments(self, todo_id):
        self.loads.append(todo_id)
        return []

    def add_comment(self, todo_id, user_name, text):
        return None


class Feed:
    def list_public_todos(self):
        return [
            PublicTodo(
                id=f"t{index}",
                text=f"Todo {index}",
                is_mandatory=False,
                completed=True,
                date="2024-05-01",
                created_at="2024-05-01T08:00:00+00:00",
                user_name="Budi",
            )
            for index in range(3)
        ]


if "fake.services" not in st.session_state:
    st.session_state["fake.comments"] = CountingComments()
    st.session_state["fake.services"] = SimpleNamespace(
        router=SimpleNamespace(session=SimpleNamespace(user_name="Ana"), back=lambda: None),
        feed=Feed(),
        comments=st.session_state["fake.comments"],
    )

render_feed_view(st.session_state["fake.services"])
"""


def test_failed_toggle_resets_the_box_and_is_not_resent():
    at = AppTest.from_string(TODO_SCRIPT, default_timeout=10).run()
    assert not at.exception

    at.checkbox(key="todo.custom.t1").check().run()

    todos = at.session_state["fake.todos"]
    assert todos.toggles == [("t1", True)]
    assert at.checkbox(key="todo.custom.t1").value is False
    assert [error.value for error in at.error] == [MESSAGES["toggle_failed"]]

    at.run()
    assert todos.toggles == [("t1", True)]
    assert not at.error


def test_confirmed_toggle_keeps_the_box_checked():
    at = AppTest.from_string(TODO_SCRIPT, default_timeout=10).run()
    at.session_state["fake.todos"].succeed = True

    at.checkbox(key="todo.custom.t1").check().run()

    assert at.session_state["fake.todos"].toggles == [("t1", True)]
    assert at.checkbox(key="todo.custom.t1").value is True
    assert at.session_state["todo.board"].todos[0].completed
    assert not at.error


def test_feed_loads_comments_only_for_open_threads():
    at = AppTest.from_string(FEED_SCRIPT, default_timeout=10).run()
    assert not at.exception

    comments = at.session_state["fake.comments"]
    assert comments.loads == []

    at.toggle(key="feed.comments.t1").set_value(True).run()

    assert comments.loads == ["t1"]
