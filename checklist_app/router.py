import streamlit as st

from checklist_app.state.navigation import View
from checklist_app.state.session_slices import render_flash
from checklist_app.views.auth_view import render_auth_view
from checklist_app.views.feed_view import render_feed_view
from checklist_app.views.history_view import render_history_view
from checklist_app.views.todo_view import render_todo_view


def render_router(services):
    router = services.router
    render_flash()

    if router.view == View.AUTH or router.session is None:
        return render_auth_view(services)

    if router.view == View.HISTORY:
        return _render_history(services)

    if router.view == View.PUBLIC_FEED:
        return _render_feed(services)

    return _render_todo(services)


@st.fragment
def _render_todo(services):
    render_todo_view(services)


@st.fragment
def _render_history(services):
    render_history_view(services)


@st.fragment
def _render_feed(services):
    render_feed_view(services)
