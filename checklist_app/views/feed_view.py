import streamlit as st

from checklist_app.constants import MESSAGES
from checklist_app.errors import ValidationError
from checklist_app.history import group_feed_by_date


def _render_comments(services, todo, user_name):
    comments = services.comments.list_comments(todo.id)
    for comment in comments:
        st.markdown(f"**{comment.user_name}** · {comment.created_at[11:16]}  \n{comment.comment}")
    with st.form(f"feed.comment_form.{todo.id}", clear_on_submit=True):
        text = st.text_input("Komentar", key=f"feed.comment.{todo.id}")
        if not st.form_submit_button("Kirim"):
            return
    try:
        created = services.comments.add_comment(todo.id, user_name, text)
    except ValidationError as exc:
        st.error(exc.message)
        return
    if created is None:
        st.error(MESSAGES["comment_failed"])
        return
    st.rerun()


def render_feed_view(services):
    router = services.router
    session = router.session

    cols = st.columns([0.2, 0.8])
    if cols[0].button("← Kembali", key="feed.back"):
        router.back()
        st.rerun()
    cols[1].markdown("<div class='section-title'>Aktivitas Publik</div>", unsafe_allow_html=True)

    items = services.feed.list_public_todos()
    if not items:
        st.info("Belum ada aktivitas publik.")
        return

    for day, day_items in group_feed_by_date(items):
        st.markdown(f"<div class='small-label'>{day}</div>", unsafe_allow_html=True)
        for todo in day_items:
            owner = "Kamu" if todo.user_name == session.user_name else todo.user_name
            with st.container(border=True):
                st.markdown(f"✅ **{todo.text}** · {owner}")
                if todo.image_url:
                    st.image(todo.image_url, width=200)
                # Comments load only for the items whose thread is open.
                if st.toggle("💬 Komentar", key=f"feed.comments.{todo.id}"):
                    _render_comments(services, todo, session.user_name)
