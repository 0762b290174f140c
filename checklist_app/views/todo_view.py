import streamlit as st

from checklist_app.board import TodoBoard
from checklist_app.metrics import motivation_message
from checklist_app.reconciler import completed_count
from checklist_app.state.session_slices import flash, render_flash

BOARD_KEY = "todo.board"


def _reload(board):
    _report(board.reload(), quiet=True)
    for todo in board.todos:
        for prefix in ("mandatory", "custom"):
            st.session_state.pop(_checkbox_key(prefix, todo.id), None)


def _get_board(services):
    session = services.router.session
    board = st.session_state.get(BOARD_KEY)
    if board is None or board.session is not session:
        board = TodoBoard(session, services.todos, services.images)
        st.session_state[BOARD_KEY] = board
        _reload(board)
    elif session.needs_reload or board.day != session.today().isoformat():
        _reload(board)
    return board


def _report(result, success_message=None, quiet=False):
    if not result.ok:
        st.error(result.message)
        return False
    if success_message and not quiet:
        flash("success", success_message)
    return True


def _checkbox_key(prefix, todo_id):
    return f"todo.{prefix}.{todo_id}"


def _seed_checkbox(key, stored):
    if key not in st.session_state:
        st.session_state[key] = stored


def _on_toggle(board, todo_id, key):
    checked = bool(st.session_state[key])
    result = board.toggle(todo_id, checked)
    if not result.ok:
        # Put the box back so the failed call is not sent again on the next rerun.
        st.session_state[key] = not checked
        flash("error", result.message)
    elif checked:
        flash("success", "🎉 Amazing! Kegiatan Selesai!")


def _render_checklist(board):
    items = board.checklist()
    st.markdown(
        f"<div class='small-label'>Checklist Wajib Harian 💪 {completed_count(items)}/{len(items)} ✨</div>",
        unsafe_allow_html=True,
    )
    for index, item in enumerate(items, start=1):
        label = f"{index}. {item.entry.text}"
        if not item.can_toggle:
            st.checkbox(label, value=False, key=f"todo.mandatory.{item.entry.key}.none", disabled=True)
        else:
            key = _checkbox_key("mandatory", item.todo.id)
            _seed_checkbox(key, item.is_completed)
            st.checkbox(label, key=key, on_change=_on_toggle, args=(board, item.todo.id, key))
        st.caption(item.entry.detail)


def _render_custom(board):
    st.markdown("<div class='small-label'>Kegiatan tambahan</div>", unsafe_allow_html=True)
    with st.form("todo.add_form", clear_on_submit=True):
        text = st.text_input("Kegiatan baru", key="todo.new_text")
        if st.form_submit_button("Tambah"):
            if _report(board.add(text), "✅ Kegiatan Ditambahkan! Semangat menyelesaikannya! 💪"):
                st.rerun()

    for todo in board.custom_todos:
        cols = st.columns([0.7, 0.15, 0.15])
        key = _checkbox_key("custom", todo.id)
        _seed_checkbox(key, todo.completed)
        cols[0].checkbox(todo.text, key=key, on_change=_on_toggle, args=(board, todo.id, key))
        if cols[2].button("Hapus", key=f"todo.delete.{todo.id}"):
            if _report(board.delete(todo.id), "🗑️ Kegiatan telah dihapus dari list"):
                st.rerun()
        with cols[1].popover("📸"):
            _render_image_controls(board, todo)


def _render_image_controls(board, todo):
    if todo.image_url:
        st.image(todo.image_url)
        if st.button("Hapus foto", key=f"todo.image.delete.{todo.id}"):
            if _report(board.remove_image(todo.id), "🗑️ Gambar berhasil dihapus"):
                st.rerun()
    upload = st.file_uploader("Bukti foto", type=None, key=f"todo.image.upload.{todo.id}")
    if upload is not None and st.button("Upload", key=f"todo.image.submit.{todo.id}"):
        result = board.attach_image(todo.id, upload.name, upload.type, upload.getvalue())
        if _report(result, "✅ Bukti foto berhasil diupload! 📸"):
            st.rerun()


def render_todo_view(services):
    router = services.router
    session = router.session
    board = _get_board(services)
    render_flash()

    header_cols = st.columns([0.55, 0.15, 0.15, 0.15])
    header_cols[0].markdown(
        f"<div class='section-title'>Halo, {session.user_name}! · {board.day}</div>",
        unsafe_allow_html=True,
    )
    if header_cols[1].button("Riwayat", key="todo.show_history"):
        router.show_history()
        st.rerun()
    if header_cols[2].button("Publik", key="todo.show_public"):
        router.show_public()
        st.rerun()
    if header_cols[3].button("Keluar", key="todo.logout"):
        router.logout()
        st.session_state.pop(BOARD_KEY, None)
        st.rerun()

    completed, total, percentage = board.stats()
    st.progress(percentage / 100, text=f"{completed}/{total} selesai · {percentage}%")
    st.caption(motivation_message(percentage))

    _render_checklist(board)
    _render_custom(board)
