import logging

import streamlit as st

from checklist_app.errors import ChecklistError
from checklist_app.state.session_slices import flash

logger = logging.getLogger(__name__)

MODES = ["Masuk", "Daftar"]


def render_auth_view(services):
    st.markdown("<div class='section-title'>Daily Checklist</div>", unsafe_allow_html=True)
    mode = st.radio("Mode", MODES, horizontal=True, key="auth.mode")
    with st.form("auth.form", clear_on_submit=False):
        name = st.text_input("Nama", key="auth.name")
        submitted = st.form_submit_button(mode)
    if not submitted:
        return

    try:
        if mode == MODES[0]:
            user = services.accounts.login(name)
            greeting = f"🎉 Login berhasil! Selamat datang, {user.name}! 💕"
        else:
            user = services.accounts.register(name)
            greeting = f"✨ Akun berhasil dibuat! Selamat datang, {user.name}! 💕"
    except ChecklistError as exc:
        st.error(exc.message)
        return

    services.router.login(user)
    flash("success", greeting)
    st.rerun()
