import streamlit as st

from checklist_app import config
from checklist_app.logging_config import configure_logging
from checklist_app.router import render_router
from checklist_app.services import build_services
from checklist_app.theme import get_active_theme, inject_theme_css, toggle_theme

configure_logging()
config.load_local_env()

st.set_page_config(page_title="Daily Checklist", page_icon="✅", layout="centered")

SERVICES_KEY = "app.services"


def get_services():
    # One router and session per browser session; the persisted identity file is shared.
    services = st.session_state.get(SERVICES_KEY)
    if services is None:
        services = build_services(
            config.api_base_url(),
            config.backend_token(),
            config.app_timezone(),
            config.session_file(),
        )
        services.router.restore()
        st.session_state[SERVICES_KEY] = services
    return services


def render_theme_toggle():
    name, _ = get_active_theme()
    label = "☀️ Light" if name == "dark" else "🌙 Dark"
    if st.sidebar.button(label, key="app.theme_toggle"):
        toggle_theme()
        st.rerun()


def main():
    inject_theme_css()
    render_theme_toggle()
    services = get_services()
    if not services.client.is_enabled():
        st.error("Store is not configured. Set API_BASE_URL and BACKEND_SESSION_SECRET.")
        st.stop()
    render_router(services)


main()
