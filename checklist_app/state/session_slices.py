import streamlit as st


PREFIX = "slice"


def get_slice(slice_name):
    key = f"{PREFIX}.{slice_name}"
    if key not in st.session_state:
        st.session_state[key] = {}
    return st.session_state[key]


def set_value(slice_name, name, value):
    payload = get_slice(slice_name)
    payload[name] = value


def pop_value(slice_name, name, default=None):
    payload = get_slice(slice_name)
    return payload.pop(name, default)


def flash(kind, message):
    """Queue a message for the next rerun; ``kind`` is success/error/info."""
    set_value("flash", "message", (kind, message))


def render_flash():
    queued = pop_value("flash", "message")
    if not queued:
        return
    kind, message = queued
    renderer = {"success": st.success, "error": st.error}.get(kind, st.info)
    renderer(message)
