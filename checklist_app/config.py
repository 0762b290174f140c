from __future__ import annotations

import os

import streamlit as st

from checklist_app.constants import DEFAULT_TIMEZONE

ENV_PATH = os.path.join(os.path.dirname(__file__), "..", ".env")
DEFAULT_SESSION_FILE = os.path.join(os.path.expanduser("~"), ".daily_checklist", "session.json")

ENV_FALLBACK_KEYS = {
    ("app", "API_BASE_URL"): "API_BASE_URL",
    ("app", "BACKEND_SESSION_SECRET"): "BACKEND_SESSION_SECRET",
    ("app", "APP_TIMEZONE"): "APP_TIMEZONE",
    ("app", "SESSION_FILE"): "SESSION_FILE",
}


def load_local_env():
    if not os.path.exists(ENV_PATH):
        return
    with open(ENV_PATH, "r", encoding="utf-8") as env_file:
        for raw_line in env_file:
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def get_secret(path, default=None):
    env_key = ENV_FALLBACK_KEYS.get(tuple(path))
    if env_key:
        env_value = os.getenv(env_key)
        if env_value:
            return env_value
    try:
        current = st.secrets
        for key in path:
            if key not in current:
                return default
            current = current[key]
    except (FileNotFoundError, KeyError, TypeError):
        # No secrets.toml at all behaves like an empty one.
        return default
    return current


def api_base_url():
    return str(get_secret(("app", "API_BASE_URL")) or "").strip()


def backend_token():
    return str(get_secret(("app", "BACKEND_SESSION_SECRET")) or "").strip()


def app_timezone():
    return str(get_secret(("app", "APP_TIMEZONE")) or DEFAULT_TIMEZONE).strip()


def session_file():
    return str(get_secret(("app", "SESSION_FILE")) or DEFAULT_SESSION_FILE).strip()
