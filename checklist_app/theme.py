import streamlit as st

THEME_PRESETS = {
    "light": {
        "bg_main": "#f7f3ed",
        "bg_glow": "#eee2d3",
        "bg_card": "#fff9f1",
        "border": "#c9b3e5",
        "text_main": "#1b1b1b",
        "text_soft": "#5d5d5d",
        "accent": "#8d6fb8",
        "done_bg": "rgba(141, 111, 184, 0.10)",
    },
    "dark": {
        "bg_main": "#121017",
        "bg_glow": "#1f1a2a",
        "bg_card": "#1e1a27",
        "border": "#5b4f70",
        "text_main": "#f3edf9",
        "text_soft": "#c8bbd8",
        "accent": "#8e79af",
        "done_bg": "rgba(142, 121, 175, 0.16)",
    },
}


def ensure_theme_state():
    if st.session_state.get("ui_theme") not in THEME_PRESETS:
        st.session_state["ui_theme"] = "light"
    return st.session_state["ui_theme"]


def get_active_theme():
    name = ensure_theme_state()
    return name, THEME_PRESETS[name]


def toggle_theme():
    name = ensure_theme_state()
    st.session_state["ui_theme"] = "dark" if name == "light" else "light"


def inject_theme_css() -> dict:
    _, theme = get_active_theme()
    st.markdown(
        f"""
<style>
:root {{
    --bg-main: {theme['bg_main']};
    --bg-glow: {theme['bg_glow']};
    --bg-card: {theme['bg_card']};
    --border: {theme['border']};
    --text-main: {theme['text_main']};
    --text-soft: {theme['text_soft']};
    --accent: {theme['accent']};
    --done-bg: {theme['done_bg']};
}}

.stApp {{
    background: radial-gradient(1200px 800px at 20% 0%, var(--bg-glow) 0%, var(--bg-main) 58%);
    color: var(--text-main);
}}

.section-title {{
    font-size: 18px;
    font-weight: 600;
    margin: 0 0 8px 0;
    color: var(--text-main);
}}

.small-label {{
    color: var(--text-soft);
    font-size: 12px;
    letter-spacing: 0.2px;
    margin: 12px 0 6px 0;
}}

div[data-testid="stVerticalBlockBorderWrapper"] {{
    background: var(--bg-card);
    border-color: var(--border) !important;
    border-radius: 14px;
}}

div[data-testid="stProgress"] > div > div > div > div {{
    background-color: var(--accent);
}}
</style>
""",
        unsafe_allow_html=True,
    )
    return theme
