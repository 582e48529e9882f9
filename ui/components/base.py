import html

import streamlit as st

PRIMARY_ACCENT = "#4F46E5"  # indigo-600
GREEN = "#059669"  # emerald-600
RED = "#DC2626"  # red-600
RED_SOFT_BG = "#FEF2F2"
INDIGO_SOFT_BG = "#EEF2FF"


def inject_base_css():
    """Streamlit rebuilds the page every run, so app.main() calls this once per run."""
    st.markdown(
        f"""
        <style>
        .fatal-banner {{
            position:fixed; top:0; left:0; right:0; z-index:999999;
            padding:1rem; background:{RED}; color:#fff; text-align:center; font-weight:600;
        }}
        .test-warning {{
            text-align:center; font-size:.85rem; font-weight:700; color:{RED};
            background:{RED_SOFT_BG}; border:1px solid #FECACA; border-radius:10px;
            padding:.5rem; margin-bottom:1rem;
        }}
        .session-box {{
            font-size:.75rem; color:{PRIMARY_ACCENT}; background:{INDIGO_SOFT_BG};
            border:1px solid #C7D2FE; border-radius:10px; padding:.6rem .8rem;
            margin-bottom:1rem; word-break:break-all;
        }}
        </style>
        """,
        unsafe_allow_html=True,
    )


def fatal_banner(message: str):
    """Top-of-page banner with no dismiss control; the active view still renders below it."""
    st.markdown(f'<div class="fatal-banner">{html.escape(message)}</div>', unsafe_allow_html=True)


def warning_note(message: str):
    st.markdown(f'<p class="test-warning">{html.escape(message)}</p>', unsafe_allow_html=True)


def session_box(label: str, value: str):
    st.markdown(
        f'<div class="session-box"><b>{html.escape(label)}:</b> {html.escape(value)}</div>',
        unsafe_allow_html=True,
    )
