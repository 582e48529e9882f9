"""
This package provides the reusable UI components for the Streamlit application.

- `base`: CSS injection, the fatal error banner and small info boxes.
- `user_form`: the registration form.
- `member_table`: the member list table.

Import from here for a single access point (`from ui.components import ...`).
"""

from .base import (
    inject_base_css,
    fatal_banner,
    warning_note,
    session_box,
)

from .member_table import (
    members_to_frame,
    member_table,
)

from . import user_form
