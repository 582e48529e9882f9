import streamlit as st
from typing import Dict, Optional

FIELDS = ("name", "email", "password")


def field_keys(key_prefix: str):
    return [f"{key_prefix}_{f}" for f in FIELDS]


def clear(key_prefix: str):
    """Drop widget values so the next render starts empty. Call before the form is drawn."""
    for k in field_keys(key_prefix):
        st.session_state.pop(k, None)


def render(key_prefix: str, disabled: bool = False, submitting: bool = False) -> Optional[Dict[str, str]]:
    """
    Renders the registration form.

    Args:
        key_prefix (str): A unique prefix for Streamlit widget keys.
        disabled (bool): Disable the submit button (submitting or session not ready).
        submitting (bool): Switch the submit label to the in-progress text.

    Returns:
        Dict[str, str]: name/email/password when submitted, otherwise None.
    """
    with st.form(f"form_{key_prefix}", clear_on_submit=False):
        name = st.text_input("이름", key=f"{key_prefix}_name",
                             placeholder="사용하실 이름을 입력하세요")
        email = st.text_input("이메일 주소", key=f"{key_prefix}_email",
                              placeholder="example@email.com", autocomplete="email")
        password = st.text_input("비밀번호 (6자 이상)", key=f"{key_prefix}_password",
                                 type="password", placeholder="********", autocomplete="new-password")

        submit_label = "등록 중..." if submitting else "회원가입 완료 (테스트)"
        submitted = st.form_submit_button(submit_label, disabled=disabled,
                                          type="primary", use_container_width=True)

    if submitted:
        return {'name': name, 'email': email, 'password': password}
    return None
