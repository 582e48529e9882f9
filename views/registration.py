import streamlit as st

from domain.constants import MSG_AUTHENTICATING, MSG_INITIALIZING, MSG_TEST_ONLY_WARNING
from ui.components import session_box, user_form, warning_note

KEY_PREFIX = "register"
CLEAR_FLAG = "register_clear_fields"


def _await_ready(controller):
    """Poll until the session bootstrap finishes, then rerun the whole app to enable submit."""
    @st.fragment(run_every=controller.config.poll_interval)
    def _poll():
        if controller.is_ready:
            st.rerun()
        st.caption(MSG_INITIALIZING)
    _poll()


def _go_list(controller):
    controller.go_list()
    st.rerun()


def view(controller):
    st.header("회원가입 (인증 우회 테스트 버전)")
    warning_note(MSG_TEST_ONLY_WARNING)

    user = controller.session.user
    session_box("세션 ID (익명 인증)", user.uid if user else MSG_AUTHENTICATING)

    # Deferred field cleanup after a successful submit (widgets cannot be reset once drawn)
    if st.session_state.pop(CLEAR_FLAG, False):
        user_form.clear(KEY_PREFIX)

    reg = controller.registration
    submitted = user_form.render(KEY_PREFIX, disabled=not reg.can_submit(),
                                 submitting=reg.state.submitting)
    if submitted is not None:
        with st.spinner("등록 중..."):
            created = reg.submit(**submitted)
        if created:
            st.session_state[CLEAR_FLAG] = True
            st.rerun()

    state = reg.state
    if state.error:
        st.error(state.error)
    if state.success:
        c1, c2 = st.columns([4, 1], vertical_alignment="center")
        c1.success(state.success)
        if c2.button("목록 보기 →", key="register_success_go_list"):
            _go_list(controller)

    if st.button("회원 목록 보기", key="register_go_list", use_container_width=True):
        _go_list(controller)

    if not controller.is_ready:
        _await_ready(controller)
