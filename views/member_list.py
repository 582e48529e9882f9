import streamlit as st

from domain.constants import MSG_LIST_EMPTY, MSG_LIST_LOADING
from services.member_list import ListStatus
from ui.components import member_table


def view(controller):
    """Live member list. The fragment re-reads the subscription state every poll interval."""
    members = controller.member_list

    @st.fragment(run_every=controller.config.poll_interval)
    def _live():
        snap = members.snapshot()
        st.header(f"회원 목록 ({len(snap.members)}명)")
        if st.button("← 회원가입 페이지로 돌아가기", key="list_go_register", use_container_width=True):
            controller.go_register()
            st.rerun(scope="app")

        status = snap.status
        if status is ListStatus.LOADING:
            st.info(MSG_LIST_LOADING)
        elif status is ListStatus.ERROR:
            st.error(snap.error)
        elif status is ListStatus.EMPTY:
            st.caption(MSG_LIST_EMPTY)

        if snap.show_rows:
            member_table(snap.members)

    _live()
