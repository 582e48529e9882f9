import streamlit as st

from domain.constants import MSG_FATAL_BANNER, VIEW_LIST, VIEW_REGISTER
from services.runtime import create_controller
from ui.components import fatal_banner, inject_base_css
from views import member_list, registration

# --- Page Registry ---
# Maps a view selector value to its label and rendering function.
PAGE_REGISTRY = {
    VIEW_REGISTER: {
        "label": "📝 회원가입",
        "render_func": registration.view,
    },
    VIEW_LIST: {
        "label": "👥 회원 목록",
        "render_func": member_list.view,
    },
}

CONTROLLER_KEY = "root_controller"


def get_controller():
    """Create the root controller once per browser session.

    Its live subscription is released when the session state is dropped
    (the controller is garbage collected) or at process exit.
    """
    if CONTROLLER_KEY not in st.session_state:
        st.session_state[CONTROLLER_KEY] = create_controller()
    return st.session_state[CONTROLLER_KEY]


def main():
    """
    Main application router.

    Renders the fatal banner (if any) above whichever view the controller has
    selected. Navigation happens only through the buttons inside each view.
    """
    st.set_page_config(page_title="회원가입 테스트", layout="centered")
    inject_base_css()

    controller = get_controller()

    if controller.banner:
        fatal_banner(MSG_FATAL_BANNER.format(message=controller.banner))

    # Mount or release the live list subscription to match the selected view
    controller.reconcile()

    page = PAGE_REGISTRY.get(controller.view, PAGE_REGISTRY[VIEW_REGISTER])
    page["render_func"](controller)


if __name__ == "__main__":
    main()
