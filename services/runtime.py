"""Root controller: provider handles, session readiness and the view selector.

One instance lives per Streamlit session (st.session_state) and is handed to
both views. Navigation only flips the selector; reconcile() runs on every
render and tears down the list subscription when the list view is inactive.
"""
from __future__ import annotations
import weakref
from typing import Callable, Optional

from config import AppConfig, load_config
from domain.constants import MSG_INIT_FAILED, VIEW_LIST, VIEW_REGISTER
from domain.errors import InitializationError
from services import firebase
from services.member_list import MemberListController
from services.members import MemberStore
from services.registration import RegistrationController
from services.session import SessionBootstrapper
from utils import log

logger = log.get_logger(__name__)

Connector = Callable[[AppConfig], firebase.FirebaseHandles]


class RootController:

    def __init__(self, config: AppConfig, connector: Connector = firebase.connect):
        self.config = config
        self.view = VIEW_REGISTER
        self.fatal_error: Optional[str] = None
        self.handles: Optional[firebase.FirebaseHandles] = None
        self.store: Optional[MemberStore] = None
        try:
            self.handles = connector(config)
        except InitializationError as e:
            logger.error("Initialization failed: %s", e.message)
            self.fatal_error = e.message
        if self.handles is not None:
            self.store = MemberStore(self.handles.db, app_id=config.app_id)
        self.session = SessionBootstrapper(
            self.handles.auth if self.handles else None,
            initial_token=config.initial_auth_token,
        )
        if self.handles is None:
            self.session.force_ready()
        self.registration = RegistrationController(lambda: self.store, lambda: self.session.is_ready)
        self.member_list = MemberListController()
        # runs on shutdown(), on garbage collection of an expired session, or at exit
        self._finalizer = weakref.finalize(self, _release, self.member_list, self.session)

    @property
    def auth(self):
        return self.handles.auth if self.handles else None

    @property
    def is_ready(self) -> bool:
        return self.session.is_ready

    @property
    def banner(self) -> Optional[str]:
        """Fatal init error first, else the non-blocking auth failure message."""
        return self.fatal_error or self.session.error

    def start(self, background: bool = True) -> None:
        if background:
            self.session.start()
        else:
            self.session.bootstrap()

    def go_list(self) -> None:
        self.view = VIEW_LIST

    def go_register(self) -> None:
        self.view = VIEW_REGISTER

    def reconcile(self) -> None:
        if self.view == VIEW_LIST:
            self.registration.reset()
            self.member_list.mount(self.store)
        elif self.member_list.mounted:
            self.member_list.unmount()

    def shutdown(self) -> None:
        self._finalizer()


def _release(member_list: MemberListController, session: SessionBootstrapper) -> None:
    member_list.unmount()
    session.close()

def _failing_connector(error: InitializationError) -> Connector:
    def _connect(config: AppConfig) -> firebase.FirebaseHandles:
        raise error
    return _connect


def create_controller(config: Optional[AppConfig] = None, connector: Connector = firebase.connect,
                      background: bool = True) -> RootController:
    """Load config (unless given), connect and kick off the session bootstrap."""
    if config is None:
        try:
            config = load_config()
        except InitializationError as e:
            logger.error("Invalid configuration: %s", e.message)
            config = AppConfig()
            connector = _failing_connector(InitializationError(MSG_INIT_FAILED))
    log.configure(config.log_level, config.firestore_log_level)
    controller = RootController(config, connector=connector)
    controller.start(background=background)
    return controller
