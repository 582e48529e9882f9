"""Session bootstrap: one sign-in attempt per app session.

uninitialized -> authenticating -> ready. Failure also ends in ready so that
the views never wait forever; the failure message is kept for the banner.
"""
from __future__ import annotations
import enum
import threading
from typing import Optional

from domain.constants import MSG_AUTH_FAILED
from domain.errors import AuthError
from domain.models import SessionUser
from services.auth import AuthClient
from utils.log import get_logger

logger = get_logger(__name__)


class SessionState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    AUTHENTICATING = "authenticating"
    READY = "ready"


class SessionBootstrapper:

    def __init__(self, auth: Optional[AuthClient], initial_token: Optional[str] = None):
        self._auth = auth
        self._initial_token = initial_token
        self._lock = threading.Lock()
        self._state = SessionState.UNINITIALIZED
        self._error: Optional[str] = None
        self._unlisten = None

    @property
    def state(self) -> SessionState:
        with self._lock:
            return self._state

    @property
    def is_ready(self) -> bool:
        return self.state is SessionState.READY

    @property
    def error(self) -> Optional[str]:
        with self._lock:
            return self._error

    @property
    def user(self) -> Optional[SessionUser]:
        return self._auth.current_user if self._auth else None

    def _claim(self) -> bool:
        with self._lock:
            if self._state is not SessionState.UNINITIALIZED:
                return False
            self._state = SessionState.AUTHENTICATING
            return True

    def force_ready(self, error: Optional[str] = None) -> None:
        with self._lock:
            self._state = SessionState.READY
            if error and not self._error:
                self._error = error

    def _on_auth_state(self, user: Optional[SessionUser]) -> None:
        logger.debug("Auth state confirmed uid=%s", user.uid if user else None)
        self.force_ready()

    def bootstrap(self) -> None:
        """Run the single sign-in attempt inline. Later calls are no-ops."""
        if not self._claim():
            return
        if self._auth is None:
            self.force_ready()
            return
        try:
            if self._initial_token:
                self._auth.sign_in_with_custom_token(self._initial_token)
            else:
                self._auth.sign_in_anonymously()
            self._unlisten = self._auth.on_auth_state_changed(self._on_auth_state)
        except AuthError as e:
            logger.error("Initial authentication failed: %s", e.message)
            self.force_ready(MSG_AUTH_FAILED)
        except Exception:
            logger.exception("Initial authentication failed unexpectedly")
            self.force_ready(MSG_AUTH_FAILED)

    def start(self) -> Optional[threading.Thread]:
        """Run bootstrap() on a daemon thread so rendering is not blocked."""
        if self.state is not SessionState.UNINITIALIZED:
            return None
        t = threading.Thread(target=self.bootstrap, name="session-bootstrap", daemon=True)
        t.start()
        return t

    def close(self) -> None:
        if self._unlisten:
            self._unlisten()
            self._unlisten = None
