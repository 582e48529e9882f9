"""Registration form state and submit protocol, independent of Streamlit."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional

from domain.constants import (
    MSG_REGISTER_SUCCESS,
    MSG_SERVICE_NOT_READY,
    MSG_WRITE_FAILED,
)
from domain.errors import ValidationError, WriteError
from domain.validation import validate_registration
from services.members import MemberStore
from utils.ids import short_id
from utils.log import get_logger

logger = get_logger(__name__)


@dataclass
class RegistrationState:
    name: str = ''
    email: str = ''
    password: str = ''
    submitting: bool = False
    error: Optional[str] = None
    success: Optional[str] = None
    created_id: Optional[str] = None

    def clear_fields(self):
        self.name = ''
        self.email = ''
        self.password = ''


class RegistrationController:
    """
    Runs one submission at a time against a MemberStore.

    Args:
        store_getter: Returns the store, or None when it is unavailable.
        is_ready: Returns whether the session bootstrap has finished.
    """

    def __init__(self, store_getter: Callable[[], Optional[MemberStore]],
                 is_ready: Callable[[], bool]):
        self._store_getter = store_getter
        self._is_ready = is_ready
        self.state = RegistrationState()

    def reset(self) -> None:
        if not self.state.submitting:
            self.state = RegistrationState()

    def can_submit(self) -> bool:
        return self._is_ready() and not self.state.submitting

    def submit(self, name: str, email: str, password: str) -> bool:
        """Validate and write. Returns True when a member was created."""
        s = self.state
        if s.submitting:
            return False
        s.name, s.email, s.password = name, email, password
        s.error = None
        s.success = None
        s.created_id = None

        store = self._store_getter()
        if not self._is_ready() or store is None:
            s.error = MSG_SERVICE_NOT_READY
            return False

        try:
            validate_registration(name, email, password)
        except ValidationError as e:
            s.error = e.message
            return False

        s.submitting = True
        try:
            new_id = store.create_member(name, email, password)
        except WriteError as e:
            s.error = MSG_WRITE_FAILED.format(message=e.message)
            return False
        finally:
            s.submitting = False

        s.created_id = new_id
        s.success = MSG_REGISTER_SUCCESS.format(short_id=short_id(new_id))
        s.clear_fields()
        return True
