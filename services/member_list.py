"""Member list state fed by a live subscription.

Snapshot callbacks arrive on the Firestore watch thread; all state changes go
through a lock and the view reads a copy via snapshot().
"""
from __future__ import annotations
import enum
import threading
from dataclasses import dataclass, field
from typing import List, Optional

from domain.constants import MSG_LIST_FAILED
from domain.errors import SubscriptionError
from domain.models import Member
from services.members import MemberStore, MemberSubscription
from utils.log import get_logger

logger = get_logger(__name__)


class ListStatus(str, enum.Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    READY = "ready"


@dataclass
class MemberListSnapshot:
    members: List[Member] = field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None
    version: int = 0

    @property
    def status(self) -> ListStatus:
        if self.loading:
            return ListStatus.LOADING
        if self.error:
            return ListStatus.ERROR
        if not self.members:
            return ListStatus.EMPTY
        return ListStatus.READY

    @property
    def show_rows(self) -> bool:
        # stale rows stay visible next to an error
        return not self.loading and bool(self.members)


class MemberListController:

    def __init__(self):
        self._lock = threading.Lock()
        self._version = 0
        self._subscription: Optional[MemberSubscription] = None
        self._reset()

    def _reset(self) -> None:
        # a fresh mount starts loading with no rows
        with self._lock:
            self._members: List[Member] = []
            self._loading = True
            self._error: Optional[str] = None
            self._version += 1

    @property
    def mounted(self) -> bool:
        return self._subscription is not None

    def mount(self, store: Optional[MemberStore]) -> None:
        """Open the live query once. Without a store nothing is subscribed."""
        if store is None or self._subscription is not None:
            return
        self._subscription = store.subscribe_members(self._on_update, self._on_error)

    def unmount(self) -> None:
        sub, self._subscription = self._subscription, None
        if sub is not None:
            sub.close()
        self._reset()

    def _on_update(self, members: List[Member]) -> None:
        with self._lock:
            self._members = list(members)
            self._loading = False
            self._error = None
            self._version += 1

    def _on_error(self, error: SubscriptionError) -> None:
        logger.error("Member list stream error: %s", error.message)
        with self._lock:
            self._loading = False
            self._error = MSG_LIST_FAILED
            self._version += 1

    def snapshot(self) -> MemberListSnapshot:
        if self._subscription is not None:
            self._subscription.check()
        with self._lock:
            return MemberListSnapshot(
                members=list(self._members),
                loading=self._loading,
                error=self._error,
                version=self._version,
            )
