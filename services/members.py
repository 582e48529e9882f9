"""Member store: append-only writes and a live query over the users collection."""
from __future__ import annotations
import threading
from typing import Any, Callable, Iterable, List, Optional

from google.api_core import exceptions as api_exceptions
from google.auth import exceptions as ga_exceptions
from google.cloud import firestore

from domain.constants import DEFAULT_APP_ID, USERS_COLLECTION_TEMPLATE
from domain.errors import SubscriptionError, WriteError
from domain.models import Member, MemberRecord, member_from_dict
from utils.ids import create_member_id
from utils.log import get_logger

logger = get_logger(__name__)

PROVIDER_ERRORS = (api_exceptions.GoogleAPIError, ga_exceptions.GoogleAuthError)

UpdateCallback = Callable[[List[Member]], None]
ErrorCallback = Callable[[SubscriptionError], None]


def member_from_snapshot(doc: Any) -> Member:
    """Map a DocumentSnapshot to a row; an unusable timestamp becomes the unavailable sentinel."""
    return member_from_dict(doc.id, doc.to_dict())


class MemberSubscription:
    """Handle for one live query. close() must be called when the consuming view goes away.

    on_error fires at most once; after it fires no further updates are delivered.
    """

    def __init__(self, on_update: UpdateCallback, on_error: ErrorCallback):
        self._on_update = on_update
        self._on_error = on_error
        self._lock = threading.Lock()
        self._watch = None
        self._closed = False
        self._failed = False

    @property
    def active(self) -> bool:
        with self._lock:
            return not (self._closed or self._failed)

    def _attach(self, watch) -> None:
        with self._lock:
            self._watch = watch
            stop = self._closed or self._failed
        if stop:
            watch.unsubscribe()

    def _deliver(self, docs: Iterable[Any], changes=None, read_time=None) -> None:
        if not self.active:
            return
        try:
            members = [member_from_snapshot(d) for d in docs]
        except (AttributeError, TypeError, ValueError) as e:
            self._fail(SubscriptionError(str(e)))
            return
        self._on_update(members)

    def _fail(self, error: SubscriptionError) -> None:
        with self._lock:
            if self._closed or self._failed:
                return
            self._failed = True
            watch = self._watch
        logger.error("Member subscription failed: %s", error.message)
        if watch is not None:
            watch.unsubscribe()
        self._on_error(error)

    def check(self) -> bool:
        """Report a watch that stopped on its own as a stream failure. Returns active."""
        with self._lock:
            watch = self._watch
        if watch is not None and self.active and not getattr(watch, 'is_active', True):
            self._fail(SubscriptionError("live query stream closed"))
        return self.active

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            watch = self._watch
        if watch is not None:
            watch.unsubscribe()
        logger.debug("Member subscription closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class MemberStore:
    """Thin client over the Firestore users collection for one app id."""

    def __init__(self, db: Any, app_id: str = DEFAULT_APP_ID,
                 id_factory: Callable[[], str] = create_member_id):
        self._db = db
        self.app_id = app_id
        self._id_factory = id_factory

    @property
    def collection_path(self) -> str:
        return USERS_COLLECTION_TEMPLATE.format(app_id=self.app_id)

    def _collection(self):
        return self._db.collection(self.collection_path)

    def create_member(self, name: str, email: str, password: str) -> str:
        """Write a new member document and return its generated id. Raises WriteError."""
        record = MemberRecord(user_id=self._id_factory(), name=name, email=email, password=password)
        try:
            self._collection().document(record.user_id).set(
                record.to_document(firestore.SERVER_TIMESTAMP))
        except PROVIDER_ERRORS as e:
            logger.exception("Member write failed id=%s", record.user_id)
            raise WriteError(getattr(e, 'message', None) or str(e)) from e
        logger.info("Member created id=%s", record.user_id)
        return record.user_id

    def subscribe_members(self, on_update: UpdateCallback,
                          on_error: ErrorCallback) -> MemberSubscription:
        """Start a live query delivering the full member list on every change."""
        sub = MemberSubscription(on_update, on_error)
        try:
            watch = self._collection().on_snapshot(sub._deliver)
        except PROVIDER_ERRORS as e:
            sub._fail(SubscriptionError(getattr(e, 'message', None) or str(e)))
            return sub
        sub._attach(watch)
        logger.debug("Member subscription opened path=%s", self.collection_path)
        return sub
