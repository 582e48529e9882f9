import datetime as dt
import itertools

import pytest
from google.cloud import firestore

from config import AppConfig
from services.auth import AuthClient
from services.firebase import FirebaseHandles


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = dict(data)

    def to_dict(self):
        return dict(self._data)


class FakeWatch:
    def __init__(self, collection, callback):
        self._collection = collection
        self._callback = callback
        self.is_active = True
        self.unsubscribe_calls = 0

    def unsubscribe(self):
        self.unsubscribe_calls += 1
        self.is_active = False
        if self in self._collection.watches:
            self._collection.watches.remove(self)

    def die(self):
        """Stream stops without unsubscribe, as after an unrecoverable RPC error."""
        self.is_active = False
        if self in self._collection.watches:
            self._collection.watches.remove(self)

    def push(self):
        docs = [FakeSnapshot(k, v) for k, v in self._collection.docs.items()]
        self._callback(docs, [], dt.datetime.now(dt.timezone.utc))


class FakeDocument:
    def __init__(self, collection, doc_id):
        self._collection = collection
        self.id = doc_id

    def set(self, data):
        db = self._collection.db
        db.set_calls.append((self._collection.path, self.id, dict(data)))
        if db.write_error is not None:
            raise db.write_error
        stored = {
            k: (db.now() if v is firestore.SERVER_TIMESTAMP else v)
            for k, v in data.items()
        }
        self._collection.docs[self.id] = stored
        for w in list(self._collection.watches):
            w.push()


class FakeCollection:
    def __init__(self, db, path):
        self.db = db
        self.path = path
        self.docs = {}
        self.watches = []

    def document(self, doc_id):
        return FakeDocument(self, doc_id)

    def on_snapshot(self, callback):
        if self.db.watch_error is not None:
            raise self.db.watch_error
        watch = FakeWatch(self, callback)
        self.watches.append(watch)
        self.db.opened_watches.append(watch)
        watch.push()
        return watch


class FakeFirestore:
    """In-memory stand-in for firestore.Client: collection/document/set/on_snapshot."""

    def __init__(self):
        self.collections = {}
        self.set_calls = []
        self.opened_watches = []
        self.write_error = None
        self.watch_error = None
        self._clock = itertools.count()

    def now(self):
        base = dt.datetime(2024, 5, 3, 5, 30, tzinfo=dt.timezone.utc)
        return base + dt.timedelta(seconds=next(self._clock))

    def collection(self, path):
        if path not in self.collections:
            self.collections[path] = FakeCollection(self, path)
        return self.collections[path]

    def active_watches(self):
        return [w for w in self.opened_watches if w.is_active]


class FakeResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeHttp:
    """Records Identity Toolkit calls and replies from a url-suffix -> (status, payload) table."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def post(self, url, params=None, json=None, data=None):
        self.calls.append({'url': url, 'params': params, 'json': json, 'data': data})
        for suffix, (status, payload) in self.routes.items():
            if url.endswith(suffix):
                return FakeResponse(status, payload)
        return FakeResponse(404, {'error': {'message': 'NOT_FOUND'}})


ANON_SIGNUP = ('accounts:signUp', (200, {
    'localId': 'anon-uid-123', 'idToken': 'id-token-1',
    'refreshToken': 'refresh-1', 'expiresIn': '3600',
}))


@pytest.fixture
def fake_db():
    return FakeFirestore()


@pytest.fixture
def fake_http():
    return FakeHttp(dict([ANON_SIGNUP]))


@pytest.fixture
def auth_client(fake_http):
    return AuthClient(api_key='test-key', http=fake_http)


@pytest.fixture
def app_config():
    return AppConfig(app_id='test-app', firebase_config={'apiKey': 'test-key', 'projectId': 'demo'},
                     log_level='DEBUG')


@pytest.fixture
def connector(fake_db, auth_client):
    def _connect(config):
        return FirebaseHandles(auth=auth_client, db=fake_db)
    return _connect
