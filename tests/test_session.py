from unittest.mock import MagicMock

import pytest

from domain.constants import MSG_AUTH_FAILED
from services.auth import AuthClient
from services.session import SessionBootstrapper, SessionState
from conftest import FakeHttp


def test_starts_uninitialized(auth_client):
    assert SessionBootstrapper(auth_client).state is SessionState.UNINITIALIZED


def test_anonymous_bootstrap_becomes_ready(auth_client, fake_http):
    boot = SessionBootstrapper(auth_client)
    boot.bootstrap()
    assert boot.is_ready
    assert boot.error is None
    assert boot.user.uid == 'anon-uid-123'
    assert fake_http.calls[0]['url'].endswith('accounts:signUp')


def test_token_present_uses_custom_token_flow():
    http = FakeHttp({
        'accounts:signInWithCustomToken': (200, {'idToken': 'i', 'refreshToken': 'r', 'expiresIn': '3600'}),
        'accounts:lookup': (200, {'users': [{'localId': 'tok-uid'}]}),
    })
    boot = SessionBootstrapper(AuthClient(api_key='k', http=http), initial_token='tok')
    boot.bootstrap()
    assert boot.is_ready
    assert boot.user.uid == 'tok-uid'
    assert not any(c['url'].endswith('accounts:signUp') for c in http.calls)


def test_failure_still_becomes_ready_with_banner_message():
    http = FakeHttp({'accounts:signUp': (403, {'error': {'message': 'OPERATION_NOT_ALLOWED'}})})
    boot = SessionBootstrapper(AuthClient(api_key='k', http=http))
    boot.bootstrap()
    assert boot.is_ready
    assert boot.error == MSG_AUTH_FAILED
    assert boot.user is None


def test_single_attempt_per_lifetime(auth_client, fake_http):
    boot = SessionBootstrapper(auth_client)
    boot.bootstrap()
    boot.bootstrap()
    assert len(fake_http.calls) == 1
    assert boot.start() is None


def test_start_runs_in_background(auth_client):
    boot = SessionBootstrapper(auth_client)
    t = boot.start()
    t.join(timeout=5)
    assert boot.is_ready


def test_no_auth_handle_is_ready_immediately():
    boot = SessionBootstrapper(None)
    boot.bootstrap()
    assert boot.is_ready
    assert boot.user is None


@pytest.mark.parametrize('payload', [
    {},
    ['unexpected'],
    {'localId': 'u', 'idToken': 'i', 'refreshToken': 'r', 'expiresIn': 'soon'},
    ValueError('<html>'),
])
def test_malformed_reply_in_background_still_ends_ready(payload):
    http = FakeHttp({'accounts:signUp': (200, payload)})
    boot = SessionBootstrapper(AuthClient(api_key='k', http=http))
    boot.start().join(timeout=5)
    assert boot.state is SessionState.READY
    assert boot.error == MSG_AUTH_FAILED
    assert boot.user is None


def test_unexpected_exception_still_ends_ready():
    auth = MagicMock()
    auth.sign_in_anonymously.side_effect = RuntimeError('boom')
    boot = SessionBootstrapper(auth)
    boot.start().join(timeout=5)
    assert boot.is_ready
    assert boot.error == MSG_AUTH_FAILED
    auth.on_auth_state_changed.assert_not_called()
