import datetime as dt

import pytest
from google.auth import exceptions as ga_exceptions

from domain.errors import AuthError
from services.auth import AuthClient, FirebaseUserCredentials
from conftest import FakeHttp


def test_anonymous_sign_in_sets_current_user(auth_client, fake_http):
    user = auth_client.sign_in_anonymously()
    assert user.uid == 'anon-uid-123'
    assert user.is_anonymous
    assert auth_client.current_user is user
    call = fake_http.calls[0]
    assert call['url'].endswith('/accounts:signUp')
    assert call['params'] == {'key': 'test-key'}
    assert call['json'] == {'returnSecureToken': True}


def test_custom_token_exchange_looks_up_uid():
    http = FakeHttp({
        'accounts:signInWithCustomToken': (200, {'idToken': 'id-2', 'refreshToken': 'r-2', 'expiresIn': '3600'}),
        'accounts:lookup': (200, {'users': [{'localId': 'custom-uid'}]}),
    })
    client = AuthClient(api_key='k', http=http)
    user = client.sign_in_with_custom_token('custom-token')
    assert user.uid == 'custom-uid'
    assert not user.is_anonymous
    assert http.calls[0]['json'] == {'token': 'custom-token', 'returnSecureToken': True}
    assert http.calls[1]['json'] == {'idToken': 'id-2'}


def test_provider_error_message_is_raised():
    http = FakeHttp({'accounts:signUp': (400, {'error': {'message': 'ADMIN_ONLY_OPERATION'}})})
    with pytest.raises(AuthError) as exc:
        AuthClient(api_key='k', http=http).sign_in_anonymously()
    assert exc.value.message == 'ADMIN_ONLY_OPERATION'


def test_missing_api_key_fails_without_http_call(fake_http):
    client = AuthClient(api_key=None, http=fake_http)
    with pytest.raises(AuthError):
        client.sign_in_anonymously()
    assert fake_http.calls == []


def test_emulator_host_changes_base_url(fake_http):
    client = AuthClient(api_key='k', http=fake_http, emulator_host='localhost:9099')
    client.sign_in_anonymously()
    assert fake_http.calls[0]['url'].startswith('http://localhost:9099/identitytoolkit.googleapis.com/v1')


def test_listener_fires_immediately_and_on_change(auth_client):
    seen = []
    remove = auth_client.on_auth_state_changed(seen.append)
    assert seen == [None]
    auth_client.sign_in_anonymously()
    assert seen[-1].uid == 'anon-uid-123'
    remove()
    auth_client.sign_in_anonymously()
    assert len(seen) == 2


def test_credentials_use_current_id_token(auth_client):
    auth_client.sign_in_anonymously()
    creds = FirebaseUserCredentials(auth_client)
    creds.refresh(None)
    assert creds.token == 'id-token-1'
    assert creds.expiry.tzinfo is None


def test_credentials_refresh_expired_token():
    http = FakeHttp({
        'accounts:signUp': (200, {'localId': 'u', 'idToken': 'old', 'refreshToken': 'r', 'expiresIn': '60'}),
        '/token': (200, {'id_token': 'new', 'refresh_token': 'r2', 'expires_in': '3600', 'user_id': 'u'}),
    })
    client = AuthClient(api_key='k', http=http)
    client.sign_in_anonymously()
    creds = FirebaseUserCredentials(client)
    creds.refresh(None)
    assert creds.token == 'new'
    assert http.calls[-1]['data'] == {'grant_type': 'refresh_token', 'refresh_token': 'r'}
    assert client.current_user.expires_at > dt.datetime.now(dt.timezone.utc) + dt.timedelta(minutes=30)


def test_credentials_without_user_raise_refresh_error(auth_client):
    with pytest.raises(ga_exceptions.RefreshError):
        FirebaseUserCredentials(auth_client).refresh(None)


@pytest.mark.parametrize('payload', [
    {},
    [],
    {'localId': 'u', 'idToken': 'i', 'refreshToken': 'r', 'expiresIn': 'soon'},
    {'localId': 'u', 'refreshToken': 'r', 'expiresIn': '3600'},
    ValueError('Expecting value: line 1 column 1'),
])
def test_malformed_sign_up_reply_raises_auth_error(payload):
    http = FakeHttp({'accounts:signUp': (200, payload)})
    client = AuthClient(api_key='k', http=http)
    with pytest.raises(AuthError):
        client.sign_in_anonymously()
    assert client.current_user is None


def test_custom_token_lookup_without_users_raises_auth_error():
    http = FakeHttp({
        'accounts:signInWithCustomToken': (200, {'idToken': 'i', 'refreshToken': 'r', 'expiresIn': '3600'}),
        'accounts:lookup': (200, {'users': []}),
    })
    with pytest.raises(AuthError):
        AuthClient(api_key='k', http=http).sign_in_with_custom_token('tok')


def test_html_error_page_reports_status_code():
    http = FakeHttp({'accounts:signUp': (502, ValueError('not json'))})
    with pytest.raises(AuthError) as exc:
        AuthClient(api_key='k', http=http).sign_in_anonymously()
    assert exc.value.message == 'HTTP 502'
