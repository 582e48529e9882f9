"""Firebase Authentication over the Identity Toolkit REST API.

Only the two sign-in flows the demo needs are implemented: anonymous sign-up
and custom-token exchange. Tokens are refreshed through the Secure Token API.
FirebaseUserCredentials adapts the signed-in user to google-auth so the
Firestore client sends the user's ID token.
"""
from __future__ import annotations
import datetime as dt
import threading
from typing import Any, Callable, Dict, List, Optional

import requests
from google.auth import credentials as ga_credentials
from google.auth import exceptions as ga_exceptions

from domain.errors import AuthError
from domain.models import SessionUser
from utils.log import get_logger

logger = get_logger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"
SECURE_TOKEN_URL = "https://securetoken.googleapis.com/v1"
# refresh this long before the provider-reported expiry
EXPIRY_SKEW = dt.timedelta(minutes=5)

AuthListener = Callable[[Optional[SessionUser]], None]


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class AuthClient:
    """Holds the current Firebase user and notifies auth-state listeners."""

    def __init__(self, api_key: Optional[str], http: Optional[requests.Session] = None,
                 emulator_host: Optional[str] = None):
        self._api_key = api_key
        self._http = http or requests.Session()
        if emulator_host:
            self._identity_url = f"http://{emulator_host}/identitytoolkit.googleapis.com/v1"
            self._token_url = f"http://{emulator_host}/securetoken.googleapis.com/v1"
        else:
            self._identity_url = IDENTITY_TOOLKIT_URL
            self._token_url = SECURE_TOKEN_URL
        self._lock = threading.Lock()
        self._listeners: List[AuthListener] = []
        self._current_user: Optional[SessionUser] = None

    @property
    def current_user(self) -> Optional[SessionUser]:
        with self._lock:
            return self._current_user

    def _post(self, url: str, **kwargs) -> Dict[str, Any]:
        if not self._api_key:
            raise AuthError("Firebase apiKey is not configured")
        try:
            resp = self._http.post(url, params={'key': self._api_key}, **kwargs)
        except requests.RequestException as e:
            raise AuthError(str(e)) from e
        try:
            payload = resp.json()
        except ValueError:
            payload = None
        if not resp.ok:
            error = payload.get('error') if isinstance(payload, dict) else None
            message = (error.get('message') if isinstance(error, dict) else None) or f"HTTP {resp.status_code}"
            raise AuthError(message)
        if not isinstance(payload, dict):
            raise AuthError(f"Unexpected response from {url.split('?')[0]}")
        return payload

    @staticmethod
    def _build_user(data: Dict[str, Any], uid: Any, id_key: str, refresh_key: str,
                    expires_key: str, is_anonymous: bool,
                    default_refresh: Optional[str] = None) -> SessionUser:
        """Turn a token response into a SessionUser; a malformed reply raises AuthError."""
        try:
            refresh_token = data.get(refresh_key, default_refresh)
            id_token = data[id_key]
            if not uid:
                raise KeyError('uid')
            if not id_token:
                raise KeyError(id_key)
            if not refresh_token:
                raise KeyError(refresh_key)
            return SessionUser(
                uid=str(uid),
                id_token=str(id_token),
                refresh_token=str(refresh_token),
                expires_at=_utcnow() + dt.timedelta(seconds=int(data.get(expires_key, 3600))),
                is_anonymous=is_anonymous,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise AuthError(f"Malformed token response: {e!r}") from e

    def _set_user(self, user: Optional[SessionUser]) -> None:
        with self._lock:
            self._current_user = user
            listeners = list(self._listeners)
        for listener in listeners:
            listener(user)

    def sign_in_anonymously(self) -> SessionUser:
        data = self._post(f"{self._identity_url}/accounts:signUp",
                          json={'returnSecureToken': True})
        user = self._build_user(data, data.get('localId'), 'idToken', 'refreshToken',
                                'expiresIn', is_anonymous=True)
        logger.info("Anonymous sign-in succeeded uid=%s", user.uid)
        self._set_user(user)
        return user

    def sign_in_with_custom_token(self, token: str) -> SessionUser:
        data = self._post(f"{self._identity_url}/accounts:signInWithCustomToken",
                          json={'token': token, 'returnSecureToken': True})
        if not data.get('idToken'):
            raise AuthError("Malformed token response: missing idToken")
        # the exchange response carries no uid; look it up from the ID token
        lookup = self._post(f"{self._identity_url}/accounts:lookup",
                            json={'idToken': data['idToken']})
        users = lookup.get('users')
        first = users[0] if isinstance(users, list) and users and isinstance(users[0], dict) else {}
        user = self._build_user(data, first.get('localId'), 'idToken', 'refreshToken',
                                'expiresIn', is_anonymous=False)
        logger.info("Custom token sign-in succeeded uid=%s", user.uid)
        self._set_user(user)
        return user

    def refresh(self) -> SessionUser:
        current = self.current_user
        if current is None:
            raise AuthError("No signed-in user to refresh")
        data = self._post(f"{self._token_url}/token",
                          data={'grant_type': 'refresh_token',
                                'refresh_token': current.refresh_token})
        user = self._build_user(data, data.get('user_id', current.uid), 'id_token', 'refresh_token',
                                'expires_in', is_anonymous=current.is_anonymous,
                                default_refresh=current.refresh_token)
        logger.debug("Refreshed ID token uid=%s", user.uid)
        with self._lock:
            self._current_user = user
        return user

    def on_auth_state_changed(self, listener: AuthListener) -> Callable[[], None]:
        """Register listener; it fires right away with the current user, then on every change."""
        with self._lock:
            self._listeners.append(listener)
            current = self._current_user
        listener(current)

        def _remove():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)
        return _remove


class FirebaseUserCredentials(ga_credentials.Credentials):
    """google-auth credentials backed by the AuthClient's current ID token."""

    def __init__(self, auth: AuthClient):
        super().__init__()
        self._auth = auth

    def refresh(self, request):
        user = self._auth.current_user
        if user is None:
            raise ga_exceptions.RefreshError("No signed-in Firebase user")
        if user.expires_at - EXPIRY_SKEW <= _utcnow():
            try:
                user = self._auth.refresh()
            except AuthError as e:
                raise ga_exceptions.RefreshError(e.message) from e
        self.token = user.id_token
        # google-auth compares expiry as naive UTC
        self.expiry = user.expires_at.astimezone(dt.timezone.utc).replace(tzinfo=None)
