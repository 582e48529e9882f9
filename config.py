"""
Application configuration, env-driven.

Values the hosting environment provides (deployment app id, Firebase web config
blob, optional custom auth token) are gathered into one AppConfig that is
passed to the root controller at startup.
"""
import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

from domain.constants import DEFAULT_APP_ID
from domain.errors import InitializationError
from utils.paths import resolve_data_file


@dataclass(frozen=True)
class AppConfig:
    """
    Attributes:
        app_id: Deployment identifier scoping the users collection.
        firebase_config: Firebase web config (apiKey, projectId, ...). May be empty.
        initial_auth_token: Custom token exchanged for a session if present.
        log_level: App logger level.
        firestore_log_level: Level for the google.cloud.firestore logger.
        poll_interval: Seconds between UI refreshes while waiting on background work.
    """
    app_id: str = DEFAULT_APP_ID
    firebase_config: Dict[str, Any] = field(default_factory=dict)
    initial_auth_token: Optional[str] = None
    log_level: str = "INFO"
    firestore_log_level: str = "DEBUG"
    poll_interval: float = 1.0

    @property
    def project_id(self) -> Optional[str]:
        return self.firebase_config.get('projectId')

    @property
    def api_key(self) -> Optional[str]:
        return self.firebase_config.get('apiKey')


def _parse_firebase_config(env: Mapping[str, str]) -> Dict[str, Any]:
    raw = env.get('FIREBASE_CONFIG')
    if not raw:
        path = resolve_data_file(env.get('FIREBASE_CONFIG_FILE', ''))
        if not path:
            return {}
        with open(path, 'r', encoding='utf-8') as f:
            raw = f.read()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InitializationError(f"FIREBASE_CONFIG is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise InitializationError("FIREBASE_CONFIG must be a JSON object")
    return data


def _parse_poll_interval(env: Mapping[str, str]) -> float:
    raw = env.get('UI_POLL_INTERVAL', '1.0')
    try:
        interval = float(raw)
    except ValueError as e:
        raise InitializationError(f"UI_POLL_INTERVAL must be a number: {raw!r}") from e
    if not interval > 0:
        raise InitializationError(f"UI_POLL_INTERVAL must be positive: {raw!r}")
    return interval


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Build AppConfig from the environment (a .env file is loaded first when env is not given)."""
    if env is None:
        load_dotenv()
        env = os.environ
    return AppConfig(
        app_id=env.get('APP_ID') or DEFAULT_APP_ID,
        firebase_config=_parse_firebase_config(env),
        initial_auth_token=env.get('INITIAL_AUTH_TOKEN') or None,
        log_level=env.get('LOG_LEVEL', 'INFO'),
        firestore_log_level=env.get('FIRESTORE_LOG_LEVEL', 'DEBUG'),
        poll_interval=_parse_poll_interval(env),
    )
