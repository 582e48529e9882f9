"""Builds the provider handles from AppConfig.

There is no module-level connection object: connect() returns the handles and
the root controller owns them.
"""
import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

from google.api_core import exceptions as api_exceptions
from google.auth import exceptions as ga_exceptions
from google.cloud import firestore

from config import AppConfig
from domain.constants import MSG_INIT_FAILED
from domain.errors import InitializationError
from services.auth import AuthClient, FirebaseUserCredentials
from utils.log import get_logger

logger = get_logger(__name__)


@dataclass
class FirebaseHandles:
    auth: AuthClient
    db: Any  # firestore.Client


def _default_client(project: Optional[str], credentials) -> Any:
    return firestore.Client(project=project, credentials=credentials)


def connect(config: AppConfig,
            client_factory: Callable[..., Any] = _default_client) -> FirebaseHandles:
    """Create the auth and Firestore handles. Raises InitializationError on failure."""
    try:
        auth = AuthClient(api_key=config.api_key,
                          emulator_host=os.environ.get('FIREBASE_AUTH_EMULATOR_HOST'))
        db = client_factory(config.project_id, FirebaseUserCredentials(auth))
    except (ga_exceptions.GoogleAuthError, api_exceptions.GoogleAPIError,
            ValueError, OSError) as e:
        logger.exception("Firebase initialization failed")
        raise InitializationError(MSG_INIT_FAILED) from e
    logger.info("Firebase handles ready project=%s app_id=%s", config.project_id, config.app_id)
    return FirebaseHandles(auth=auth, db=db)
