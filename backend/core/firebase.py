"""
Firebase Admin SDK bootstrap.

Builds the three handles the rest of the backend needs, once per process:

    FirebaseServices(app, db, auth)
        app  -> firebase_admin.App
        db   -> google.cloud.firestore.Client  (firestore.client(app))
        auth -> firebase_admin.auth.Client     (auth.Client(app))

Prefer passing ``FirebaseServices`` explicitly (FastAPI: ``app.state.firebase``
and the dependencies in ``backend.api.deps``) over importing module globals.

SINGLE INITIALIZATION:
- ``init_firebase()`` creates the process-wide instance (double-checked locking)
  and returns it on later calls.
- ``initialize_firebase()`` does not guard: calling it twice with the same app
  name raises firebase_admin's own ValueError. Hot reload is not supported.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional

import firebase_admin
from firebase_admin import auth as firebase_auth, firestore
from google.cloud import firestore as gcp_firestore

from backend.core.config import FirebaseSettings, load_settings
from backend.core.exceptions import FirebaseNotInitializedError
from backend.utils.firebase_config import get_firebase_credentials

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FirebaseServices:
    app: firebase_admin.App
    db: gcp_firestore.Client
    auth: firebase_auth.Client

    @property
    def project_id(self) -> Optional[str]:
        return self.app.project_id


# ── Singleton state ──────────────────────────────────────────────────
_services: Optional[FirebaseServices] = None
_init_lock = threading.Lock()


def initialize_firebase(settings: FirebaseSettings) -> FirebaseServices:
    """
    Initialize firebase_admin from ``settings`` and build the service clients.

    The credential is fully validated before ``initialize_app`` is called.

    Raises:
        ConfigError: missing or invalid FIREBASE_SERVICE_ACCOUNT.
        ValueError: an app with the same name already exists (firebase_admin).
    """
    cred = get_firebase_credentials(settings)

    app = firebase_admin.initialize_app(cred, settings.app_options(), name=settings.app_name)
    logger.info(f"Firebase Admin SDK initialized (app={app.name}, project={app.project_id})")

    db = firestore.client(app)
    auth_client = firebase_auth.Client(app)

    return FirebaseServices(app=app, db=db, auth=auth_client)


def init_firebase(settings: Optional[FirebaseSettings] = None) -> FirebaseServices:
    """Create the process-wide ``FirebaseServices`` on first call, return it afterwards."""
    global _services

    # Double-checked locking
    if _services is not None:
        return _services

    with _init_lock:
        if _services is not None:
            return _services

        _services = initialize_firebase(settings or load_settings())
        return _services


def get_firebase() -> FirebaseServices:
    if _services is None:
        raise FirebaseNotInitializedError("Firebase has not been initialized; call init_firebase() at startup")
    return _services


def reset_firebase() -> None:
    """Delete the firebase_admin app and forget the singleton (test teardown)."""
    global _services
    with _init_lock:
        if _services is None:
            return
        app, _services = _services.app, None
        try:
            firebase_admin.delete_app(app)
        except ValueError:
            # Already deleted through firebase_admin directly
            logger.warning(f"Firebase app {app.name} was already deleted")
            return
        logger.info(f"Firebase app deleted ({app.name})")
