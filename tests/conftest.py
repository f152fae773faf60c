"""
Pytest global configuration.

The credential path runs for real: a throwaway RSA key is generated so that
``credentials.Certificate`` parses a genuine service account. The Firestore and
Auth clients are replaced with mocks, so nothing here opens a network connection.
"""

import json
import sys
from unittest.mock import MagicMock

import firebase_admin
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

import backend.core.config as config_module
import backend.core.firebase as firebase_module
from backend.core.config import DEFAULT_APP_NAME, SERVICE_ACCOUNT_ENV
from backend.core.firebase import FirebaseServices, reset_firebase

TEST_APP_NAMES = (DEFAULT_APP_NAME, "secondary")

# Test modules build the FastAPI app at import time; keep a developer .env out of it
config_module.load_dotenv = lambda *args, **kwargs: False


# ============================================================================
# ENVIRONMENT ISOLATION
# ============================================================================

@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Ignore any developer .env file and start without Firebase variables."""
    monkeypatch.setattr(config_module, "load_dotenv", lambda *args, **kwargs: False)
    for var in (SERVICE_ACCOUNT_ENV, "FIREBASE_APP_NAME", "FIREBASE_PROJECT_ID", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def clean_firebase():
    """Delete every app created by a test and drop the module singleton."""
    yield
    reset_firebase()
    for name in TEST_APP_NAMES:
        try:
            firebase_admin.delete_app(firebase_admin.get_app(name))
        except ValueError:
            pass
    sys.modules.pop("backend.firebase", None)


# ============================================================================
# CREDENTIAL FIXTURES
# ============================================================================

@pytest.fixture(scope="session")
def private_key_pem():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


@pytest.fixture
def service_account_info(private_key_pem):
    """Service account descriptor shaped like a Firebase console download."""
    return {
        "type": "service_account",
        "project_id": "demo-project",
        "private_key_id": "0123456789abcdef",
        "private_key": private_key_pem,
        "client_email": "firebase-adminsdk@demo-project.iam.gserviceaccount.com",
        "client_id": "100000000000000000000",
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.googleapis.com/token",
        "universe_domain": "googleapis.com",
    }


@pytest.fixture
def service_account_env(monkeypatch, service_account_info):
    raw = json.dumps(service_account_info)
    monkeypatch.setenv(SERVICE_ACCOUNT_ENV, raw)
    return raw


# ============================================================================
# SDK CLIENT MOCKS
# ============================================================================

@pytest.fixture
def sdk_clients(monkeypatch):
    """Replace firestore.client / auth.Client with mocks bound to the real app."""
    firestore_client = MagicMock(name="firestore.client")
    auth_client_cls = MagicMock(name="auth.Client")
    monkeypatch.setattr(firebase_module.firestore, "client", firestore_client)
    monkeypatch.setattr(firebase_module.firebase_auth, "Client", auth_client_cls)
    return firestore_client, auth_client_cls


class FakeAuthClient:
    """Stands in for ``firebase_admin.auth.Client`` in HTTP tests."""

    def __init__(self, claims=None, error=None):
        self.claims = claims
        self.error = error
        self.calls = []

    def verify_id_token(self, id_token, check_revoked=False):
        self.calls.append((id_token, check_revoked))
        if self.error is not None:
            raise self.error
        return self.claims


@pytest.fixture
def make_services():
    """Build FirebaseServices around a FakeAuthClient returning ``claims`` or raising ``error``."""

    def _make(claims=None, error=None):
        app = MagicMock(name="App")
        app.name = DEFAULT_APP_NAME
        app.project_id = "demo-project"
        return FirebaseServices(
            app=app,
            db=MagicMock(name="firestore"),
            auth=FakeAuthClient(claims=claims, error=error),
        )

    return _make
