"""
Process-wide Firebase handles.

Importing this module bootstraps the Admin SDK from FIREBASE_SERVICE_ACCOUNT
(a ``.env`` file is honoured) and exposes:

- ``admin``      : the initialized ``firebase_admin.App``
- ``db``         : Firestore client
- ``admin_auth`` : Firebase Auth client

A missing or invalid credential makes the import itself fail with
``ConfigError``; there is no fallback to an unauthenticated client.
"""

from backend.core.config import load_settings
from backend.core.firebase import init_firebase

services = init_firebase(load_settings())

admin = services.app
db = services.db
admin_auth = services.auth

__all__ = ["admin", "db", "admin_auth", "services"]
