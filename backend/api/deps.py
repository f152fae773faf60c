"""FastAPI dependencies handing out the Firebase clients built at startup."""

from fastapi import Request

from backend.core.exceptions import FirebaseNotInitializedError
from backend.core.firebase import FirebaseServices


def get_firebase_services(request: Request) -> FirebaseServices:
    services = getattr(request.app.state, "firebase", None)
    if services is None:
        raise FirebaseNotInitializedError("Firebase services are not attached to the application")
    return services


def get_firestore(request: Request):
    return get_firebase_services(request).db


def get_auth_client(request: Request):
    return get_firebase_services(request).auth
