"""
Firebase Authentication dependency for FastAPI.

Verifies Firebase ID tokens with the Auth client built at startup
(``app.state.firebase.auth``). No dev-mode bypass: without a valid token the
request is rejected.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth as firebase_auth

from backend.api.deps import get_auth_client

logger = logging.getLogger(__name__)


@dataclass
class UserInfo:
    """Authenticated user information."""
    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    email_verified: bool = False


security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    cred: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_client: firebase_auth.Client = Depends(get_auth_client),
) -> UserInfo:
    """FastAPI dependency that extracts and verifies a Firebase ID token."""
    if cred is None:
        raise _unauthorized("Authentication required")

    try:
        decoded = auth_client.verify_id_token(cred.credentials, check_revoked=True)
    except firebase_auth.ExpiredIdTokenError:
        raise _unauthorized("Token expired")
    except firebase_auth.RevokedIdTokenError:
        raise _unauthorized("Token revoked")
    except firebase_auth.UserDisabledError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )
    except firebase_auth.InvalidIdTokenError:
        raise _unauthorized("Invalid token")
    except Exception as e:
        logger.error(f"Token verification failed: {e}")
        raise _unauthorized("Token verification failed")

    return UserInfo(
        uid=decoded["uid"],
        email=decoded.get("email"),
        name=decoded.get("name"),
        email_verified=bool(decoded.get("email_verified", False)),
    )
