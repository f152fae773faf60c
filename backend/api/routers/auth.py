"""
Auth Router - Firebase-authenticated profile.

Endpoints:
- GET /auth/me - Identity of the caller, as verified from the Firebase ID token
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from backend.core.auth import UserInfo, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()


class UserProfileResponse(BaseModel):
    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    email_verified: bool = False


@router.get("/me", response_model=UserProfileResponse)
async def get_me(current_user: UserInfo = Depends(get_current_user)):
    return UserProfileResponse(
        uid=current_user.uid,
        email=current_user.email,
        name=current_user.name,
        email_verified=current_user.email_verified,
    )
