"""
Admin auth endpoints — login, me.

The back office has one admin account (ADMIN_USERNAME / ADMIN_PASSWORD_HASH).
Public pages never need a token; pricing and job tools do.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from ..auth import authenticate_admin, create_access_token, get_current_admin
from ..config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


# --- Request/Response schemas ---

class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class AdminResponse(BaseModel):
    username: str
    company_name: str
    company_email: str
    company_phone: str


# --- Endpoints ---

@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest):
    """Authenticate the admin. Returns a bearer access token."""
    if not authenticate_admin(request.username, request.password):
        logger.warning("Failed admin login for %r", request.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )
    return TokenResponse(
        access_token=create_access_token(request.username),
        expires_in=settings.JWT_ACCESS_EXPIRE_MINUTES * 60,
    )


@router.get("/me", response_model=AdminResponse)
def me(username: str = Depends(get_current_admin)):
    return AdminResponse(
        username=username,
        company_name=settings.COMPANY_NAME,
        company_email=settings.COMPANY_EMAIL,
        company_phone=settings.COMPANY_PHONE,
    )
