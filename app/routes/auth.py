"""
Authentication endpoints - admin email + password login for the dashboard.
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import AuthError
from app.models.user import AdminCredentials, AdminResponse, AuthResponse
from app.services.auth_service import AuthService, get_auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

bearer_scheme = HTTPBearer(auto_error=False)


def get_bearer_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> str:
    if credentials is None or not credentials.credentials:
        raise AuthError("Missing bearer token")
    return credentials.credentials


def get_current_admin(
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> AdminResponse:
    """
    Route guard for admin-only endpoints.
    Resolves the bearer token to an admin or fails with 401.
    """
    return auth_service.verify_token(token)


@router.post("/register", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
def register(credentials: AdminCredentials, auth_service: AuthService = Depends(get_auth_service)):
    """
    Create an admin account.

    Raises:
        409: Email already registered
        422: Invalid email or password shorter than 8 characters
    """
    return auth_service.register(credentials.email, credentials.password)


@router.post("/login", response_model=AuthResponse)
def login(credentials: AdminCredentials, auth_service: AuthService = Depends(get_auth_service)):
    token, admin = auth_service.login(credentials.email, credentials.password)
    return AuthResponse(success=True, message="Logged in successfully", token=token, admin=admin)


@router.post("/logout")
def logout(token: str = Depends(get_bearer_token), auth_service: AuthService = Depends(get_auth_service)):
    auth_service.logout(token)
    return {"success": True, "message": "Logged out"}


@router.get("/me", response_model=AdminResponse)
def whoami(admin: AdminResponse = Depends(get_current_admin)):
    return admin
