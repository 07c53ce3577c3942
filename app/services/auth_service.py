"""
Auth Service - admin accounts for the municipal dashboard.

Email + password registration and login. Login issues an opaque bearer
token; only its SHA-256 digest is persisted on the admin document, so each
admin has at most one live session (a new login replaces the old token).
"""

from datetime import datetime, timezone
from typing import Dict, Optional, Tuple
import logging

from app.core.exceptions import AuthError, ConflictError
from app.models.user import AdminResponse
from app.services.document_store import DocumentStore
from app.utils.security import generate_token, hash_password, hash_token, verify_password

logger = logging.getLogger(__name__)

ADMINS_COLLECTION = "admins"


class AuthService:
    """
    Service for admin management in the document store.
    """

    def __init__(self, documents: DocumentStore):
        self.documents = documents

    def _find_one(self, field: str, value: str) -> Optional[Dict]:
        matches = self.documents.query(ADMINS_COLLECTION, {field: value})
        return matches[0] if matches else None

    def register(self, email: str, password: str) -> AdminResponse:
        """
        Create a new admin account.

        Raises:
            ConflictError: email already registered
        """
        email = email.strip().lower()
        if self._find_one("email", email):
            raise ConflictError(f"An admin with email {email} already exists")

        admin = self.documents.create(ADMINS_COLLECTION, {
            "email": email,
            "passwordHash": hash_password(password),
            "createdAt": datetime.now(timezone.utc),
            "lastLoginAt": None,
            "sessionTokenHash": None,
        })
        logger.info(f"Admin registered: {admin['id']}")
        return AdminResponse.model_validate(admin)

    def login(self, email: str, password: str) -> Tuple[str, AdminResponse]:
        """
        Verify credentials and issue a bearer token.

        Raises:
            AuthError: unknown email or wrong password (same message for both)
        """
        admin = self._find_one("email", email.strip().lower())
        if not admin or not verify_password(password, admin.get("passwordHash")):
            raise AuthError("Invalid email or password")

        token = generate_token()
        updated = self.documents.update(ADMINS_COLLECTION, admin["id"], {
            "sessionTokenHash": hash_token(token),
            "lastLoginAt": datetime.now(timezone.utc),
        })
        if updated is None:
            raise AuthError("Invalid email or password")

        logger.info(f"Admin logged in: {admin['id']}")
        return token, AdminResponse.model_validate(updated)

    def verify_token(self, token: Optional[str]) -> AdminResponse:
        """
        Raises:
            AuthError: missing or unknown token
        """
        if not token:
            raise AuthError("Missing bearer token")
        admin = self._find_one("sessionTokenHash", hash_token(token))
        if not admin:
            raise AuthError("Invalid or expired token")
        return AdminResponse.model_validate(admin)

    def logout(self, token: str) -> None:
        admin = self._find_one("sessionTokenHash", hash_token(token))
        if admin:
            self.documents.update(ADMINS_COLLECTION, admin["id"], {"sessionTokenHash": None})


# Global service instance (singleton pattern)
_auth_service: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    global _auth_service
    if _auth_service is None:
        from app.services.document_store import get_document_store

        _auth_service = AuthService(get_document_store())
    return _auth_service
