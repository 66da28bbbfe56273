"""
Token issuing and validation for Auth service.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel

from shared.logging import get_logger
from shared.errors import AuthenticationError, InvalidTokenError
from shared.tokens import TokenSigner

from ..accounts import Account, AccountDirectory


class LoginRequest(BaseModel):
    """Request model for login; fields are optional so missing ones yield 401."""
    email: Optional[str] = None
    password: Optional[str] = None


class TokenVerificationResponse(BaseModel):
    """Response model for token verification."""
    valid: bool
    claims: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class TokenValidator:
    """Issues tokens for directory accounts and validates presented tokens."""

    def __init__(self, signer: TokenSigner, directory: AccountDirectory):
        self.signer = signer
        self.directory = directory
        self.logger = get_logger("auth.validator")

    def issue_for(self, account: Account) -> str:
        """Sign an access token for ``account``."""
        return self.signer.issue(account.user_id, role=account.role, email=account.email)

    def verify_token(self, token: str) -> TokenVerificationResponse:
        """Verify a JWT token without raising."""
        if token.startswith("Bearer "):
            token = token[7:]

        try:
            claims = self.signer.decode(token.strip())
        except InvalidTokenError as e:
            self.logger.warning("Token verification failed", error=e.message, details=e.details)
            return TokenVerificationResponse(valid=False, error=e.message)

        return TokenVerificationResponse(valid=True, claims=claims)

    def user_from_authorization(self, authorization: Optional[str]) -> Dict[str, Any]:
        """Resolve the caller's user info from an Authorization header.

        Raises AuthenticationError when no bearer token is present and
        InvalidTokenError when the token does not verify.
        """
        if not authorization or not authorization.startswith("Bearer ") or not authorization[7:].strip():
            raise AuthenticationError()

        response = self.verify_token(authorization)
        if not response.valid:
            raise InvalidTokenError()

        return self.get_user_info(response.claims or {})

    def get_user_info(self, claims: Dict[str, Any]) -> Dict[str, Any]:
        """Get user information from token claims, enriched from the directory."""
        user_id = str(claims.get("sub"))
        account = self.directory.get(user_id)
        if account is not None:
            return account.public_view()

        return {
            "id": user_id,
            "email": claims.get("email"),
            "role": claims.get("role", "user"),
        }
