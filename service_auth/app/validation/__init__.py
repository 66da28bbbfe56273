"""
Token validation package.

Provides helpers used by the Auth Service to issue and validate the HS256
bearer tokens consumed by the gateway:

- Signing access tokens for directory accounts.
- Validating token signature and expiry.
- Shaping a consistent user object from token claims.
"""

from .token_validator import LoginRequest, TokenValidator, TokenVerificationResponse

__all__ = ["LoginRequest", "TokenValidator", "TokenVerificationResponse"]
