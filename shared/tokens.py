"""
Bearer token signing and verification shared by the auth service and gateway.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from shared.errors import InvalidTokenError


class TokenSigner:
    """Issue and decode HS256 bearer tokens with a shared secret."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: int = 86400):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, subject: str, role: str, email: Optional[str] = None,
              expires_in: Optional[int] = None) -> str:
        """Sign an access token for the given subject."""
        now = datetime.now(timezone.utc)
        lifetime = self.expires_in if expires_in is None else expires_in
        payload: Dict[str, Any] = {
            "sub": subject,
            "role": role,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=lifetime)).timestamp()),
        }
        if email:
            payload["email"] = email

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        """Verify signature and expiry and return the token claims."""
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError(details="Token expirado") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError() from exc

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise InvalidTokenError()
        return claims
