"""
Fixed, in-memory account directory used by the Auth Service login flow.
"""

import secrets
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from shared.logging import get_logger


@dataclass(frozen=True)
class Account:
    """A login-capable account."""

    user_id: str
    email: str
    name: str
    role: str
    password: str

    def public_view(self) -> Dict[str, Any]:
        """Account fields safe to return to clients."""
        return {
            "id": self.user_id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
        }


def default_accounts() -> List[Account]:
    """Seeded development accounts."""
    return [
        Account(
            user_id="1",
            email="admin@exemplo.com",
            name="Administrador",
            role="admin",
            password="password",
        ),
        Account(
            user_id="2",
            email="user@exemplo.com",
            name="Usuário Comum",
            role="user",
            password="password",
        ),
    ]


class AccountDirectory:
    """Lookup and credential check over a fixed set of accounts."""

    def __init__(self, accounts: Optional[Iterable[Account]] = None):
        self.logger = get_logger("auth.accounts")
        self._by_email: Dict[str, Account] = {}
        self._by_id: Dict[str, Account] = {}
        for account in accounts if accounts is not None else default_accounts():
            self._by_email[account.email.lower()] = account
            self._by_id[account.user_id] = account

    def get(self, user_id: str) -> Optional[Account]:
        return self._by_id.get(user_id)

    def authenticate(self, email: Optional[str], password: Optional[str]) -> Optional[Account]:
        """Return the account when ``email`` and ``password`` match, else None."""
        if not email or not password:
            return None

        account = self._by_email.get(email.strip().lower())
        if account is None:
            self.logger.info("Login for unknown account", email=email)
            return None

        if not secrets.compare_digest(account.password.encode("utf-8"), password.encode("utf-8")):
            self.logger.info("Login with wrong password", user_id=account.user_id)
            return None

        return account
