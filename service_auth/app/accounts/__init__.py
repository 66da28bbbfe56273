"""
Demo account directory for the Auth Service.
"""

from .directory import Account, AccountDirectory, default_accounts

__all__ = ["Account", "AccountDirectory", "default_accounts"]
