"""
Authentication helpers for the Catalog Gateway service.
"""

from .bearer import BearerAuthenticator, Principal, Role

__all__ = [
    "BearerAuthenticator",
    "Principal",
    "Role",
]
