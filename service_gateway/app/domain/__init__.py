"""
Domain utilities for the Gateway Service.

Holds request-independent business rules that do not belong to adapters
or transport-specific layers, such as the administrative cache controls.
"""

from .admin import CacheAdmin

__all__ = [
    "CacheAdmin",
]
