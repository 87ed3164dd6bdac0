"""
Repository layer for in-memory data access.
Provides the listing store with its audit log and the user lookup.
"""

from rental_admin.repositories.audit import AuditLog
from rental_admin.repositories.listing import ListingRepository, ListingPage, ALL_STATUSES
from rental_admin.repositories.user import UserRepository

__all__ = [
    "AuditLog",
    "ListingRepository",
    "ListingPage",
    "ALL_STATUSES",
    "UserRepository",
]
