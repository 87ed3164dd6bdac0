"""
Domain models for the rental listing moderation API.
Includes Listing, AuditEntry and User records.
"""

from rental_admin.models.listing import Listing, ListingStatus, EDITABLE_FIELDS
from rental_admin.models.audit import AuditEntry
from rental_admin.models.user import User, UserRole

__all__ = [
    "Listing",
    "ListingStatus",
    "EDITABLE_FIELDS",
    "AuditEntry",
    "User",
    "UserRole",
]
