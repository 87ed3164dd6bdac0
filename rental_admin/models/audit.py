"""
Audit entry model recording a single moderation action.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any


@dataclass(frozen=True)
class AuditEntry:
    """Immutable record of one moderation action on a listing."""

    id: str
    listing_id: int
    action: str
    admin_email: str
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert audit entry to dictionary."""
        return {
            "id": self.id,
            "listing_id": self.listing_id,
            "action": self.action,
            "admin_email": self.admin_email,
            "timestamp": self.timestamp,
        }
