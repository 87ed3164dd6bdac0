"""
Listing model for car-rental offers awaiting moderation.
Listings are plain in-memory records owned by the listing repository.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from decimal import Decimal
from typing import List, Dict, Any
import enum


class ListingStatus(str, enum.Enum):
    """Moderation status of a listing."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# Fields an admin may change through an edit; id, status, submitter and
# submission time are not editable this way.
EDITABLE_FIELDS = ("title", "description", "price", "location", "images")


@dataclass
class Listing:
    """
    Car-rental listing submitted by a user.

    The ``id`` and ``submitted_at`` values are fixed at creation. ``status``
    only changes through a status update so it always holds a ListingStatus.
    """

    id: int
    title: str
    description: str
    price: Decimal
    location: str
    submitted_by: str
    submitted_at: datetime
    status: ListingStatus = ListingStatus.PENDING
    images: List[str] = field(default_factory=list)

    def __repr__(self) -> str:
        """String representation of the listing."""
        return f"<Listing(id={self.id}, title={self.title}, status={self.status.value})>"

    def copy(self) -> "Listing":
        """Return an independent copy safe to hand out of the store."""
        return Listing(**{**asdict(self), "images": list(self.images)})

    def to_dict(self) -> Dict[str, Any]:
        """Convert listing to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "price": float(self.price),
            "location": self.location,
            "status": self.status.value,
            "submitted_by": self.submitted_by,
            "submitted_at": self.submitted_at,
            "images": list(self.images),
        }
