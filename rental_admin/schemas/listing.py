"""
Pydantic schemas for listing requests and responses.
Handles moderation requests, field edits, pagination and status summaries.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from typing import Optional, List, Dict, Any, Union
from datetime import datetime
from decimal import Decimal
from rental_admin.models.listing import ListingStatus

# Prices are reported as JSON numbers, so they must stay within float range
MAX_PRICE = Decimal("1000000")


class ListingResponse(BaseModel):
    """Listing as returned to back-office clients."""

    id: int = Field(..., description="Listing identifier", examples=[1])
    title: str = Field(..., description="Listing title", examples=["Toyota Camry 2020"])
    description: str = Field(..., description="Listing description")
    price: float = Field(..., description="Price per day", examples=[50.0])
    location: str = Field(..., description="Pick-up location", examples=["New York"])
    status: ListingStatus = Field(..., description="Moderation status", examples=["pending"])
    submitted_by: str = Field(..., description="Submitter e-mail", examples=["user1@example.com"])
    submitted_at: datetime = Field(..., description="Submission timestamp")
    images: List[str] = Field(default_factory=list, description="Image references")


class ListingListResponse(BaseModel):
    """Paginated listing response."""

    items: List[ListingResponse] = Field(..., description="Listings on this page")
    total: int = Field(..., description="Listings matching the filter", examples=[5])
    page: int = Field(..., description="Current page", examples=[1])
    limit: int = Field(..., description="Page size", examples=[10])
    total_pages: int = Field(..., description="Number of pages", examples=[1])
    has_next: bool = Field(..., description="Whether a later page exists")
    has_previous: bool = Field(..., description="Whether an earlier page exists")


class ListingStatsResponse(BaseModel):
    """Listing counts per moderation status."""

    total: int = Field(..., examples=[5])
    pending: int = Field(..., examples=[2])
    approved: int = Field(..., examples=[2])
    rejected: int = Field(..., examples=[1])


class ListingUpdate(BaseModel):
    """Editable listing fields; only the fields provided are changed."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1, max_length=5000)
    price: Optional[Decimal] = Field(
        None,
        gt=0,
        le=MAX_PRICE,
        decimal_places=2,
        description="Price per day"
    )
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    images: Optional[List[str]] = None

    @field_validator("title", "description", "price", "location", "images", mode="before")
    @classmethod
    def reject_null(cls, v):
        """Provided fields cannot be cleared."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("title", "description", "location")
    @classmethod
    def validate_text(cls, v):
        """Validate and clean text fields."""
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()


class ModerationRequest(BaseModel):
    """
    Moderation request body.

    Fields are loosely typed so that missing or malformed parameters are
    reported by the moderation service as bad requests.
    """

    # StrictInt keeps JSON booleans from being coerced to 1 or 0
    id: Optional[Union[StrictInt, str]] = Field(None, description="Listing identifier", examples=[1])
    action: Optional[str] = Field(None, description="updateStatus or edit", examples=["updateStatus"])
    status: Optional[str] = Field(None, description="New status for updateStatus", examples=["approved"])
    updates: Optional[Dict[str, Any]] = Field(None, description="Field changes for edit")

    def payload(self) -> Dict[str, Any]:
        return {"status": self.status, "updates": self.updates}
