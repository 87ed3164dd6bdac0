"""
Pydantic schemas for audit trail responses.
"""

from pydantic import BaseModel, Field
from datetime import datetime


class AuditEntryResponse(BaseModel):
    """Audit entry as returned to back-office clients."""

    id: str = Field(..., description="Audit entry identifier")
    listing_id: int = Field(..., description="Listing the action applied to", examples=[1])
    action: str = Field(..., description="What changed", examples=['Status changed from "pending" to "approved"'])
    admin_email: str = Field(..., description="Admin who acted", examples=["admin@dashboard.com"])
    timestamp: datetime = Field(..., description="When the action happened")
