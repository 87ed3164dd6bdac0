"""
Demo reference data loaded into the in-memory store at startup.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List

from rental_admin.config import Settings
from rental_admin.models.listing import Listing, ListingStatus
from rental_admin.models.user import User, UserRole


def demo_listings() -> List[Listing]:
    """Five sample car listings covering every moderation status."""
    return [
        Listing(
            id=1,
            title="Toyota Camry 2020",
            description="Comfortable sedan for city driving",
            price=Decimal("50"),
            location="New York",
            status=ListingStatus.PENDING,
            submitted_by="user1@example.com",
            submitted_at=datetime(2024, 1, 15, tzinfo=timezone.utc),
            images=["car1.jpg"],
        ),
        Listing(
            id=2,
            title="BMW X5 2021",
            description="Luxury SUV perfect for family trips",
            price=Decimal("120"),
            location="Los Angeles",
            status=ListingStatus.APPROVED,
            submitted_by="user2@example.com",
            submitted_at=datetime(2024, 1, 10, tzinfo=timezone.utc),
            images=["car2.jpg"],
        ),
        Listing(
            id=3,
            title="Honda Civic 2019",
            description="Fuel efficient compact car",
            price=Decimal("35"),
            location="Chicago",
            status=ListingStatus.REJECTED,
            submitted_by="user3@example.com",
            submitted_at=datetime(2024, 1, 20, tzinfo=timezone.utc),
            images=["car3.jpg"],
        ),
        Listing(
            id=4,
            title="Ford Mustang 2022",
            description="Sports car for weekend adventures",
            price=Decimal("95"),
            location="Miami",
            status=ListingStatus.PENDING,
            submitted_by="user4@example.com",
            submitted_at=datetime(2024, 1, 25, tzinfo=timezone.utc),
            images=["car4.jpg"],
        ),
        Listing(
            id=5,
            title="Tesla Model 3 2023",
            description="Electric vehicle with autopilot",
            price=Decimal("80"),
            location="San Francisco",
            status=ListingStatus.APPROVED,
            submitted_by="user5@example.com",
            submitted_at=datetime(2024, 1, 18, tzinfo=timezone.utc),
            images=["car5.jpg"],
        ),
    ]


def admin_users(settings: Settings) -> List[User]:
    """The single configured back-office administrator."""
    return [
        User(
            id=1,
            email=settings.admin_email,
            password_hash=settings.admin_password_hash,
            role=UserRole.ADMIN,
        )
    ]
