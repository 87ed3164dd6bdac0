"""
Test configuration and fixtures for the rental listing moderation API.
Provides settings, repositories, services, tokens and an HTTP test client.
"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient

from rental_admin.config import Settings
from rental_admin.main import create_app
from rental_admin.models.listing import ListingStatus
from rental_admin.models.user import User, UserRole
from rental_admin.repositories.listing import ListingRepository
from rental_admin.repositories.seed import demo_listings
from rental_admin.repositories.user import UserRepository
from rental_admin.services.auth import AuthService
from rental_admin.services.moderation import ModerationService
from rental_admin.services.tokens import TokenService
from rental_admin.utils.auth import hash_password


TEST_SECRET_KEY = "test-secret-key-that-is-at-least-32-characters"
TEST_ADMIN_EMAIL = "admin@dashboard.com"
TEST_PASSWORD = "testpassword123"


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Bcrypt hash of the test password (hashed once per session)."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def settings(password_hash: str) -> Settings:
    """Settings isolated from the environment's secret and admin account."""
    return Settings(
        environment="testing",
        jwt_secret_key=TEST_SECRET_KEY,
        access_token_expire_minutes=60,
        default_page_size=10,
        max_page_size=100,
        seed_demo_data=True,
        admin_email=TEST_ADMIN_EMAIL,
        admin_password_hash=password_hash,
    )


@pytest.fixture
def admin_user(password_hash: str) -> User:
    """The single back-office administrator."""
    return User(id=1, email=TEST_ADMIN_EMAIL, password_hash=password_hash, role=UserRole.ADMIN)


# Repository fixtures
@pytest.fixture
def user_repository(admin_user: User) -> UserRepository:
    """Create a user repository holding the test admin."""
    return UserRepository([admin_user])


@pytest.fixture
def listing_repository() -> ListingRepository:
    """Create a listing repository seeded with the five demo listings."""
    return ListingRepository(demo_listings())


@pytest.fixture
def empty_repository() -> ListingRepository:
    """Create a listing repository with no listings."""
    return ListingRepository()


# Service fixtures
@pytest.fixture
def token_service(settings: Settings) -> TokenService:
    """Create a token service signing with the test secret."""
    return TokenService.from_settings(settings)


@pytest.fixture
def auth_service(user_repository: UserRepository, token_service: TokenService) -> AuthService:
    """Create an auth service instance."""
    return AuthService(user_repository, token_service)


@pytest.fixture
def moderation_service(
    listing_repository: ListingRepository,
    auth_service: AuthService
) -> ModerationService:
    """Create a moderation service instance."""
    return ModerationService(listing_repository, auth_service, default_page_size=10, max_page_size=100)


# Token fixtures
@pytest.fixture
def admin_token(token_service: TokenService, admin_user: User) -> str:
    """Valid access token for the test admin."""
    return token_service.issue(admin_user)


@pytest.fixture
def auth_headers(admin_token: str) -> dict:
    """Authorization headers carrying the admin token."""
    return {"Authorization": f"Bearer {admin_token}"}


# Application fixtures
@pytest.fixture
def app(settings: Settings, listing_repository: ListingRepository, user_repository: UserRepository):
    """Application wired to the test repositories."""
    return create_app(
        settings=settings,
        listing_repository=listing_repository,
        user_repository=user_repository
    )


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client running the application lifespan."""
    with TestClient(app) as test_client:
        yield test_client


# Test data factories
class ListingFactory:
    """Factory for creating test listings."""

    @staticmethod
    def create_listing_data(
        title: str = "Test Car",
        description: str = "A reliable test car",
        price: Decimal = Decimal("50"),
        location: str = "Test City",
        status: ListingStatus = ListingStatus.PENDING,
        submitted_by: str = "owner@example.com",
        submitted_at: datetime = None,
        images: list = None
    ) -> dict:
        """Create listing data dictionary."""
        return {
            "title": title,
            "description": description,
            "price": price,
            "location": location,
            "status": status,
            "submitted_by": submitted_by,
            "submitted_at": submitted_at or datetime(2024, 2, 1, tzinfo=timezone.utc),
            "images": images if images is not None else ["test.jpg"],
        }

    @staticmethod
    def create_listing(repository: ListingRepository, **overrides):
        """Create a test listing in the repository."""
        return repository.create(ListingFactory.create_listing_data(**overrides))


class FakeClock:
    """Controllable clock for audit timestamps."""

    def __init__(self, start: datetime = None):
        self.now = start or datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def set(self, when: datetime) -> None:
        self.now = when
