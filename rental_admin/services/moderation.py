"""
Moderation service: the boundary the HTTP layer calls into.
Gates every listing and audit operation behind a valid token, validates
moderation requests and delegates to the listing repository.
"""

from typing import Optional, List, Dict, Any, Tuple
from pydantic import ValidationError as PydanticValidationError

from rental_admin.models.audit import AuditEntry
from rental_admin.models.listing import Listing, ListingStatus
from rental_admin.models.user import User
from rental_admin.repositories.listing import ListingRepository, ListingPage, ALL_STATUSES
from rental_admin.schemas.listing import ListingUpdate
from rental_admin.services.auth import AuthService
from rental_admin.services.error_handler import ErrorHandlerService
from rental_admin.utils.exceptions import (
    APIException,
    BadRequestError,
    InternalServerError,
    ListingNotFoundError
)
import logging

logger = logging.getLogger(__name__)

ACTION_UPDATE_STATUS = "updateStatus"
ACTION_EDIT = "edit"


class ModerationService:
    """
    Facade over authentication, the listing store and its audit trail.

    Client errors surface as APIException subclasses; anything unexpected is
    logged and reported as a generic InternalServerError.
    """

    def __init__(
        self,
        listing_repository: ListingRepository,
        auth_service: AuthService,
        default_page_size: int = 10,
        max_page_size: int = 100
    ):
        self.listing_repo = listing_repository
        self.auth_service = auth_service
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def authenticate(self, email: str, password: str) -> Tuple[str, User]:
        """
        Authenticate an admin and issue an access token.

        Returns:
            Tuple of (access_token, user)

        Raises:
            InvalidCredentialsError: If the e-mail is unknown or the password is wrong
        """
        try:
            user, token = await self.auth_service.login(email, password)
            return token, user
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Authentication failed unexpectedly for {email}: {e}", exc_info=True)
            raise InternalServerError()

    async def get_current_user(self, token: Optional[str]) -> User:
        """Resolve the token to the admin it was issued for."""
        try:
            return await self.auth_service.get_current_user(token)
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to resolve current user: {e}", exc_info=True)
            raise InternalServerError()

    async def list_listings(
        self,
        token: Optional[str],
        page: int = 1,
        limit: Optional[int] = None,
        status_filter: Optional[str] = None
    ) -> ListingPage:
        """
        Get a page of listings, optionally filtered by status.

        Args:
            token: Bearer token
            page: 1-based page number
            limit: Page size, defaults to the configured page size
            status_filter: pending, approved, rejected, "all" or None

        Raises:
            UnauthorizedError: If the token is missing or invalid
            BadRequestError: If pagination or the status filter is invalid
        """
        self.auth_service.require_token(token)

        if limit is None:
            limit = self.default_page_size
        if page < 1:
            raise BadRequestError("Page must be a positive integer")
        if limit < 1 or limit > self.max_page_size:
            raise BadRequestError(f"Limit must be between 1 and {self.max_page_size}")

        status = self._parse_status_filter(status_filter)

        try:
            return self.listing_repo.list(page=page, limit=limit, status_filter=status)
        except Exception as e:
            logger.error(f"Failed to list listings: {e}", exc_info=True)
            raise InternalServerError()

    async def get_listing(self, token: Optional[str], listing_id: int) -> Listing:
        """
        Get one listing.

        Raises:
            ListingNotFoundError: If the listing does not exist
        """
        self.auth_service.require_token(token)

        try:
            listing = self.listing_repo.get_by_id(listing_id)
        except Exception as e:
            logger.error(f"Failed to get listing {listing_id}: {e}", exc_info=True)
            raise InternalServerError()

        if listing is None:
            raise ListingNotFoundError(listing_id)
        return listing

    async def moderate(
        self,
        token: Optional[str],
        listing_id: Any,
        action: Optional[str],
        payload: Dict[str, Any]
    ) -> Listing:
        """
        Apply a moderation action to a listing.

        Args:
            token: Bearer token
            listing_id: Listing identifier (int or numeric string)
            action: "updateStatus" (payload["status"]) or "edit" (payload["updates"])
            payload: Action parameters

        Returns:
            Updated listing

        Raises:
            UnauthorizedError: If the token is missing or invalid
            BadRequestError: If the id, action or its parameters are missing or invalid
            ListingNotFoundError: If the listing does not exist
        """
        claims = self.auth_service.require_token(token)
        listing_id = self._parse_listing_id(listing_id)

        if action == ACTION_UPDATE_STATUS:
            status = self._parse_status(payload.get("status"))
            updated = self._apply(
                lambda: self.listing_repo.update_status(listing_id, status, claims.email),
                listing_id
            )
            logger.info(f"Listing {listing_id} set to {status.value} by {claims.email}")
        elif action == ACTION_EDIT:
            updates = self._parse_updates(payload.get("updates"))
            updated = self._apply(
                lambda: self.listing_repo.update_fields(listing_id, updates, claims.email),
                listing_id
            )
            logger.info(f"Listing {listing_id} edited by {claims.email}: {', '.join(updates)}")
        else:
            raise BadRequestError("Invalid action or missing parameters")

        return updated

    async def get_audit_trail(self, token: Optional[str]) -> List[AuditEntry]:
        """Get every audit entry, most recent first."""
        self.auth_service.require_token(token)

        try:
            return self.listing_repo.audit_trail()
        except Exception as e:
            logger.error(f"Failed to read audit trail: {e}", exc_info=True)
            raise InternalServerError()

    async def get_status_summary(self, token: Optional[str]) -> Dict[str, int]:
        """Get listing counts per status plus the overall total."""
        self.auth_service.require_token(token)

        try:
            return self.listing_repo.count_by_status()
        except Exception as e:
            logger.error(f"Failed to summarize listings: {e}", exc_info=True)
            raise InternalServerError()

    # Private helpers for request validation

    def _apply(self, mutation, listing_id: int) -> Listing:
        try:
            updated = mutation()
        except Exception as e:
            logger.error(f"Failed to update listing {listing_id}: {e}", exc_info=True)
            raise InternalServerError()

        if updated is None:
            raise ListingNotFoundError(listing_id)
        return updated

    @staticmethod
    def _parse_listing_id(value: Any) -> int:
        if value is None or value == "":
            raise BadRequestError("Listing ID is required")
        if isinstance(value, bool):
            raise BadRequestError("Listing ID must be an integer")
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            raise BadRequestError("Listing ID must be an integer")

    @staticmethod
    def _parse_status(value: Any) -> ListingStatus:
        if not value:
            raise BadRequestError("Invalid action or missing parameters")
        try:
            return ListingStatus(value)
        except ValueError:
            allowed = ", ".join(status.value for status in ListingStatus)
            raise BadRequestError(f"Invalid status '{value}'. Must be one of: {allowed}")

    @staticmethod
    def _parse_status_filter(value: Optional[str]) -> Optional[ListingStatus]:
        if value is None or value == "" or value == ALL_STATUSES:
            return None
        try:
            return ListingStatus(value)
        except ValueError:
            raise BadRequestError(f"Invalid status filter '{value}'")

    @staticmethod
    def _parse_updates(value: Any) -> Dict[str, Any]:
        if not isinstance(value, dict) or not value:
            raise BadRequestError("Invalid action or missing parameters")

        try:
            update = ListingUpdate.model_validate(value)
        except PydanticValidationError as e:
            raise BadRequestError(
                "Invalid listing updates",
                field_errors=ErrorHandlerService.field_errors(e.errors())
            )

        return update.model_dump(exclude_unset=True)
