"""
Listing moderation API endpoints: paginated listing, status summary and moderation actions.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, status

from rental_admin.models.listing import Listing
from rental_admin.schemas.listing import (
    ListingResponse,
    ListingListResponse,
    ListingStatsResponse,
    ModerationRequest
)
from rental_admin.schemas.error import get_moderation_error_responses
from rental_admin.services.moderation import ModerationService
from rental_admin.utils.dependencies import get_bearer_token, get_moderation_service


router = APIRouter(prefix="/listings", tags=["Listings"])


def to_response(listing: Listing) -> ListingResponse:
    return ListingResponse.model_validate(listing.to_dict())


@router.get(
    "",
    response_model=ListingListResponse,
    status_code=status.HTTP_200_OK,
    summary="List listings",
    description="Get a page of listings in submission order, optionally filtered by status",
    responses=get_moderation_error_responses()
)
async def list_listings(
    page: int = Query(1, description="Page number (starts from 1)"),
    limit: Optional[int] = Query(None, description="Number of listings per page"),
    status_filter: Optional[str] = Query(
        None,
        alias="status",
        description="pending, approved, rejected or all"
    ),
    token: Optional[str] = Depends(get_bearer_token),
    moderation_service: ModerationService = Depends(get_moderation_service)
) -> ListingListResponse:
    """
    Get paginated list of listings.

    Raises:
        UnauthorizedError: If the token is missing or invalid
        BadRequestError: If page, limit or status is invalid
    """
    result = await moderation_service.list_listings(
        token,
        page=page,
        limit=limit,
        status_filter=status_filter
    )

    return ListingListResponse(
        items=[to_response(listing) for listing in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
        has_next=result.page < result.total_pages,
        has_previous=result.page > 1
    )


@router.get(
    "/stats",
    response_model=ListingStatsResponse,
    status_code=status.HTTP_200_OK,
    summary="Listing status summary",
    description="Count listings per moderation status",
    responses=get_moderation_error_responses()
)
async def get_listing_stats(
    token: Optional[str] = Depends(get_bearer_token),
    moderation_service: ModerationService = Depends(get_moderation_service)
) -> ListingStatsResponse:
    counts = await moderation_service.get_status_summary(token)
    return ListingStatsResponse(**counts)


@router.get(
    "/{listing_id}",
    response_model=ListingResponse,
    status_code=status.HTTP_200_OK,
    summary="Get listing details",
    responses=get_moderation_error_responses()
)
async def get_listing(
    listing_id: int = Path(..., description="Listing ID"),
    token: Optional[str] = Depends(get_bearer_token),
    moderation_service: ModerationService = Depends(get_moderation_service)
) -> ListingResponse:
    listing = await moderation_service.get_listing(token, listing_id)
    return to_response(listing)


@router.put(
    "",
    response_model=ListingResponse,
    status_code=status.HTTP_200_OK,
    summary="Moderate listing",
    description="Change a listing's status (action=updateStatus) or edit its fields (action=edit)",
    responses=get_moderation_error_responses()
)
async def moderate_listing(
    moderation_request: ModerationRequest,
    token: Optional[str] = Depends(get_bearer_token),
    moderation_service: ModerationService = Depends(get_moderation_service)
) -> ListingResponse:
    """
    Apply a moderation action and return the updated listing.

    Raises:
        UnauthorizedError: If the token is missing or invalid
        BadRequestError: If the id, action or parameters are missing or invalid
        ListingNotFoundError: If the listing does not exist
    """
    listing = await moderation_service.moderate(
        token,
        moderation_request.id,
        moderation_request.action,
        moderation_request.payload()
    )
    return to_response(listing)
