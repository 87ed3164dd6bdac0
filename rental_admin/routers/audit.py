"""
Audit trail API endpoint.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, status

from rental_admin.schemas.audit import AuditEntryResponse
from rental_admin.schemas.error import get_error_responses
from rental_admin.services.moderation import ModerationService
from rental_admin.utils.dependencies import get_bearer_token, get_moderation_service


router = APIRouter(prefix="/audit", tags=["Audit"])


@router.get(
    "",
    response_model=List[AuditEntryResponse],
    status_code=status.HTTP_200_OK,
    summary="Get audit trail",
    description="Every moderation action, most recent first",
    responses=get_error_responses(401, 500)
)
async def get_audit_trail(
    token: Optional[str] = Depends(get_bearer_token),
    moderation_service: ModerationService = Depends(get_moderation_service)
) -> List[AuditEntryResponse]:
    entries = await moderation_service.get_audit_trail(token)
    return [AuditEntryResponse.model_validate(entry.to_dict()) for entry in entries]
