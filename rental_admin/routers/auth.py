"""
Authentication API endpoints for login and token inspection.
"""

from typing import Optional
from fastapi import APIRouter, Depends, status

from rental_admin.schemas.auth import (
    LoginRequest,
    LoginResponse,
    CurrentUserResponse,
    TokenValidationResponse
)
from rental_admin.schemas.error import get_auth_error_responses
from rental_admin.services.auth import AuthService
from rental_admin.services.moderation import ModerationService
from rental_admin.utils.dependencies import (
    get_auth_service,
    get_bearer_token,
    get_moderation_service
)


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Admin login",
    description="Authenticate with email and password, returns a JWT access token",
    responses=get_auth_error_responses()
)
async def login(
    login_data: LoginRequest,
    moderation_service: ModerationService = Depends(get_moderation_service),
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """
    Authenticate an admin and return an access token.

    Raises:
        InvalidCredentialsError: If credentials are invalid
    """
    token, user = await moderation_service.authenticate(
        email=login_data.email,
        password=login_data.password
    )

    return LoginResponse(
        user=CurrentUserResponse.model_validate(user.to_dict()),
        access_token=token,
        token_type="bearer",
        expires_in=auth_service.token_service.expires_in
    )


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user",
    description="Get the admin the bearer token was issued for",
    responses=get_auth_error_responses()
)
async def get_current_user_info(
    token: Optional[str] = Depends(get_bearer_token),
    moderation_service: ModerationService = Depends(get_moderation_service)
) -> CurrentUserResponse:
    user = await moderation_service.get_current_user(token)
    return CurrentUserResponse.model_validate(user.to_dict())


@router.post(
    "/validate",
    response_model=TokenValidationResponse,
    status_code=status.HTTP_200_OK,
    summary="Validate token",
    description="Report whether the bearer token is valid and what it claims"
)
async def validate_token(
    token: Optional[str] = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenValidationResponse:
    claims = auth_service.inspect_token(token)
    if claims is None:
        return TokenValidationResponse(valid=False)

    return TokenValidationResponse(
        valid=True,
        user_id=claims.user_id,
        email=claims.email,
        role=claims.role,
        expires_at=claims.expires_at
    )
