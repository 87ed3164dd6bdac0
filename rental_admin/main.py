"""
FastAPI application entry point.
Builds the in-memory store and services once per application and wires the API.
"""

from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from rental_admin.config import Settings, get_settings
from rental_admin.repositories.listing import ListingRepository
from rental_admin.repositories.user import UserRepository
from rental_admin.repositories.seed import admin_users, demo_listings
from rental_admin.routers import auth_router, listings_router, audit_router
from rental_admin.services.auth import AuthService
from rental_admin.services.error_handler import ErrorHandlerService
from rental_admin.services.moderation import ModerationService
from rental_admin.services.tokens import TokenService
from rental_admin.middleware import RequestLoggingMiddleware
from rental_admin.utils.exceptions import APIException

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Loaded {len(app.state.listing_repository)} listings")

    yield

    # In-memory state is discarded with the process
    logger.info(
        f"Shutting down application ({app.state.listing_repository.audit_count()} audit entries recorded)"
    )


def create_app(
    settings: Optional[Settings] = None,
    listing_repository: Optional[ListingRepository] = None,
    user_repository: Optional[UserRepository] = None
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Application settings, defaults to the cached environment settings
        listing_repository: Listing store, defaults to one seeded from demo data
        user_repository: User lookup, defaults to the configured admin

    Returns:
        Configured FastAPI application owning its store and services
    """
    settings = settings or get_settings()

    if listing_repository is None:
        listing_repository = ListingRepository(demo_listings() if settings.seed_demo_data else ())
    if user_repository is None:
        user_repository = UserRepository(admin_users(settings))

    token_service = TokenService.from_settings(settings)
    auth_service = AuthService(user_repository, token_service)
    moderation_service = ModerationService(
        listing_repository,
        auth_service,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
        Back-office API for moderating user-submitted car-rental listings.

        ## Features

        * **Listings**: Paginated listing with status filtering
        * **Moderation**: Approve, reject or edit listings
        * **Audit Trail**: Every moderation action is recorded

        ## Authentication

        Use the `/api/auth/login` endpoint to obtain a JWT token,
        then include it in the Authorization header as `Bearer <token>`.
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "Authentication", "description": "Admin login and token inspection"},
            {"name": "Listings", "description": "Listing moderation"},
            {"name": "Audit", "description": "Moderation audit trail"},
            {"name": "Health", "description": "Liveness checks"},
        ],
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.listing_repository = listing_repository
    app.state.auth_service = auth_service
    app.state.moderation_service = moderation_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Processing-Time"],
    )

    app.add_middleware(
        RequestLoggingMiddleware,
        enable_detailed_logging=settings.debug,
        slow_request_threshold=2.0,
    )

    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(listings_router, prefix=settings.api_prefix)
    app.include_router(audit_router, prefix=settings.api_prefix)

    register_exception_handlers(app)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Liveness check reporting in-memory store sizes."""
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "listings": len(listing_repository),
            "audit_entries": listing_repository.audit_count(),
        }

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Route every error through ErrorHandlerService."""

    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        """Handle custom API exceptions with structured error responses."""
        return ErrorHandlerService.handle_api_exception(exc, request)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors as bad requests."""
        return ErrorHandlerService.handle_validation_error(exc, request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle routing errors (unknown paths, wrong methods) with structured error responses."""
        return ErrorHandlerService.handle_http_exception(exc, request)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with secure error responses."""
        return ErrorHandlerService.handle_unexpected_error(exc, request)


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "rental_admin.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
