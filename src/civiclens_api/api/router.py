"""Root API router with /api/v1 prefix and middleware registration."""

from fastapi import APIRouter, FastAPI

from civiclens_api.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware, setup_cors
from civiclens_api.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included."""
    from civiclens_api.api.v1.auth import router as auth_router
    from civiclens_api.api.v1.hierarchy import hierarchy_router
    from civiclens_api.api.v1.moderation import moderation_router
    from civiclens_api.api.v1.profiles import profiles_router
    from civiclens_api.api.v1.representatives import representatives_router

    root_router = APIRouter(prefix=settings.api_v1_prefix)
    root_router.include_router(auth_router)
    root_router.include_router(hierarchy_router)
    root_router.include_router(profiles_router)
    root_router.include_router(representatives_router)
    root_router.include_router(moderation_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app."""
    setup_cors(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RateLimitMiddleware, requests_per_minute=settings.rate_limit_per_minute)
