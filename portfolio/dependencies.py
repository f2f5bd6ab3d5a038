"""
FastAPI dependencies for the portfolio application.

Provides dependency injection for all services.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.auth import JWTAuth
from portfolio.config import Settings
from portfolio.middleware.auth import AuthMiddleware
from portfolio.services.media.media_service import MediaService
from portfolio.services.content.project_service import ProjectService
from portfolio.services.content.certificate_service import CertificateService
from portfolio.services.content.achievement_service import AchievementService
from portfolio.services.content.research_service import ResearchService
from portfolio.services.profile.profile_service import ProfileService


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

# Auth
_auth_middleware: Optional[AuthMiddleware] = None

# Media
_media_service: Optional[MediaService] = None

# Content
_project_service: Optional[ProjectService] = None
_certificate_service: Optional[CertificateService] = None
_achievement_service: Optional[AchievementService] = None
_research_service: Optional[ResearchService] = None

# Profile
_profile_service: Optional[ProfileService] = None


# ─────────────────────────────────────────────────────────────────
# Initialization functions
# ─────────────────────────────────────────────────────────────────

def init_auth_services(settings: Settings) -> None:
    """Initialize auth services."""
    global _auth_middleware

    jwt_auth = JWTAuth(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        access_token_expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
    )
    _auth_middleware = AuthMiddleware(
        auth_provider=jwt_auth,
        cookie_name=settings.JWT_COOKIE_NAME,
        admin_role=settings.ADMIN_ROLE,
    )


def init_media_services(settings: Settings) -> None:
    """Initialize media services."""
    global _media_service

    _media_service = MediaService(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        api_base=settings.CLOUDINARY_API_BASE,
        timeout=settings.MEDIA_TIMEOUT_SECONDS,
    )


def init_content_services(db: AsyncIOMotorDatabase, settings: Settings) -> None:
    """Initialize content collection services."""
    global _project_service, _certificate_service
    global _achievement_service, _research_service

    owner = settings.PORTFOLIO_OWNER
    _project_service = ProjectService(
        db=db,
        media=_media_service,
        owner=owner,
        default_limit=settings.PROJECTS_PAGE_SIZE,
    )
    _certificate_service = CertificateService(
        db=db,
        media=_media_service,
        owner=owner,
        default_limit=settings.CERTIFICATES_PAGE_SIZE,
    )
    _achievement_service = AchievementService(db=db, media=_media_service, owner=owner)
    _research_service = ResearchService(db=db, media=_media_service, owner=owner)


def init_profile_services(db: AsyncIOMotorDatabase, settings: Settings) -> None:
    """Initialize profile services."""
    global _profile_service

    _profile_service = ProfileService(
        db=db,
        media=_media_service,
        owner=settings.PORTFOLIO_OWNER,
    )


def init_all_services(db: AsyncIOMotorDatabase, settings: Settings) -> None:
    """
    Initialize all services at application startup.

    Args:
        db: Portfolio MongoDB database connection
        settings: Application settings
    """
    init_auth_services(settings)
    init_media_services(settings)
    init_content_services(db, settings)
    init_profile_services(db, settings)


# ─────────────────────────────────────────────────────────────────
# Auth getters
# ─────────────────────────────────────────────────────────────────

def get_auth_middleware() -> AuthMiddleware:
    """Get auth middleware instance."""
    if _auth_middleware is None:
        raise RuntimeError("Auth services not initialized.")
    return _auth_middleware


async def require_auth(
    request: Request,
    auth_middleware: Annotated[AuthMiddleware, Depends(get_auth_middleware)]
) -> dict:
    """Dependency that requires authentication."""
    return await auth_middleware.require_auth(request)


async def require_admin(
    user: Annotated[dict, Depends(require_auth)],
    auth_middleware: Annotated[AuthMiddleware, Depends(get_auth_middleware)]
) -> dict:
    """Dependency that requires an authenticated admin."""
    return auth_middleware.require_admin(user)


# ─────────────────────────────────────────────────────────────────
# Service getters
# ─────────────────────────────────────────────────────────────────

def get_project_service() -> ProjectService:
    """Get project service instance."""
    if _project_service is None:
        raise RuntimeError("Content services not initialized.")
    return _project_service


def get_certificate_service() -> CertificateService:
    """Get certificate service instance."""
    if _certificate_service is None:
        raise RuntimeError("Content services not initialized.")
    return _certificate_service


def get_achievement_service() -> AchievementService:
    """Get achievement service instance."""
    if _achievement_service is None:
        raise RuntimeError("Content services not initialized.")
    return _achievement_service


def get_research_service() -> ResearchService:
    """Get research service instance."""
    if _research_service is None:
        raise RuntimeError("Content services not initialized.")
    return _research_service


def get_profile_service() -> ProfileService:
    """Get profile service instance."""
    if _profile_service is None:
        raise RuntimeError("Profile services not initialized.")
    return _profile_service
