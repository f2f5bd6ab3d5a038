"""API routers."""

from portfolio.routers.users import router as users_router
from portfolio.routers.research_achievement import router as research_achievement_router
from portfolio.routers.projects import router as projects_router
from portfolio.routers.certificates import router as certificates_router

__all__ = [
    "users_router",
    "research_achievement_router",
    "projects_router",
    "certificates_router",
]
