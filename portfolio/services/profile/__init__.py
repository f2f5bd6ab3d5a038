"""Profile services."""

from portfolio.services.profile.profile_service import ProfileService

__all__ = ["ProfileService"]
