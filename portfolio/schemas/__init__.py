"""Request schemas."""

from portfolio.schemas.profile import (
    UpdateHeroRequest,
    UpdateAboutRequest,
    UpdateAcademicRequest,
    UpdateNewsRequest,
    UpdateCoursesRequest,
    UpdateContactRequest,
    ContactMessageRequest,
)

__all__ = [
    "UpdateHeroRequest",
    "UpdateAboutRequest",
    "UpdateAcademicRequest",
    "UpdateNewsRequest",
    "UpdateCoursesRequest",
    "UpdateContactRequest",
    "ContactMessageRequest",
]
