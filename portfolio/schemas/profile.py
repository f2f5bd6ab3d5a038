"""
Pydantic models for profile request validation.

Array and nested fields are typed loosely. The section validators in
portfolio.validation report the messages clients display.
"""

from typing import Any, Optional
from pydantic import BaseModel


# ─────────────────────────────────────────────────────────────────
# Hero / About
# ─────────────────────────────────────────────────────────────────

class UpdateHeroRequest(BaseModel):
    """Request to update the hero section."""
    fullName: Optional[str] = None
    position: Optional[str] = None
    bio: Optional[str] = None


class UpdateAboutRequest(BaseModel):
    """Request to update the about section."""
    about: Optional[str] = None
    philosophies: Optional[Any] = None
    cvUrl: Optional[str] = None


# ─────────────────────────────────────────────────────────────────
# Array sections
# ─────────────────────────────────────────────────────────────────

class UpdateAcademicRequest(BaseModel):
    """Request to replace education, achievements and research focus."""
    education: Optional[Any] = None
    achievements: Optional[Any] = None
    researchFocus: Optional[Any] = None


class UpdateNewsRequest(BaseModel):
    newsItems: Optional[Any] = None


class UpdateCoursesRequest(BaseModel):
    courses: Optional[Any] = None


# ─────────────────────────────────────────────────────────────────
# Contact
# ─────────────────────────────────────────────────────────────────

class UpdateContactRequest(BaseModel):
    """Request to update contact details and office hours."""
    adminEmail: Optional[str] = None
    phone: Optional[str] = None
    officeLocation: Optional[Any] = None
    officeHours: Optional[Any] = None


class ContactMessageRequest(BaseModel):
    """A visitor's contact form submission."""
    name: Optional[str] = None
    msgEmail: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
