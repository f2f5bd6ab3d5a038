"""
Portfolio Services.

All service classes organized by feature.
"""

# Media
from portfolio.services.media.media_service import MediaService, UploadedFile

# Content collections
from portfolio.services.content.project_service import ProjectService
from portfolio.services.content.certificate_service import CertificateService
from portfolio.services.content.achievement_service import AchievementService
from portfolio.services.content.research_service import ResearchService

# Profile singleton
from portfolio.services.profile.profile_service import ProfileService

__all__ = [
    "MediaService",
    "UploadedFile",
    "ProjectService",
    "CertificateService",
    "AchievementService",
    "ResearchService",
    "ProfileService",
]
