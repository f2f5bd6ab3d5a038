"""Content collection services."""

from portfolio.services.content.base_content_service import ContentService
from portfolio.services.content.project_service import ProjectService
from portfolio.services.content.certificate_service import CertificateService
from portfolio.services.content.achievement_service import AchievementService
from portfolio.services.content.research_service import ResearchService

__all__ = [
    "ContentService",
    "ProjectService",
    "CertificateService",
    "AchievementService",
    "ResearchService",
]
