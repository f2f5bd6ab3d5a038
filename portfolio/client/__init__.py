"""
Presentation-side client for the portfolio API.
"""

from portfolio.client.api_client import ClientError, PortfolioClient
from portfolio.client.sections import (
    AboutSection,
    AcademicSection,
    AchievementsSection,
    CertificatesSection,
    ContactSection,
    CoursesSection,
    HeroSection,
    MessagesSection,
    NewsSection,
    ProjectsSection,
    ResearchSection,
)

__all__ = [
    "ClientError",
    "PortfolioClient",
    "AboutSection",
    "AcademicSection",
    "AchievementsSection",
    "CertificatesSection",
    "ContactSection",
    "CoursesSection",
    "HeroSection",
    "MessagesSection",
    "NewsSection",
    "ProjectsSection",
    "ResearchSection",
]
