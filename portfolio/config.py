"""
Portfolio application settings.

Extends the base settings with owner, role and media-service configuration.
"""

from typing import List, Optional
from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Portfolio-specific settings."""

    # ==========================================================================
    # Single-tenant ownership
    # ==========================================================================
    # Every document is stamped with this owner and every query filters on it.
    PORTFOLIO_OWNER: str = "admin"

    # Role claim required on mutating routes
    ADMIN_ROLE: str = "admin"

    # ==========================================================================
    # Media Service (Cloudinary-compatible)
    # ==========================================================================
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    CLOUDINARY_API_BASE: str = "https://api.cloudinary.com/v1_1"

    # Seconds to wait for upload/destroy/download calls
    MEDIA_TIMEOUT_SECONDS: float = 60.0

    # ==========================================================================
    # Listing defaults
    # ==========================================================================
    PROJECTS_PAGE_SIZE: int = 9
    CERTIFICATES_PAGE_SIZE: int = 12

    def media_configured(self) -> bool:
        """Check whether all media-service credentials are present."""
        return bool(
            self.CLOUDINARY_CLOUD_NAME
            and self.CLOUDINARY_API_KEY
            and self.CLOUDINARY_API_SECRET
        )

    def collect_errors(self) -> List[str]:
        errors = super().collect_errors()
        if self.is_production() and not self.media_configured():
            errors.append(
                "CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET "
                "are required in production"
            )
        return errors


# Global settings instance
settings = Settings()
