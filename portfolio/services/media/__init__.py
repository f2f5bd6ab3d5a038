"""Media services."""

from portfolio.services.media.media_service import (
    MediaService,
    MediaProfile,
    UploadedFile,
    RemoteFile,
    PROFILE_PICTURE,
    ACHIEVEMENT_PHOTO,
    RESEARCH_PDF,
    PROJECT_IMAGE,
    CERTIFICATE_IMAGE,
)

__all__ = [
    "MediaService",
    "MediaProfile",
    "UploadedFile",
    "RemoteFile",
    "PROFILE_PICTURE",
    "ACHIEVEMENT_PHOTO",
    "RESEARCH_PDF",
    "PROJECT_IMAGE",
    "CERTIFICATE_IMAGE",
]
