"""
Certificate service.
"""

from typing import Any, Dict, List

from portfolio.services.content.base_content_service import ContentService
from portfolio.services.media import CERTIFICATE_IMAGE
from portfolio.validation import validate_certificate


class CertificateService(ContentService):
    """Manages the certificates collection."""

    collection_name = "certificates"
    entity_label = "Certificate"
    error_code = "CERTIFICATE"
    sort_field = "issueDate"
    default_limit = 12

    required_fields = ["title", "description", "issuingOrganization", "issueDate"]
    choice_fields = ["category"]
    text_fields = ["credentialId", "credentialUrl"]
    list_fields = ["skills"]
    bool_fields = ["featured"]
    date_fields = ["issueDate"]
    optional_date_fields = ["expirationDate"]
    defaults = {
        "category": "professional",
        "skills": [],
        "credentialId": "",
        "credentialUrl": "",
        "expirationDate": None,
        "images": [],
        "featured": False,
    }

    media_profile = CERTIFICATE_IMAGE
    media_field = "images"
    media_multiple = True
    max_files = 5

    def validate(self, doc: Dict[str, Any]) -> List[str]:
        return validate_certificate(doc)
