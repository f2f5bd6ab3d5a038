"""
Research paper service.

Every paper carries exactly one PDF. Downloads are proxied through the API
so the browser receives a stable attachment filename.
"""

import logging
import re
from typing import Any, Dict, List, Tuple

from common.utils.exceptions import NotFoundException
from portfolio.services.content.base_content_service import ContentService
from portfolio.services.media import RESEARCH_PDF, RemoteFile
from portfolio.validation import validate_research

logger = logging.getLogger(__name__)


def download_filename(title: str) -> str:
    """Title with every non-alphanumeric character replaced by an underscore."""
    return f"{re.sub(r'[^a-zA-Z0-9]', '_', title or 'research')}.pdf"


class ResearchService(ContentService):
    """Manages the researches collection."""

    collection_name = "researches"
    entity_label = "Research paper"
    error_code = "RESEARCH"
    sort_field = "publishedDate"

    required_fields = ["title", "description", "publishedDate", "publisher"]
    text_fields = ["doi"]
    list_fields = ["authors", "tags"]
    date_fields = ["publishedDate"]
    defaults = {
        "authors": [],
        "tags": [],
        "doi": "",
    }

    media_profile = RESEARCH_PDF
    media_field = "pdfFile"
    max_files = 1
    media_required_message = "PDF file is required"

    def validate(self, doc: Dict[str, Any]) -> List[str]:
        return validate_research(doc)

    async def open_download(self, item_id: str) -> Tuple[str, RemoteFile]:
        """
        Open the stored PDF for streaming.

        Returns:
            (attachment filename, open remote file)
        """
        paper = await self.get_by_id(item_id)

        pdf = paper.get("pdfFile") or {}
        if not pdf.get("url"):
            raise NotFoundException("PDF file not found", code="PDF_NOT_FOUND")

        remote = await self._media.open(pdf["url"])
        logger.info(f"Streaming research paper {item_id}")
        return download_filename(paper.get("title", "")), remote
