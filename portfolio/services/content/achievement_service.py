"""
Achievement service.

Awards and competition results, each with an optional photo. Uploading a
new photo replaces the stored one.
"""

from typing import Any, Dict, List

from portfolio.services.content.base_content_service import ContentService
from portfolio.services.media import ACHIEVEMENT_PHOTO
from portfolio.validation import validate_achievement


class AchievementService(ContentService):
    collection_name = "achievements"
    entity_label = "Achievement"
    error_code = "ACHIEVEMENT"
    sort_field = "date"

    required_fields = ["title", "description", "date", "place", "event"]
    choice_fields = ["category"]
    text_fields = ["position"]
    date_fields = ["date"]
    defaults = {
        "category": "academic",
        "position": "",
        "photo": None,
    }

    media_profile = ACHIEVEMENT_PHOTO
    media_field = "photo"
    max_files = 1

    def validate(self, doc: Dict[str, Any]) -> List[str]:
        return validate_achievement(doc)
