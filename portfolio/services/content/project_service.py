"""
Project service.

Portfolio projects with image galleries, team members and a featured flag.
"""

from typing import Any, Dict, List

from portfolio.services.content.base_content_service import ContentService
from portfolio.services.media import PROJECT_IMAGE
from portfolio.validation import validate_project


class ProjectService(ContentService):
    """
    Manages the projects collection.
    List views leave out detailedDescription.
    """

    collection_name = "projects"
    entity_label = "Project"
    error_code = "PROJECT"
    sort_field = "projectDate"
    default_limit = 9
    list_projection = {"detailedDescription": 0}

    required_fields = ["title", "description", "detailedDescription", "projectDate"]
    choice_fields = ["category"]
    text_fields = ["githubLink", "liveDemoLink"]
    list_fields = ["technologies", "teamMembers"]
    bool_fields = ["featured"]
    date_fields = ["projectDate"]
    defaults = {
        "category": "Undergraduate",
        "technologies": [],
        "teamMembers": [],
        "githubLink": "",
        "liveDemoLink": "",
        "images": [],
        "featured": False,
    }

    media_profile = PROJECT_IMAGE
    media_field = "images"
    media_multiple = True
    max_files = 10

    def validate(self, doc: Dict[str, Any]) -> List[str]:
        return validate_project(doc)
