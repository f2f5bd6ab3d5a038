"""
Payload validation for portfolio content.

Every validator is a pure function that returns a list of human-readable
violations. An empty list means the payload is valid. Services join the
violations into a single BadRequest message; there is no partial success.
"""

import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence


ACHIEVEMENT_CATEGORIES = ["academic", "sports", "cultural", "competition", "other"]
PROJECT_CATEGORIES = ["Undergraduate", "personal", "professional", "research", "other"]
CERTIFICATE_CATEGORIES = [
    "academic",
    "professional",
    "online-course",
    "workshop",
    "competition",
    "other",
]
COURSE_CATEGORIES = ["Technical", "Soft Skills", "Creative", "Business"]

MAX_TITLE_LENGTH = 200

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


# ─────────────────────────────────────────────────────────────────
# Primitive checks
# ─────────────────────────────────────────────────────────────────

def is_blank(value: Any) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime into a UTC datetime.

    Returns None when the value cannot be interpreted as a date.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def missing_fields(payload: Mapping[str, Any], required: Sequence[str]) -> List[str]:
    """Names of required fields that are absent or blank."""
    return [field for field in required if is_blank(payload.get(field))]


def missing_fields_message(missing: Sequence[str]) -> str:
    return f"Missing required fields: {', '.join(missing)}"


def check_choice(value: Any, choices: Sequence[str], field: str) -> Optional[str]:
    if value not in choices:
        return f"Invalid {field}. Must be one of: {', '.join(choices)}"
    return None


def check_max_length(value: Any, limit: int, field: str) -> Optional[str]:
    if isinstance(value, str) and len(value) > limit:
        return f"{field} cannot exceed {limit} characters"
    return None


def check_date(value: Any, field: str) -> Optional[str]:
    if parse_date(value) is None:
        return f"{field} must be a valid date"
    return None


def check_string_list(value: Any, field: str) -> Optional[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        return f"{field} must be a list of strings"
    return None


def check_media(value: Any, field: str) -> Optional[str]:
    """A stored media locator is a mapping carrying at least a url."""
    if not isinstance(value, Mapping) or is_blank(value.get("url")):
        return f"{field} must include a url"
    return None


def _collect(*checks: Optional[str]) -> List[str]:
    return [c for c in checks if c]


def _require_entries(
    items: Iterable[Any],
    subfields: Sequence[str],
    message: str,
) -> List[str]:
    for item in items:
        if not isinstance(item, Mapping) or missing_fields(item, subfields):
            return [message]
    return []


# ─────────────────────────────────────────────────────────────────
# Collection documents
# ─────────────────────────────────────────────────────────────────

ACHIEVEMENT_REQUIRED = ["title", "description", "date", "place", "event"]
RESEARCH_REQUIRED = ["title", "description", "publishedDate", "publisher"]
PROJECT_REQUIRED = ["title", "description", "detailedDescription", "projectDate"]
CERTIFICATE_REQUIRED = ["title", "description", "issuingOrganization", "issueDate"]


def validate_achievement(doc: Mapping[str, Any]) -> List[str]:
    violations = [f"{f} is required" for f in missing_fields(doc, ACHIEVEMENT_REQUIRED)]
    violations += _collect(
        check_date(doc.get("date"), "date") if not is_blank(doc.get("date")) else None,
        check_choice(doc.get("category"), ACHIEVEMENT_CATEGORIES, "category"),
        check_media(doc["photo"], "photo") if doc.get("photo") else None,
    )
    return violations


def validate_research(doc: Mapping[str, Any]) -> List[str]:
    violations = [f"{f} is required" for f in missing_fields(doc, RESEARCH_REQUIRED)]
    published = doc.get("publishedDate")
    violations += _collect(
        check_date(published, "publishedDate") if not is_blank(published) else None,
        check_string_list(doc.get("authors", []), "authors"),
        check_string_list(doc.get("tags", []), "tags"),
        check_media(doc["pdfFile"], "pdfFile") if "pdfFile" in doc else None,
    )
    return violations


def validate_project(doc: Mapping[str, Any]) -> List[str]:
    violations = [f"{f} is required" for f in missing_fields(doc, PROJECT_REQUIRED)]
    project_date = doc.get("projectDate")
    violations += _collect(
        check_max_length(doc.get("title"), MAX_TITLE_LENGTH, "Title"),
        check_date(project_date, "projectDate") if not is_blank(project_date) else None,
        check_choice(doc.get("category"), PROJECT_CATEGORIES, "category"),
        check_string_list(doc.get("technologies", []), "technologies"),
    )

    members = doc.get("teamMembers", [])
    if not isinstance(members, list):
        violations.append("teamMembers must be an array")
    elif any(not isinstance(m, Mapping) or is_blank(m.get("name")) for m in members):
        violations.append("Each team member must have a name")

    violations += validate_media_list(doc.get("images", []), "images")
    return violations


def validate_certificate(doc: Mapping[str, Any]) -> List[str]:
    violations = [f"{f} is required" for f in missing_fields(doc, CERTIFICATE_REQUIRED)]
    issue_date = doc.get("issueDate")
    expiration = doc.get("expirationDate")
    violations += _collect(
        check_max_length(doc.get("title"), MAX_TITLE_LENGTH, "Title"),
        check_date(issue_date, "issueDate") if not is_blank(issue_date) else None,
        check_date(expiration, "expirationDate") if expiration is not None else None,
        check_choice(doc.get("category"), CERTIFICATE_CATEGORIES, "category"),
        check_string_list(doc.get("skills", []), "skills"),
    )
    violations += validate_media_list(doc.get("images", []), "images")
    return violations


def validate_media_list(images: Any, field: str) -> List[str]:
    if not isinstance(images, list):
        return [f"{field} must be an array"]
    return _collect(*(check_media(image, field) for image in images))[:1]


# ─────────────────────────────────────────────────────────────────
# Profile sub-resources
# ─────────────────────────────────────────────────────────────────

def validate_academic_profile(
    education: Any,
    achievements: Any,
    research_focus: Any,
) -> List[str]:
    violations: List[str] = []

    if not isinstance(education, list):
        violations.append("Education must be an array")
    else:
        violations += _require_entries(
            education,
            ["degree", "institution", "year"],
            "All education entries must have degree, institution, and year",
        )

    if not isinstance(achievements, list):
        violations.append("Achievements must be an array")
    else:
        violations += _require_entries(
            achievements,
            ["title", "organization", "year"],
            "All achievement entries must have title, organization, and year",
        )

    if not isinstance(research_focus, list):
        violations.append("Research focus must be an array")
    elif any(not isinstance(f, str) or not f.strip() for f in research_focus):
        violations.append("All research interests must be non-empty strings")

    return violations


def validate_philosophies(philosophies: Any) -> List[str]:
    if philosophies is None:
        return []
    if not isinstance(philosophies, list):
        return ["Philosophies must be an array"]
    return _require_entries(
        philosophies,
        ["title", "description"],
        "All philosophies must have a title and description",
    )


def validate_news_items(items: Any) -> List[str]:
    if not isinstance(items, list):
        return ["Invalid news items format"]

    live = [i for i in items if not (isinstance(i, Mapping) and i.get("markedForDeletion"))]
    violations = _require_entries(
        live,
        ["title", "description", "date"],
        "Title, description, and date are required for all news items",
    )
    if violations:
        return violations

    for item in live:
        if parse_date(item["date"]) is None:
            return ["News item date must be a valid date"]
    return []


def validate_courses(courses: Any) -> List[str]:
    if not isinstance(courses, list):
        return ["Courses must be an array"]

    live = [c for c in courses if not (isinstance(c, Mapping) and c.get("markedForDeletion"))]
    violations = _require_entries(
        live,
        ["title", "platform", "category"],
        "Title, platform, and category are required for all courses",
    )
    if violations:
        return violations

    for course in live:
        problem = check_choice(course.get("category"), COURSE_CATEGORIES, "category")
        if problem:
            return [problem]
    return []


def validate_contact_info(office_hours: Any, office_location: Any) -> List[str]:
    violations: List[str] = []
    if office_hours is not None:
        if not isinstance(office_hours, list):
            violations.append("Office hours must be an array")
        else:
            violations += _require_entries(
                office_hours,
                ["day", "hours"],
                "Each office hour must have a day and hours specified",
            )
    if office_location is not None and not isinstance(office_location, Mapping):
        violations.append("Office location must be an object")
    return violations


def validate_contact_message(payload: Mapping[str, Any]) -> List[str]:
    if missing_fields(payload, ["name", "msgEmail", "subject", "message"]):
        return ["All fields are required"]
    if not EMAIL_PATTERN.match(str(payload["msgEmail"]).strip()):
        return ["Please provide a valid email address"]
    return []


def validate_hero(fields: Dict[str, Any]) -> List[str]:
    return _collect(
        check_max_length(fields.get("fullName"), MAX_TITLE_LENGTH, "Full name"),
        check_max_length(fields.get("position"), MAX_TITLE_LENGTH, "Position"),
    )
