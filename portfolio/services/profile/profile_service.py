"""
Profile service for the portfolio owner's singleton document.

The profile is one document per owner in the userinfos collection. It is
created lazily: every write upserts. Each public section (hero, academic,
about, news, courses, contact, messages) reads and writes only its own
fields. Array sections are rewritten wholesale; each element carries a
string _id so single elements can be deleted.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from common.database import new_id
from common.utils.exceptions import BadRequestException, NotFoundException
from portfolio.services.media import PROFILE_PICTURE, MediaService, UploadedFile
from portfolio.validation import (
    parse_date,
    validate_academic_profile,
    validate_contact_info,
    validate_contact_message,
    validate_courses,
    validate_hero,
    validate_news_items,
    validate_philosophies,
)

logger = logging.getLogger(__name__)


HERO_FIELDS = ["fullName", "adminEmail", "profilePicture", "position", "bio"]
ACADEMIC_FIELDS = ["education", "achievements", "researchFocus"]
ABOUT_FIELDS = ["about", "philosophies", "cvUrl"]
CONTACT_FIELDS = ["adminEmail", "phone", "officeLocation", "officeHours"]

OFFICE_LOCATION_KEYS = ["building", "room", "address", "city", "state", "zip"]
DEFAULT_PHILOSOPHY_ICON = "GraduationCap"


def _projection(fields: List[str]) -> Dict[str, int]:
    projection = {field: 1 for field in fields}
    projection["_id"] = 0
    return projection


def _live(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Drop elements flagged markedForDeletion."""
    return [item for item in items if not item.get("markedForDeletion")]


def _with_ids(
    items: List[Dict[str, Any]],
    defaults: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """Copy elements, applying defaults and assigning a string _id when missing."""
    result = []
    for item in items:
        entry = dict(defaults or {})
        entry.update({k: v for k, v in item.items() if k != "markedForDeletion"})
        entry["_id"] = str(entry.get("_id") or new_id())
        result.append(entry)
    return result


def _blank_office_location() -> Dict[str, str]:
    return {key: "" for key in OFFICE_LOCATION_KEYS}


class ProfileService:
    """
    Manages the owner's profile singleton.
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        media: MediaService,
        owner: str,
    ):
        """
        Initialize ProfileService.

        Args:
            db: Portfolio MongoDB database
            media: Media delegate for the profile picture
            owner: Owner constant identifying the singleton
        """
        self._db = db
        self._collection = db["userinfos"]
        self._media = media
        self._owner = owner

    # =========================================================================
    # Hero
    # =========================================================================

    async def get_hero(self) -> Dict[str, Any]:
        return await self._load(HERO_FIELDS, "Profile data not found")

    async def update_hero(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update fullName, position and bio.

        Only submitted fields change; an empty string clears a field.
        """
        updates = {
            key: value.strip() if isinstance(value, str) else value
            for key, value in fields.items()
            if key in ("fullName", "position", "bio") and value is not None
        }

        violations = validate_hero(updates)
        if violations:
            raise BadRequestException.from_violations(violations)

        profile = await self._save(updates, HERO_FIELDS)
        logger.info("Updated profile hero section")
        return profile

    async def upload_profile_picture(self, file: Optional[UploadedFile]) -> Dict[str, Any]:
        """
        Store a new profile picture and remove the previous one.

        Returns:
            {"profilePicture": {"url", "id"}}
        """
        if file is None:
            raise BadRequestException("No file uploaded", code="FILE_REQUIRED")

        self._media.check(file, PROFILE_PICTURE)
        previous = await self._collection.find_one(
            {"owner": self._owner}, {"profilePicture": 1}
        )

        locator = await self._media.store(file, PROFILE_PICTURE)
        profile = await self._save({"profilePicture": locator}, ["profilePicture"])

        old = (previous or {}).get("profilePicture") or {}
        old_id = old.get("id") or old.get("public_id")
        if old_id and old_id != locator["id"]:
            await self._media.remove(old_id, PROFILE_PICTURE.resource_type)

        logger.info("Uploaded new profile picture")
        return {"profilePicture": profile.get("profilePicture")}

    # =========================================================================
    # Academic
    # =========================================================================

    async def get_academic(self) -> Dict[str, Any]:
        profile = await self._load(ACADEMIC_FIELDS, "Academic profile not found")
        return {field: profile.get(field) or [] for field in ACADEMIC_FIELDS}

    async def update_academic(
        self,
        education: Any,
        achievements: Any,
        research_focus: Any,
    ) -> Dict[str, Any]:
        violations = validate_academic_profile(education, achievements, research_focus)
        if violations:
            raise BadRequestException.from_violations(violations)

        profile = await self._save(
            {
                "education": _with_ids(education),
                "achievements": _with_ids(achievements),
                "researchFocus": [f.strip() for f in research_focus],
            },
            ACADEMIC_FIELDS,
        )
        logger.info("Updated academic profile")
        return {field: profile.get(field) or [] for field in ACADEMIC_FIELDS}

    # =========================================================================
    # About
    # =========================================================================

    async def get_about(self) -> Dict[str, Any]:
        profile = await self._load(ABOUT_FIELDS, "About information not found")
        return self._about(profile)

    async def update_about(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Update about text, philosophies and CV link. Absent fields are kept."""
        philosophies = fields.get("philosophies")
        violations = validate_philosophies(philosophies)
        if violations:
            raise BadRequestException.from_violations(violations)

        updates: Dict[str, Any] = {}
        for key in ("about", "cvUrl"):
            if fields.get(key) is not None:
                updates[key] = fields[key].strip() if isinstance(fields[key], str) else fields[key]

        if philosophies is not None:
            entries = _with_ids(philosophies, {"icon": DEFAULT_PHILOSOPHY_ICON})
            for index, entry in enumerate(entries):
                entry.setdefault("order", index)
                if not entry.get("icon"):
                    entry["icon"] = DEFAULT_PHILOSOPHY_ICON
            updates["philosophies"] = entries

        profile = await self._save(updates, ABOUT_FIELDS)
        logger.info("Updated about section")
        return self._about(profile)

    def _about(self, profile: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "about": profile.get("about") or "",
            "philosophies": profile.get("philosophies") or [],
            "cvUrl": profile.get("cvUrl") or "",
        }

    # =========================================================================
    # News
    # =========================================================================

    async def get_news(self) -> List[Dict[str, Any]]:
        profile = await self._load(["newsItems"], "News configuration not found")
        return profile.get("newsItems") or []

    async def update_news(self, news_items: Any) -> List[Dict[str, Any]]:
        """Replace the news list. Items flagged markedForDeletion are dropped."""
        violations = validate_news_items(news_items)
        if violations:
            raise BadRequestException.from_violations(violations)

        entries = _with_ids(_live(news_items), {"link": ""})
        for entry in entries:
            entry["date"] = parse_date(entry["date"])

        profile = await self._save({"newsItems": entries}, ["newsItems"])
        logger.info(f"Updated news items ({len(entries)})")
        return profile.get("newsItems") or []

    async def delete_news_item(self, item_id: str) -> None:
        await self._pull("newsItems", item_id, "News configuration not found", "News item not found")
        logger.info(f"Deleted news item: {item_id}")

    # =========================================================================
    # Courses
    # =========================================================================

    async def get_courses(self) -> List[Dict[str, Any]]:
        profile = await self._load(["courses"], "Courses configuration not found")
        return profile.get("courses") or []

    async def update_courses(self, courses: Any) -> List[Dict[str, Any]]:
        violations = validate_courses(courses)
        if violations:
            raise BadRequestException.from_violations(violations)

        entries = _with_ids(
            _live(courses),
            {"skillsLearned": "", "completionDate": "", "certificateLink": ""},
        )
        profile = await self._save({"courses": entries}, ["courses"])
        logger.info(f"Updated courses ({len(entries)})")
        return profile.get("courses") or []

    async def delete_course(self, course_id: str) -> None:
        await self._pull("courses", course_id, "Courses configuration not found", "Course not found")
        logger.info(f"Deleted course: {course_id}")

    # =========================================================================
    # Contact
    # =========================================================================

    async def get_contact(self) -> Dict[str, Any]:
        profile = await self._load(CONTACT_FIELDS, "Contact information not found")
        return self._contact(profile)

    async def update_contact(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        office_hours = fields.get("officeHours")
        office_location = fields.get("officeLocation")

        violations = validate_contact_info(office_hours, office_location)
        if violations:
            raise BadRequestException.from_violations(violations)

        updates: Dict[str, Any] = {}
        for key in ("adminEmail", "phone"):
            if fields.get(key) is not None:
                updates[key] = fields[key].strip() if isinstance(fields[key], str) else fields[key]

        if office_location is not None:
            location = _blank_office_location()
            location.update({k: office_location.get(k) or "" for k in OFFICE_LOCATION_KEYS})
            updates["officeLocation"] = location

        if office_hours is not None:
            updates["officeHours"] = _with_ids(office_hours, {"byAppointment": False})

        profile = await self._save(updates, CONTACT_FIELDS)
        logger.info("Updated contact information")
        return self._contact(profile)

    def _contact(self, profile: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "adminEmail": profile.get("adminEmail") or "",
            "phone": profile.get("phone") or "",
            "officeLocation": profile.get("officeLocation") or _blank_office_location(),
            "officeHours": profile.get("officeHours") or [],
        }

    # =========================================================================
    # Messages
    # =========================================================================

    async def save_message(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Append a visitor's contact message. Public; no authentication.
        """
        violations = validate_contact_message(payload)
        if violations:
            raise BadRequestException.from_violations(violations)

        message = {
            "_id": new_id(),
            "name": payload["name"].strip(),
            "msgEmail": payload["msgEmail"].strip(),
            "subject": payload["subject"].strip(),
            "message": payload["message"].strip(),
            "createdAt": datetime.now(timezone.utc),
            "read": False,
        }

        await self._collection.update_one(
            {"owner": self._owner},
            {
                "$push": {"contactMessages": message},
                "$setOnInsert": {"createdAt": message["createdAt"]},
            },
            upsert=True,
        )

        logger.info(f"Received contact message from {message['msgEmail']}")
        return message

    async def get_messages(self) -> List[Dict[str, Any]]:
        """Contact messages, newest first."""
        profile = await self._load(["contactMessages"], "Profile not found")
        messages = profile.get("contactMessages") or []
        return sorted(
            messages,
            key=lambda m: m.get("createdAt") or datetime.min.replace(tzinfo=timezone.utc),
            reverse=True,
        )

    async def delete_message(self, message_id: str) -> None:
        await self._pull("contactMessages", message_id, "Profile not found", "Message not found")
        logger.info(f"Deleted contact message: {message_id}")

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _load(self, fields: List[str], not_found_message: str) -> Dict[str, Any]:
        profile = await self._collection.find_one(
            {"owner": self._owner},
            _projection(fields),
        )
        if profile is None:
            raise NotFoundException(not_found_message, code="PROFILE_NOT_FOUND")
        return profile

    async def _save(self, updates: Dict[str, Any], fields: List[str]) -> Dict[str, Any]:
        """Upsert the singleton and return the requested fields after the write."""
        now = datetime.now(timezone.utc)
        profile = await self._collection.find_one_and_update(
            {"owner": self._owner},
            {
                "$set": {**updates, "updatedAt": now},
                "$setOnInsert": {"createdAt": now},
            },
            projection=_projection(fields),
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return profile or {}

    async def _pull(
        self,
        field: str,
        element_id: str,
        profile_missing: str,
        element_missing: str,
    ) -> None:
        result = await self._collection.update_one(
            {"owner": self._owner, f"{field}._id": element_id},
            {
                "$pull": {field: {"_id": element_id}},
                "$set": {"updatedAt": datetime.now(timezone.utc)},
            },
        )
        if result.matched_count > 0:
            return

        if await self._collection.count_documents({"owner": self._owner}) == 0:
            raise NotFoundException(profile_missing, code="PROFILE_NOT_FOUND")
        raise NotFoundException(element_missing, code="ELEMENT_NOT_FOUND")
