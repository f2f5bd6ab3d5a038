"""
Shared CRUD behaviour for portfolio content collections.

Subclasses declare their collection, field groups and media rules; this
class does the listing, lookup, merge-by-presence updates, validation
gating and media bookkeeping.
"""

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from common.database import parse_object_id
from common.utils.exceptions import (
    BadRequestException,
    NotFoundException,
    ServerException,
)
from common.utils.responses import build_pagination
from portfolio.services.media import MediaProfile, MediaService, UploadedFile
from portfolio.validation import (
    missing_fields,
    missing_fields_message,
    parse_date,
)

logger = logging.getLogger(__name__)


class ContentService:
    """
    Base service for one content collection.

    Field groups control how submitted values are merged:
        required_fields: must be present on create; blank submissions are ignored
        choice_fields: closed-set values; blank submissions are ignored
        text_fields: optional strings; an empty string clears the value
        list_fields / bool_fields: overwritten whenever submitted
        date_fields: stored as UTC datetimes once validated
        optional_date_fields: dates that an empty string clears to None
    """

    collection_name: str = ""
    entity_label: str = "Item"
    error_code: str = "ITEM"
    sort_field: str = "createdAt"
    default_limit: Optional[int] = None
    list_projection: Optional[Dict[str, int]] = None

    required_fields: List[str] = []
    choice_fields: List[str] = []
    text_fields: List[str] = []
    list_fields: List[str] = []
    bool_fields: List[str] = []
    date_fields: List[str] = []
    optional_date_fields: List[str] = []
    defaults: Dict[str, Any] = {}

    # Media handling
    media_profile: Optional[MediaProfile] = None
    media_field: Optional[str] = None
    media_multiple: bool = False
    max_files: int = 1
    media_required_message: Optional[str] = None

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        media: MediaService,
        owner: str,
        default_limit: Optional[int] = None,
    ):
        """
        Initialize the service.

        Args:
            db: Portfolio MongoDB database
            media: Media delegate for file fields
            owner: Owner constant stamped on and filtered by every document
            default_limit: Overrides the class page size for list()
        """
        self._db = db
        self._collection = db[self.collection_name]
        self._media = media
        self._owner = owner
        if default_limit:
            self.default_limit = default_limit

    @property
    def editable_fields(self) -> List[str]:
        return (
            self.required_fields
            + self.choice_fields
            + self.text_fields
            + self.list_fields
            + self.bool_fields
            + self.optional_date_fields
        )

    # =========================================================================
    # Read
    # =========================================================================

    async def list(
        self,
        category: Optional[str] = None,
        featured: Optional[bool] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """
        List documents, newest first.

        Args:
            category: Category filter; "all" or None disables it
            featured: Only featured documents when True
            page: 1-based page number
            limit: Page size; falls back to default_limit, and when that is
                unset every document is returned on one page

        Returns:
            (items, pagination)
        """
        query: Dict[str, Any] = {"owner": self._owner}
        if category and category != "all":
            query["category"] = category
        if featured:
            query["featured"] = True

        limit = limit or self.default_limit
        page = max(page or 1, 1)

        total = await self._collection.count_documents(query)
        cursor = self._collection.find(query, self.list_projection)
        cursor = cursor.sort(self.sort_field, -1)

        if limit:
            cursor = cursor.skip((page - 1) * limit).limit(limit)
            items = await cursor.to_list(length=limit)
            pagination = build_pagination(total, page, limit)
        else:
            items = await cursor.to_list(length=None)
            pagination = build_pagination(total, 1, total)

        return [self._format(i) for i in items], pagination

    async def list_by_category(
        self,
        category: str,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        return await self.list(category=category, page=page, limit=limit)

    async def get_by_id(self, item_id: str) -> Dict[str, Any]:
        """
        Get a single document.

        Raises:
            BadRequestException: malformed id
            NotFoundException: no such document
        """
        doc = await self._find(self._object_id(item_id))
        return self._format(doc)

    # =========================================================================
    # Write
    # =========================================================================

    async def create(
        self,
        fields: Dict[str, Any],
        files: Optional[List[UploadedFile]] = None,
    ) -> Dict[str, Any]:
        """
        Validate, upload attached files and insert a new document.

        Nothing is persisted when validation or an upload fails.
        """
        files = files or []
        doc = self._merge(copy.deepcopy(self.defaults), fields)

        missing = missing_fields(doc, self.required_fields)
        if missing:
            raise BadRequestException(missing_fields_message(missing), code="MISSING_FIELDS")

        self._check_files(files, creating=True)
        self._raise_violations(doc)
        self._normalize_dates(doc)

        uploaded = await self._upload_all(files)
        self._attach_media(doc, uploaded)

        now = datetime.now(timezone.utc)
        doc["owner"] = self._owner
        doc["createdAt"] = now
        doc["updatedAt"] = now

        try:
            result = await self._collection.insert_one(doc)
        except PyMongoError as e:
            logger.error(f"Failed to insert {self.entity_label.lower()}: {e}")
            await self._remove_all(self._locators(uploaded))
            raise ServerException(
                f"Failed to create {self.entity_label.lower()}",
                code="CREATE_FAILED",
            )
        doc["_id"] = result.inserted_id

        logger.info(f"Created {self.entity_label.lower()}: {doc.get('title')}")
        return self._format(doc)

    async def update(
        self,
        item_id: str,
        fields: Dict[str, Any],
        files: Optional[List[UploadedFile]] = None,
    ) -> Dict[str, Any]:
        """
        Merge submitted fields into an existing document and save it.

        Media replaced or dropped by the update is removed best-effort once
        the document has been written.
        """
        files = files or []
        object_id = self._object_id(item_id)
        existing = await self._find(object_id)

        merged = self._merge(copy.deepcopy(existing), fields)
        dropped = self._apply_kept_media(merged, existing, fields)

        self._check_files(files, creating=False)
        self._raise_violations(merged)
        self._normalize_dates(merged)

        uploaded = await self._upload_all(files)
        dropped += self._attach_media(merged, uploaded, replacing=existing)
        merged["updatedAt"] = datetime.now(timezone.utc)
        merged.pop("_id", None)

        try:
            result = await self._collection.replace_one(
                {"_id": object_id, "owner": self._owner},
                merged,
            )
        except PyMongoError as e:
            logger.error(f"Failed to update {self.entity_label.lower()} {item_id}: {e}")
            await self._remove_all(self._locators(uploaded))
            raise ServerException(
                f"Failed to update {self.entity_label.lower()}",
                code="UPDATE_FAILED",
            )
        if result.matched_count == 0:
            await self._remove_all(self._locators(uploaded))
            raise self._not_found()

        await self._remove_all(dropped)

        merged["_id"] = object_id
        logger.info(f"Updated {self.entity_label.lower()}: {item_id}")
        return self._format(merged)

    async def delete(self, item_id: str) -> None:
        """
        Delete a document, then best-effort remove its media.
        """
        object_id = self._object_id(item_id)
        doc = await self._collection.find_one_and_delete(
            {"_id": object_id, "owner": self._owner}
        )
        if not doc:
            raise self._not_found()

        await self._remove_all(self._media_refs(doc))
        logger.info(f"Deleted {self.entity_label.lower()}: {item_id}")

    # =========================================================================
    # Merge & validation
    # =========================================================================

    def validate(self, doc: Dict[str, Any]) -> List[str]:
        """Return schema violations for a complete document."""
        return []

    def _merge(self, base: Dict[str, Any], fields: Dict[str, Any]) -> Dict[str, Any]:
        keep_on_blank = set(self.required_fields) | set(self.choice_fields)

        for key in self.editable_fields:
            if key not in fields or fields[key] is None:
                continue

            value = fields[key]
            if isinstance(value, str):
                value = value.strip()
                if value == "":
                    if key in keep_on_blank:
                        continue
                    if key in self.optional_date_fields:
                        value = None

            base[key] = value

        return base

    def _raise_violations(self, doc: Dict[str, Any]) -> None:
        violations = self.validate(doc)
        if violations:
            raise BadRequestException.from_violations(violations)

    def _normalize_dates(self, doc: Dict[str, Any]) -> None:
        for key in self.date_fields + self.optional_date_fields:
            if doc.get(key) is not None:
                doc[key] = parse_date(doc[key])

    # =========================================================================
    # Media
    # =========================================================================

    def _check_files(self, files: List[UploadedFile], creating: bool) -> None:
        if not files:
            if creating and self.media_required_message:
                raise BadRequestException(self.media_required_message, code="FILE_REQUIRED")
            return
        if self.media_profile is None:
            raise BadRequestException("File uploads are not supported", code="UNEXPECTED_FILE")
        if len(files) > self.max_files:
            raise BadRequestException(
                f"Too many files. Maximum is {self.max_files}",
                code="TOO_MANY_FILES",
            )
        for file in files:
            self._media.check(file, self.media_profile)

    async def _upload_all(self, files: List[UploadedFile]) -> List[Dict[str, str]]:
        """Upload every file; on failure remove the ones already stored."""
        uploaded: List[Dict[str, str]] = []
        try:
            for file in files:
                uploaded.append(await self._media.store(file, self.media_profile))
        except Exception:
            await self._remove_all(self._locators(uploaded))
            raise
        return uploaded

    def _attach_media(
        self,
        doc: Dict[str, Any],
        uploaded: List[Dict[str, str]],
        replacing: Optional[Dict[str, Any]] = None,
    ) -> List[Tuple[str, str]]:
        """
        Store uploaded locators on the document.

        Returns the media references that the new uploads replaced.
        """
        if not uploaded or not self.media_field:
            return []

        if self.media_multiple:
            images = doc.get(self.media_field) or []
            doc[self.media_field] = images + [
                {"url": u["url"], "id": u["id"], "caption": ""} for u in uploaded
            ]
            return []

        previous = (replacing or {}).get(self.media_field)
        doc[self.media_field] = uploaded[0]
        return self._locators([previous] if previous else [])

    def _apply_kept_media(
        self,
        merged: Dict[str, Any],
        existing: Dict[str, Any],
        fields: Dict[str, Any],
    ) -> List[Tuple[str, str]]:
        """
        Replace a multi-image field with the submitted kept images.

        When existingImages was not submitted the stored images stay.
        Returns references to stored images the caller dropped.
        """
        kept = fields.get("existingImages")
        if not self.media_multiple or kept is None:
            return []

        if not isinstance(kept, list):
            raise BadRequestException("existingImages must be an array", code="VALIDATION_ERROR")

        merged[self.media_field] = [normalize_image(i) for i in kept]
        kept_ids = {_media_id(i) for i in merged[self.media_field]}
        stored = existing.get(self.media_field) or []
        return self._locators([i for i in stored if _media_id(i) not in kept_ids])

    def _media_refs(self, doc: Dict[str, Any]) -> List[Tuple[str, str]]:
        if not self.media_field:
            return []
        value = doc.get(self.media_field)
        if self.media_multiple:
            return self._locators(value or [])
        return self._locators([value] if value else [])

    def _locators(self, items: List[Any]) -> List[Tuple[str, str]]:
        resource_type = self.media_profile.resource_type if self.media_profile else "image"
        refs = []
        for item in items:
            media_id = _media_id(item)
            if media_id:
                refs.append((media_id, resource_type))
        return refs

    async def _remove_all(self, refs: List[Tuple[str, str]]) -> None:
        for media_id, resource_type in refs:
            await self._media.remove(media_id, resource_type)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _object_id(self, item_id: str) -> ObjectId:
        object_id = parse_object_id(item_id)
        if object_id is None:
            raise BadRequestException(
                f"Invalid {self.entity_label.lower()} ID",
                code="INVALID_ID",
            )
        return object_id

    async def _find(self, object_id: ObjectId) -> Dict[str, Any]:
        doc = await self._collection.find_one({"_id": object_id, "owner": self._owner})
        if not doc:
            raise self._not_found()
        return doc

    def _not_found(self) -> NotFoundException:
        return NotFoundException(
            f"{self.entity_label} not found",
            code=f"{self.error_code}_NOT_FOUND",
        )

    def _format(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Format a document for response."""
        result = dict(doc)
        if "_id" in result:
            result["_id"] = str(result["_id"])
        return result


def normalize_image(image: Any) -> Any:
    """Accept public_id as an alias for id on submitted image locators."""
    if not isinstance(image, dict):
        return image
    return {
        "url": image.get("url"),
        "id": image.get("id") or image.get("public_id"),
        "caption": image.get("caption") or "",
    }


def _media_id(item: Any) -> Optional[str]:
    if not isinstance(item, dict):
        return None
    return item.get("id") or item.get("public_id")
