"""
Section controllers for the portfolio site.

Each controller holds the view and edit state of one page section:

    items       last data fetched from the API
    is_loading  a fetch is in flight
    is_editing  the admin is editing; form_data holds the working copy
    form_data   deep copy of items taken by start_edit()
    error       message of the last failed call, or None

can_edit mirrors the client-held role flag. It only hides editing in the
UI; the API's auth gates decide what is allowed.
"""

import copy
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from portfolio.client.api_client import ClientError, FileTuple, PortfolioClient

logger = logging.getLogger(__name__)


class SectionController:
    """Base controller: load, start_edit, save, cancel."""

    def __init__(self, client: PortfolioClient, can_edit: bool = False):
        self.client = client
        self.can_edit = can_edit
        self.items: Any = None
        self.is_loading = False
        self.is_editing = False
        self.form_data: Any = None
        self.error: Optional[str] = None

    async def _fetch(self) -> Any:
        raise NotImplementedError

    async def _submit(self, form_data: Any) -> None:
        raise NotImplementedError

    async def load(self) -> None:
        self.is_loading = True
        try:
            self.items = await self._fetch()
            self.error = None
        except ClientError as e:
            logger.warning(f"{type(self).__name__} load failed: {e.message}")
            self.error = e.message
        finally:
            self.is_loading = False

    def start_edit(self) -> bool:
        if not self.can_edit:
            return False
        self.form_data = copy.deepcopy(self.items)
        self.is_editing = True
        return True

    async def save(self) -> bool:
        """
        Submit the working copy, then re-fetch and leave edit mode.

        On failure the controller stays in edit mode with error set.
        """
        if not self.is_editing:
            return False

        try:
            await self._submit(self.form_data)
        except ClientError as e:
            self.error = e.message
            return False

        self.is_editing = False
        self.form_data = None
        await self.load()
        return True

    async def cancel(self) -> None:
        """Discard edits by re-fetching from the server."""
        self.is_editing = False
        self.form_data = None
        await self.load()


# ─────────────────────────────────────────────────────────────────
# Profile sections
# ─────────────────────────────────────────────────────────────────

class HeroSection(SectionController):
    async def _fetch(self) -> Dict[str, Any]:
        return await self.client.get_profile_data()

    async def _submit(self, form_data: Dict[str, Any]) -> None:
        await self.client.update_profile({
            "fullName": form_data.get("fullName"),
            "position": form_data.get("position"),
            "bio": form_data.get("bio"),
        })

    async def upload_picture(self, file: FileTuple) -> bool:
        try:
            await self.client.upload_profile_picture(file)
        except ClientError as e:
            self.error = e.message
            return False
        await self.load()
        return True


class AboutSection(SectionController):
    async def _fetch(self) -> Dict[str, Any]:
        return await self.client.get_about()

    async def _submit(self, form_data: Dict[str, Any]) -> None:
        await self.client.update_about(form_data)

    def add_philosophy(self) -> None:
        philosophies = self.form_data.setdefault("philosophies", [])
        philosophies.append({
            "title": "",
            "description": "",
            "icon": "GraduationCap",
            "order": len(philosophies),
        })

    def remove_philosophy(self, index: int) -> None:
        del self.form_data["philosophies"][index]


class AcademicSection(SectionController):
    async def _fetch(self) -> Dict[str, Any]:
        return await self.client.get_academic_profile()

    async def _submit(self, form_data: Dict[str, Any]) -> None:
        await self.client.update_academic_profile(form_data)


class ContactSection(SectionController):
    async def _fetch(self) -> Dict[str, Any]:
        return await self.client.get_contact()

    async def _submit(self, form_data: Dict[str, Any]) -> None:
        await self.client.update_contact(form_data)

    async def send_message(self, fields: Dict[str, Any]) -> bool:
        """Public contact form; no edit rights needed."""
        try:
            await self.client.send_message(fields)
        except ClientError as e:
            self.error = e.message
            return False
        self.error = None
        return True


# ─────────────────────────────────────────────────────────────────
# Embedded list sections (news, courses)
# ─────────────────────────────────────────────────────────────────

class EmbeddedListSection(SectionController):
    """
    A profile array edited as a whole.

    remove_item deletes a saved element on the server right away; an
    element added in this edit session is only dropped locally.
    """

    def _blank_item(self) -> Dict[str, Any]:
        raise NotImplementedError

    async def _delete(self, item_id: str) -> None:
        raise NotImplementedError

    def start_edit(self) -> bool:
        if not super().start_edit():
            return False
        if self.form_data is None:
            self.form_data = []
        return True

    def add_item(self) -> Dict[str, Any]:
        item = self._blank_item()
        self.form_data.append(item)
        return item

    async def remove_item(self, index: int) -> bool:
        item = self.form_data[index]
        item_id = item.get("_id")
        if not item_id:
            del self.form_data[index]
            return True

        try:
            await self._delete(item_id)
        except ClientError as e:
            self.error = e.message
            return False

        del self.form_data[index]
        self.items = [i for i in self.items or [] if i.get("_id") != item_id]
        return True


class NewsSection(EmbeddedListSection):
    async def _fetch(self) -> List[Dict[str, Any]]:
        return await self.client.get_news()

    async def _submit(self, form_data: List[Dict[str, Any]]) -> None:
        await self.client.update_news(form_data)

    async def _delete(self, item_id: str) -> None:
        await self.client.delete_news_item(item_id)

    def _blank_item(self) -> Dict[str, Any]:
        return {
            "date": date.today().isoformat(),
            "title": "",
            "description": "",
            "link": "",
        }


class CoursesSection(EmbeddedListSection):
    async def _fetch(self) -> List[Dict[str, Any]]:
        return await self.client.get_courses()

    async def _submit(self, form_data: List[Dict[str, Any]]) -> None:
        await self.client.update_courses(form_data)

    async def _delete(self, item_id: str) -> None:
        await self.client.delete_course(item_id)

    def _blank_item(self) -> Dict[str, Any]:
        return {
            "title": "",
            "platform": "",
            "category": "Technical",
            "skillsLearned": "",
            "completionDate": "",
            "certificateLink": "",
        }


class MessagesSection(SectionController):
    """Admin inbox. Read-only apart from deletion."""

    async def load(self) -> None:
        if not self.can_edit:
            self.items = []
            return
        await super().load()

    async def _fetch(self) -> List[Dict[str, Any]]:
        return await self.client.get_messages()

    async def remove_item(self, message_id: str) -> bool:
        try:
            await self.client.delete_message(message_id)
        except ClientError as e:
            self.error = e.message
            return False
        self.items = [m for m in self.items or [] if m.get("_id") != message_id]
        return True


# ─────────────────────────────────────────────────────────────────
# Collection sections (one document per item)
# ─────────────────────────────────────────────────────────────────

class CollectionSection(SectionController):
    """
    A collection edited one item at a time.

    start_edit(item) opens an existing item, start_edit() a new one. Files
    chosen for upload wait in pending_files until save().
    """

    def __init__(self, client: PortfolioClient, can_edit: bool = False):
        super().__init__(client, can_edit)
        self.pending_files: List[FileTuple] = []
        self.pagination: Dict[str, Any] = {}

    def _blank_item(self) -> Dict[str, Any]:
        raise NotImplementedError

    def _fields(self, form_data: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in form_data.items() if not k.startswith("_") and k not in (
            "owner", "createdAt", "updatedAt", "images", "photo", "pdfFile",
        )}

    async def _create(self, fields: Dict[str, Any], files: Sequence[FileTuple]) -> None:
        raise NotImplementedError

    async def _update(self, item_id: str, fields: Dict[str, Any], files: Sequence[FileTuple]) -> None:
        raise NotImplementedError

    async def _delete(self, item_id: str) -> None:
        raise NotImplementedError

    def start_edit(self, item: Optional[Dict[str, Any]] = None) -> bool:
        if not self.can_edit:
            return False
        self.form_data = copy.deepcopy(item) if item else self._blank_item()
        self.pending_files = []
        self.is_editing = True
        return True

    def add_item(self) -> bool:
        return self.start_edit()

    async def _submit(self, form_data: Dict[str, Any]) -> None:
        fields = self._fields(form_data)
        if form_data.get("_id"):
            await self._update(form_data["_id"], fields, self.pending_files)
        else:
            await self._create(fields, self.pending_files)
        self.pending_files = []

    async def cancel(self) -> None:
        self.pending_files = []
        await super().cancel()

    async def remove_item(self, item: Dict[str, Any]) -> bool:
        """Delete a saved item server-side; an unsaved draft is just discarded."""
        item_id = item.get("_id")
        if not item_id:
            if self.is_editing and self.form_data is item:
                self.is_editing = False
                self.form_data = None
            return True

        try:
            await self._delete(item_id)
        except ClientError as e:
            self.error = e.message
            return False

        await self.load()
        return True


class AchievementsSection(CollectionSection):
    async def _fetch(self) -> List[Dict[str, Any]]:
        return await self.client.list_achievements()

    def _blank_item(self) -> Dict[str, Any]:
        return {
            "title": "",
            "description": "",
            "date": date.today().isoformat(),
            "place": "",
            "event": "",
            "position": "",
            "category": "academic",
        }

    async def _create(self, fields, files):
        await self.client.create_achievement(fields, files[0] if files else None)

    async def _update(self, item_id, fields, files):
        await self.client.update_achievement(item_id, fields, files[0] if files else None)

    async def _delete(self, item_id: str) -> None:
        await self.client.delete_achievement(item_id)


class ResearchSection(CollectionSection):
    async def _fetch(self) -> List[Dict[str, Any]]:
        return await self.client.list_research()

    def _blank_item(self) -> Dict[str, Any]:
        return {
            "title": "",
            "description": "",
            "publishedDate": date.today().isoformat(),
            "publisher": "",
            "authors": [],
            "doi": "",
            "tags": [],
        }

    async def _create(self, fields, files):
        if not files:
            raise ClientError("PDF file is required", status_code=400)
        await self.client.create_research(fields, files[0])

    async def _update(self, item_id, fields, files):
        await self.client.update_research(item_id, fields, files[0] if files else None)

    async def _delete(self, item_id: str) -> None:
        await self.client.delete_research(item_id)


class ProjectsSection(CollectionSection):
    """Paginated project grid with category and featured filters."""

    def __init__(self, client: PortfolioClient, can_edit: bool = False):
        super().__init__(client, can_edit)
        self.category: Optional[str] = None
        self.featured: Optional[bool] = None
        self.page = 1

    async def _fetch(self) -> List[Dict[str, Any]]:
        items, self.pagination = await self.client.list_projects(
            category=self.category, featured=self.featured, page=self.page
        )
        return items

    async def go_to_page(self, page: int) -> None:
        self.page = page
        await self.load()

    def _blank_item(self) -> Dict[str, Any]:
        return {
            "title": "",
            "description": "",
            "detailedDescription": "",
            "technologies": [],
            "category": "Undergraduate",
            "projectDate": date.today().isoformat(),
            "teamMembers": [],
            "githubLink": "",
            "liveDemoLink": "",
            "featured": False,
            "images": [],
        }

    def _fields(self, form_data: Dict[str, Any]) -> Dict[str, Any]:
        fields = super()._fields(form_data)
        if form_data.get("_id"):
            fields["existingImages"] = form_data.get("images") or []
        return fields

    async def _create(self, fields, files):
        await self.client.create_project(fields, files)

    async def _update(self, item_id, fields, files):
        await self.client.update_project(item_id, fields, files)

    async def _delete(self, item_id: str) -> None:
        await self.client.delete_project(item_id)

    async def start_edit_full(self, item: Dict[str, Any]) -> bool:
        """List views omit detailedDescription; fetch the full project first."""
        try:
            full = await self.client.get_project(item["_id"])
        except ClientError as e:
            self.error = e.message
            return False
        return self.start_edit(full)


class CertificatesSection(CollectionSection):
    def __init__(self, client: PortfolioClient, can_edit: bool = False):
        super().__init__(client, can_edit)
        self.category: Optional[str] = None
        self.page = 1

    async def _fetch(self) -> List[Dict[str, Any]]:
        items, self.pagination = await self.client.list_certificates(
            category=self.category, page=self.page
        )
        return items

    def _blank_item(self) -> Dict[str, Any]:
        return {
            "title": "",
            "description": "",
            "issuingOrganization": "",
            "issueDate": date.today().isoformat(),
            "expirationDate": "",
            "category": "professional",
            "skills": [],
            "credentialId": "",
            "credentialUrl": "",
            "featured": False,
            "images": [],
        }

    def _fields(self, form_data: Dict[str, Any]) -> Dict[str, Any]:
        fields = super()._fields(form_data)
        if form_data.get("_id"):
            fields["existingImages"] = form_data.get("images") or []
        return fields

    async def _create(self, fields, files):
        await self.client.create_certificate(fields, files)

    async def _update(self, item_id, fields, files):
        await self.client.update_certificate(item_id, fields, files)

    async def _delete(self, item_id: str) -> None:
        await self.client.delete_certificate(item_id)
