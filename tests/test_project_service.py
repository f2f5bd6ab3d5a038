"""Unit tests for ProjectService (shared content CRUD behaviour)."""

import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock
from bson import ObjectId
from pymongo.errors import PyMongoError

from common.utils.exceptions import BadRequestException, NotFoundException, ServerException
from portfolio.services.content.project_service import ProjectService
from portfolio.services.media import PROJECT_IMAGE


@pytest.fixture
def service(mock_db, mock_media):
    return ProjectService(mock_db, mock_media, owner="admin")


@pytest.fixture
def project_fields():
    return {
        "title": "Line-following robot",
        "description": "Autonomous robot",
        "detailedDescription": "PID control loop",
        "projectDate": "2024-03-01",
    }


# ─────────────────────────────────────────────────────────────────
# list
# ─────────────────────────────────────────────────────────────────


class TestList:
    @pytest.mark.asyncio
    async def test_second_page_of_category(self, service, mock_collection, cursor_factory):
        docs = [{"_id": ObjectId(), "title": f"P{i}", "category": "research"} for i in range(6)]
        cursor = cursor_factory(docs)
        mock_collection.find.return_value = cursor
        mock_collection.count_documents.return_value = 15

        items, pagination = await service.list(category="research", page=2, limit=9)

        assert len(items) == 6
        assert pagination == {
            "currentPage": 2,
            "totalPages": 2,
            "totalCount": 15,
            "hasNext": False,
            "hasPrev": True,
        }
        mock_collection.find.assert_called_once_with(
            {"owner": "admin", "category": "research"},
            {"detailedDescription": 0},
        )
        cursor.sort.assert_called_once_with("projectDate", -1)
        cursor.skip.assert_called_once_with(9)
        cursor.limit.assert_called_once_with(9)

    @pytest.mark.asyncio
    async def test_all_category_and_featured_filter(self, service, mock_collection):
        mock_collection.count_documents.return_value = 0

        await service.list(category="all", featured=True)

        query = mock_collection.find.call_args[0][0]
        assert query == {"owner": "admin", "featured": True}

    @pytest.mark.asyncio
    async def test_default_page_size_is_nine(self, service, mock_collection, cursor_factory):
        cursor = cursor_factory([])
        mock_collection.find.return_value = cursor
        mock_collection.count_documents.return_value = 10

        _, pagination = await service.list()

        cursor.limit.assert_called_once_with(9)
        assert pagination["totalPages"] == 2
        assert pagination["hasNext"] is True

    @pytest.mark.asyncio
    async def test_ids_are_serialized(self, service, mock_collection, cursor_factory):
        oid = ObjectId()
        mock_collection.find.return_value = cursor_factory([{"_id": oid, "title": "P"}])
        mock_collection.count_documents.return_value = 1

        items, _ = await service.list()

        assert items[0]["_id"] == str(oid)


# ─────────────────────────────────────────────────────────────────
# get_by_id
# ─────────────────────────────────────────────────────────────────


class TestGetById:
    @pytest.mark.asyncio
    async def test_malformed_id(self, service, mock_collection):
        with pytest.raises(BadRequestException) as exc_info:
            await service.get_by_id("not-an-id")

        assert exc_info.value.message == "Invalid project ID"
        mock_collection.find_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_found(self, service, mock_collection):
        mock_collection.find_one.return_value = None

        with pytest.raises(NotFoundException) as exc_info:
            await service.get_by_id(str(ObjectId()))

        assert exc_info.value.message == "Project not found"

    @pytest.mark.asyncio
    async def test_filters_by_owner(self, service, mock_collection, sample_project_doc):
        mock_collection.find_one.return_value = sample_project_doc

        project = await service.get_by_id(str(sample_project_doc["_id"]))

        assert project["detailedDescription"] == sample_project_doc["detailedDescription"]
        query = mock_collection.find_one.call_args[0][0]
        assert query == {"_id": sample_project_doc["_id"], "owner": "admin"}


# ─────────────────────────────────────────────────────────────────
# create
# ─────────────────────────────────────────────────────────────────


class TestCreate:
    @pytest.mark.asyncio
    async def test_creates_without_files(self, service, mock_collection, mock_media, project_fields):
        inserted_id = ObjectId()
        mock_collection.insert_one.return_value = MagicMock(inserted_id=inserted_id)

        project = await service.create(project_fields)

        assert project["_id"] == str(inserted_id)
        assert project["images"] == []
        assert project["category"] == "Undergraduate"
        assert project["featured"] is False
        assert project["owner"] == "admin"
        assert project["projectDate"] == datetime(2024, 3, 1, tzinfo=timezone.utc)
        mock_media.store.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_required_field_persists_nothing(
        self, service, mock_collection, mock_media, project_fields, png_upload,
    ):
        del project_fields["detailedDescription"]

        with pytest.raises(BadRequestException) as exc_info:
            await service.create(project_fields, [png_upload])

        assert exc_info.value.message == "Missing required fields: detailedDescription"
        mock_collection.insert_one.assert_not_called()
        mock_media.store.assert_not_called()

    @pytest.mark.asyncio
    async def test_schema_violations_are_joined(self, service, mock_collection, project_fields):
        project_fields.update({"title": "x" * 201, "category": "hobby"})

        with pytest.raises(BadRequestException) as exc_info:
            await service.create(project_fields)

        assert exc_info.value.message.startswith("Title cannot exceed 200 characters, Invalid category")
        mock_collection.insert_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_uploads_images_and_stores_locators(
        self, service, mock_collection, mock_media, project_fields, png_upload,
    ):
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        project = await service.create(project_fields, [png_upload, png_upload])

        assert mock_media.store.await_count == 2
        mock_media.store.assert_any_await(png_upload, PROJECT_IMAGE)
        assert [i["id"] for i in project["images"]] == ["projects/1", "projects/2"]
        assert all(i["caption"] == "" for i in project["images"])

    @pytest.mark.asyncio
    async def test_too_many_files(self, service, mock_collection, project_fields, png_upload):
        with pytest.raises(BadRequestException):
            await service.create(project_fields, [png_upload] * 11)

        mock_collection.insert_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejected_file_type_stops_create(
        self, service, mock_collection, mock_media, project_fields, pdf_upload,
    ):
        mock_media.check.side_effect = BadRequestException("Only image files are allowed")

        with pytest.raises(BadRequestException) as exc_info:
            await service.create(project_fields, [pdf_upload])

        assert exc_info.value.message == "Only image files are allowed"
        mock_media.store.assert_not_called()
        mock_collection.insert_one.assert_not_called()


# ─────────────────────────────────────────────────────────────────
# update
# ─────────────────────────────────────────────────────────────────


class TestUpdate:
    @pytest.fixture
    def stored(self, mock_collection, sample_project_doc):
        mock_collection.find_one.return_value = sample_project_doc
        mock_collection.replace_one.return_value = MagicMock(matched_count=1)
        return sample_project_doc

    @pytest.mark.asyncio
    async def test_subset_update_preserves_other_fields(self, service, mock_collection, stored):
        project = await service.update(str(stored["_id"]), {"title": "Renamed"})

        assert project["title"] == "Renamed"
        assert project["description"] == stored["description"]
        assert project["technologies"] == stored["technologies"]
        assert project["images"] == stored["images"]

        saved = mock_collection.replace_one.call_args[0][1]
        assert "_id" not in saved
        assert saved["detailedDescription"] == stored["detailedDescription"]

    @pytest.mark.asyncio
    async def test_blank_required_field_is_ignored(self, service, stored):
        project = await service.update(str(stored["_id"]), {"description": "   "})

        assert project["description"] == stored["description"]

    @pytest.mark.asyncio
    async def test_empty_string_clears_optional_field(self, service, stored):
        project = await service.update(str(stored["_id"]), {"githubLink": ""})

        assert project["githubLink"] == ""

    @pytest.mark.asyncio
    async def test_booleans_and_arrays_are_overwritten(self, service, stored):
        project = await service.update(
            str(stored["_id"]),
            {"featured": False, "technologies": []},
        )

        assert project["featured"] is False
        assert project["technologies"] == []

    @pytest.mark.asyncio
    async def test_kept_plus_new_images_and_dropped_removed(
        self, service, mock_media, stored, png_upload,
    ):
        kept = [{"url": "https://media.test/projects/a", "public_id": "projects/a"}]

        project = await service.update(
            str(stored["_id"]),
            {"existingImages": kept},
            [png_upload],
        )

        assert [i["id"] for i in project["images"]] == ["projects/a", "projects/1"]
        mock_media.remove.assert_awaited_once_with("projects/b", "image")

    @pytest.mark.asyncio
    async def test_images_kept_when_nothing_submitted(self, service, mock_media, stored):
        project = await service.update(str(stored["_id"]), {"title": "Renamed"})

        assert project["images"] == stored["images"]
        mock_media.remove.assert_not_called()

    @pytest.mark.asyncio
    async def test_validation_failure_writes_nothing(self, service, mock_collection, stored):
        with pytest.raises(BadRequestException):
            await service.update(str(stored["_id"]), {"category": "hobby"})

        mock_collection.replace_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_write_failure_removes_new_uploads(
        self, service, mock_collection, mock_media, stored, png_upload,
    ):
        mock_collection.replace_one.side_effect = PyMongoError("connection reset")

        with pytest.raises(ServerException) as exc_info:
            await service.update(str(stored["_id"]), {"title": "New"}, [png_upload])

        assert exc_info.value.code == "UPDATE_FAILED"
        mock_media.remove.assert_awaited_once_with("projects/1", "image")

    @pytest.mark.asyncio
    async def test_missing_project(self, service, mock_collection):
        mock_collection.find_one.return_value = None

        with pytest.raises(NotFoundException):
            await service.update(str(ObjectId()), {"title": "x"})


# ─────────────────────────────────────────────────────────────────
# delete
# ─────────────────────────────────────────────────────────────────


class TestDelete:
    @pytest.mark.asyncio
    async def test_removes_document_then_media(
        self, service, mock_collection, mock_media, sample_project_doc,
    ):
        mock_collection.find_one_and_delete.return_value = sample_project_doc

        await service.delete(str(sample_project_doc["_id"]))

        assert mock_media.remove.await_count == 2
        mock_media.remove.assert_any_await("projects/a", "image")
        mock_media.remove.assert_any_await("projects/b", "image")

    @pytest.mark.asyncio
    async def test_media_failure_does_not_fail_delete(
        self, service, mock_collection, mock_media, sample_project_doc,
    ):
        mock_collection.find_one_and_delete.return_value = sample_project_doc
        mock_media.remove.return_value = False

        await service.delete(str(sample_project_doc["_id"]))

    @pytest.mark.asyncio
    async def test_nonexistent_id(self, service, mock_collection, mock_media):
        mock_collection.find_one_and_delete.return_value = None

        with pytest.raises(NotFoundException):
            await service.delete(str(ObjectId()))

        mock_media.remove.assert_not_called()
