"""Unit tests for AchievementService."""

import pytest
from unittest.mock import MagicMock
from bson import ObjectId
from pymongo.errors import PyMongoError

from common.utils.exceptions import BadRequestException, ServerException
from portfolio.services.content.achievement_service import AchievementService
from portfolio.services.media import ACHIEVEMENT_PHOTO


@pytest.fixture
def service(mock_db, mock_media):
    return AchievementService(mock_db, mock_media, owner="admin")


@pytest.fixture
def achievement_fields():
    return {
        "title": "Best Paper Award",
        "description": "Awarded at the national conference",
        "date": "2024-05-10",
        "place": "Dhaka",
        "event": "NCICT 2024",
    }


class TestAchievementList:
    @pytest.mark.asyncio
    async def test_returns_everything_without_limit(self, service, mock_collection, cursor_factory):
        docs = [{"_id": ObjectId(), "title": f"A{i}"} for i in range(3)]
        cursor = cursor_factory(docs)
        mock_collection.find.return_value = cursor
        mock_collection.count_documents.return_value = 3

        items, pagination = await service.list(category="sports")

        assert len(items) == 3
        assert pagination["totalCount"] == 3
        assert pagination["hasNext"] is False
        cursor.sort.assert_called_once_with("date", -1)
        cursor.skip.assert_not_called()
        mock_collection.find.assert_called_once_with({"owner": "admin", "category": "sports"}, None)


class TestAchievementCreate:
    @pytest.mark.asyncio
    async def test_missing_place(self, service, mock_collection, achievement_fields):
        del achievement_fields["place"]

        with pytest.raises(BadRequestException) as exc_info:
            await service.create(achievement_fields)

        assert exc_info.value.message == "Missing required fields: place"
        assert exc_info.value.code == "MISSING_FIELDS"
        mock_collection.insert_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_photo_is_optional(self, service, mock_collection, achievement_fields):
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        achievement = await service.create(achievement_fields)

        assert achievement["photo"] is None
        assert achievement["category"] == "academic"

    @pytest.mark.asyncio
    async def test_stores_single_photo(
        self, service, mock_collection, mock_media, achievement_fields, png_upload,
    ):
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        achievement = await service.create(achievement_fields, [png_upload])

        mock_media.store.assert_awaited_once_with(png_upload, ACHIEVEMENT_PHOTO)
        assert achievement["photo"] == {
            "url": "https://media.test/achievements/1",
            "id": "achievements/1",
        }

    @pytest.mark.asyncio
    async def test_insert_failure_removes_upload(
        self, service, mock_collection, mock_media, achievement_fields, png_upload,
    ):
        mock_collection.insert_one.side_effect = PyMongoError("down")

        with pytest.raises(ServerException):
            await service.create(achievement_fields, [png_upload])

        mock_media.remove.assert_awaited_once_with("achievements/1", "image")


class TestAchievementUpdate:
    @pytest.mark.asyncio
    async def test_new_photo_replaces_and_removes_old(
        self, service, mock_collection, mock_media, sample_achievement_doc, png_upload,
    ):
        mock_collection.find_one.return_value = sample_achievement_doc
        mock_collection.replace_one.return_value = MagicMock(matched_count=1)

        achievement = await service.update(
            str(sample_achievement_doc["_id"]), {"position": "2nd"}, [png_upload]
        )

        assert achievement["photo"]["id"] == "achievements/1"
        assert achievement["position"] == "2nd"
        mock_media.remove.assert_awaited_once_with("achievements/old", "image")

    @pytest.mark.asyncio
    async def test_without_file_keeps_photo(
        self, service, mock_collection, mock_media, sample_achievement_doc,
    ):
        mock_collection.find_one.return_value = sample_achievement_doc
        mock_collection.replace_one.return_value = MagicMock(matched_count=1)

        achievement = await service.update(str(sample_achievement_doc["_id"]), {"event": "ICCIT"})

        assert achievement["photo"] == sample_achievement_doc["photo"]
        assert achievement["event"] == "ICCIT"
        mock_media.remove.assert_not_called()

    @pytest.mark.asyncio
    async def test_only_one_photo_allowed(
        self, service, mock_collection, sample_achievement_doc, png_upload,
    ):
        mock_collection.find_one.return_value = sample_achievement_doc

        with pytest.raises(BadRequestException):
            await service.update(str(sample_achievement_doc["_id"]), {}, [png_upload, png_upload])


class TestAchievementDelete:
    @pytest.mark.asyncio
    async def test_removes_photo(self, service, mock_collection, mock_media, sample_achievement_doc):
        mock_collection.find_one_and_delete.return_value = sample_achievement_doc

        await service.delete(str(sample_achievement_doc["_id"]))

        mock_media.remove.assert_awaited_once_with("achievements/old", "image")
