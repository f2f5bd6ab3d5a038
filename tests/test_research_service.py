"""Unit tests for ResearchService."""

import pytest
from unittest.mock import MagicMock
from bson import ObjectId

from common.utils.exceptions import BadRequestException, NotFoundException
from portfolio.services.content.research_service import ResearchService, download_filename
from portfolio.services.media import RESEARCH_PDF


@pytest.fixture
def service(mock_db, mock_media):
    return ResearchService(mock_db, mock_media, owner="admin")


@pytest.fixture
def paper_fields():
    return {
        "title": "Graph Neural Networks: A Survey",
        "description": "Survey of GNN architectures",
        "publishedDate": "2023-11-02",
        "publisher": "IEEE Access",
        "authors": ["A. Rahman", "B. Chen"],
    }


class TestDownloadFilename:
    def test_replaces_non_alphanumerics(self):
        assert download_filename("Graph Neural Networks: A Survey") == "Graph_Neural_Networks__A_Survey.pdf"

    def test_plain_title(self):
        assert download_filename("GNN2023") == "GNN2023.pdf"


class TestResearchCreate:
    @pytest.mark.asyncio
    async def test_pdf_is_required(self, service, mock_collection, paper_fields):
        with pytest.raises(BadRequestException) as exc_info:
            await service.create(paper_fields)

        assert exc_info.value.message == "PDF file is required"
        mock_collection.insert_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_image_rejected_for_pdf_field(self, service, mock_collection, mock_media, paper_fields, png_upload):
        mock_media.check.side_effect = BadRequestException("Only PDF files are allowed")

        with pytest.raises(BadRequestException) as exc_info:
            await service.create(paper_fields, [png_upload])

        assert exc_info.value.message == "Only PDF files are allowed"
        mock_collection.insert_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_stores_pdf_locator(self, service, mock_collection, mock_media, paper_fields, pdf_upload):
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        paper = await service.create(paper_fields, [pdf_upload])

        mock_media.store.assert_awaited_once_with(pdf_upload, RESEARCH_PDF)
        assert paper["pdfFile"]["id"] == "research-papers/1"
        assert paper["authors"] == ["A. Rahman", "B. Chen"]
        assert paper["tags"] == []


class TestResearchUpdate:
    @pytest.mark.asyncio
    async def test_pdf_optional_on_update(self, service, mock_collection, mock_media, sample_research_doc):
        mock_collection.find_one.return_value = sample_research_doc
        mock_collection.replace_one.return_value = MagicMock(matched_count=1)

        paper = await service.update(str(sample_research_doc["_id"]), {"doi": ""})

        assert paper["doi"] == ""
        assert paper["pdfFile"] == sample_research_doc["pdfFile"]
        mock_media.remove.assert_not_called()

    @pytest.mark.asyncio
    async def test_replacing_pdf_removes_raw_asset(
        self, service, mock_collection, mock_media, sample_research_doc, pdf_upload,
    ):
        mock_collection.find_one.return_value = sample_research_doc
        mock_collection.replace_one.return_value = MagicMock(matched_count=1)

        await service.update(str(sample_research_doc["_id"]), {}, [pdf_upload])

        mock_media.remove.assert_awaited_once_with("research-papers/gnn", "raw")


class TestResearchDelete:
    @pytest.mark.asyncio
    async def test_removes_pdf(self, service, mock_collection, mock_media, sample_research_doc):
        mock_collection.find_one_and_delete.return_value = sample_research_doc

        await service.delete(str(sample_research_doc["_id"]))

        mock_media.remove.assert_awaited_once_with("research-papers/gnn", "raw")

    @pytest.mark.asyncio
    async def test_missing_paper(self, service, mock_collection):
        mock_collection.find_one_and_delete.return_value = None

        with pytest.raises(NotFoundException) as exc_info:
            await service.delete(str(ObjectId()))

        assert exc_info.value.message == "Research paper not found"
        assert exc_info.value.code == "RESEARCH_NOT_FOUND"


class TestOpenDownload:
    @pytest.mark.asyncio
    async def test_opens_stored_pdf(self, service, mock_collection, mock_media, sample_research_doc):
        mock_collection.find_one.return_value = sample_research_doc
        remote = MagicMock()
        mock_media.open.return_value = remote

        filename, opened = await service.open_download(str(sample_research_doc["_id"]))

        assert filename == "Graph_Neural_Networks__A_Survey.pdf"
        assert opened is remote
        mock_media.open.assert_awaited_once_with(sample_research_doc["pdfFile"]["url"])

    @pytest.mark.asyncio
    async def test_paper_without_pdf(self, service, mock_collection, mock_media, sample_research_doc):
        sample_research_doc["pdfFile"] = None
        mock_collection.find_one.return_value = sample_research_doc

        with pytest.raises(NotFoundException) as exc_info:
            await service.open_download(str(sample_research_doc["_id"]))

        assert exc_info.value.message == "PDF file not found"
        mock_media.open.assert_not_called()
