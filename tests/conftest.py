"""Shared test fixtures for portfolio backend tests."""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from portfolio.services.media import UploadedFile


OWNER = "admin"


def make_cursor(items):
    """A Motor-like cursor whose sort/skip/limit chain back to itself."""
    cursor = MagicMock()
    cursor.sort = MagicMock(return_value=cursor)
    cursor.skip = MagicMock(return_value=cursor)
    cursor.limit = MagicMock(return_value=cursor)
    cursor.to_list = AsyncMock(return_value=items)
    return cursor


@pytest.fixture
def cursor_factory():
    return make_cursor


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine),
    # so use MagicMock for it. Async methods like find_one, insert_one,
    # count_documents etc. stay as AsyncMock.
    collection.find = MagicMock(return_value=make_cursor([]))
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def mock_media():
    media = MagicMock()
    media.check = MagicMock()
    counter = {"n": 0}

    async def store(file, profile):
        counter["n"] += 1
        return {
            "url": f"https://media.test/{profile.folder}/{counter['n']}",
            "id": f"{profile.folder}/{counter['n']}",
        }

    media.store = AsyncMock(side_effect=store)
    media.remove = AsyncMock(return_value=True)
    media.open = AsyncMock()
    return media


@pytest.fixture
def png_upload():
    return UploadedFile(filename="photo.png", content_type="image/png", data=b"\x89PNG" + b"0" * 64)


@pytest.fixture
def pdf_upload():
    return UploadedFile(filename="paper.pdf", content_type="application/pdf", data=b"%PDF-1.7 test")


@pytest.fixture
def sample_project_doc():
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(),
        "owner": OWNER,
        "title": "Line-following robot",
        "description": "Autonomous robot for the robotics lab",
        "detailedDescription": "PID control loop on an STM32 board",
        "technologies": ["C", "Python"],
        "category": "research",
        "projectDate": datetime(2024, 3, 1, tzinfo=timezone.utc),
        "teamMembers": [{"name": "Ada", "role": "Lead"}],
        "githubLink": "https://github.com/example/robot",
        "liveDemoLink": "",
        "images": [
            {"url": "https://media.test/projects/a", "id": "projects/a", "caption": ""},
            {"url": "https://media.test/projects/b", "id": "projects/b", "caption": ""},
        ],
        "featured": True,
        "createdAt": now,
        "updatedAt": now,
    }


@pytest.fixture
def sample_certificate_doc():
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(),
        "owner": OWNER,
        "title": "Deep Learning Specialization",
        "description": "Five-course specialization",
        "issuingOrganization": "Coursera",
        "issueDate": datetime(2023, 6, 1, tzinfo=timezone.utc),
        "expirationDate": None,
        "category": "online-course",
        "skills": ["PyTorch"],
        "credentialId": "ABC123",
        "credentialUrl": "",
        "images": [
            {"url": "https://media.test/certificates/1", "id": "certificates/1", "caption": ""},
            {"url": "https://media.test/certificates/2", "id": "certificates/2", "caption": ""},
        ],
        "featured": False,
        "createdAt": now,
        "updatedAt": now,
    }


@pytest.fixture
def sample_achievement_doc():
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(),
        "owner": OWNER,
        "title": "Best Paper Award",
        "description": "Awarded at the national conference",
        "date": datetime(2024, 5, 10, tzinfo=timezone.utc),
        "place": "Dhaka",
        "event": "NCICT 2024",
        "position": "1st",
        "category": "academic",
        "photo": {"url": "https://media.test/achievements/old", "id": "achievements/old"},
        "createdAt": now,
        "updatedAt": now,
    }


@pytest.fixture
def sample_research_doc():
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(),
        "owner": OWNER,
        "title": "Graph Neural Networks: A Survey",
        "description": "Survey of GNN architectures",
        "publishedDate": datetime(2023, 11, 2, tzinfo=timezone.utc),
        "publisher": "IEEE Access",
        "authors": ["A. Rahman", "B. Chen"],
        "doi": "10.1109/ACCESS.2023.1",
        "tags": ["gnn"],
        "pdfFile": {"url": "https://media.test/research-papers/gnn.pdf", "id": "research-papers/gnn"},
        "createdAt": now,
        "updatedAt": now,
    }
