"""Tests for PortfolioClient and the section controllers over a mocked API."""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from portfolio.client import (
    ClientError,
    CoursesSection,
    HeroSection,
    MessagesSection,
    NewsSection,
    PortfolioClient,
    ProjectsSection,
    ResearchSection,
)
from portfolio.client.api_client import encode_form


class FakeAPI:
    """Route table for httpx.MockTransport; records every request."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method, path, status=200, body=None, content=None, headers=None):
        self.routes[(method, path)] = (status, body, content, headers)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"success": False, "message": "Route not found"})
        status, body, content, headers = self.routes[key]
        if content is not None:
            return httpx.Response(status, content=content, headers=headers)
        return httpx.Response(status, json=body)

    def last(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path == path][-1]


@pytest.fixture
def api():
    return FakeAPI()


@pytest.fixture
def client(api):
    return PortfolioClient("http://portfolio.test", token="tok", transport=httpx.MockTransport(api))


# ─────────────────────────────────────────────────────────────────
# PortfolioClient
# ─────────────────────────────────────────────────────────────────


class TestEncodeForm:
    def test_arrays_and_booleans(self):
        encoded = encode_form({
            "technologies": ["C"],
            "featured": False,
            "authors": ["A", "B"],
            "title": "T",
            "doi": None,
        })

        assert encoded == {
            "technologies": '["C"]',
            "featured": "false",
            "authors": '["A", "B"]',
            "title": "T",
        }

    def test_empty_lists_are_still_sent(self):
        encoded = encode_form({"authors": [], "tags": []})

        assert encoded == {"authors": "[]", "tags": "[]"}


class TestPortfolioClient:
    @pytest.mark.asyncio
    async def test_list_projects_sends_filters(self, api, client):
        pagination = {"currentPage": 1, "totalPages": 1, "totalCount": 1, "hasNext": False, "hasPrev": False}
        api.on("GET", "/api/projects", body={"success": True, "data": [{"_id": "p1"}], "pagination": pagination})

        items, meta = await client.list_projects(category="research", featured=True)

        assert items == [{"_id": "p1"}]
        assert meta == pagination
        request = api.last("GET", "/api/projects")
        assert request.url.params["category"] == "research"
        assert request.url.params["featured"] == "true"
        assert "limit" not in request.url.params
        assert request.headers["authorization"] == "Bearer tok"

    @pytest.mark.asyncio
    async def test_error_envelope_raises(self, api, client):
        api.on("GET", "/api/projects/x", status=400,
               body={"success": False, "message": "Invalid project ID", "code": "INVALID_ID"})

        with pytest.raises(ClientError) as exc_info:
            await client.get_project("x")

        assert exc_info.value.message == "Invalid project ID"
        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "INVALID_ID"

    @pytest.mark.asyncio
    async def test_create_project_is_multipart(self, api, client):
        api.on("POST", "/api/projects", status=201, body={"success": True, "data": {"_id": "p1"}})

        await client.create_project(
            {"title": "Robot", "technologies": ["C"]},
            [("a.png", b"\x89PNG", "image/png")],
        )

        request = api.last("POST", "/api/projects")
        assert request.headers["content-type"].startswith("multipart/form-data")
        body = request.read()
        assert b'name="technologies"' in body
        assert b'["C"]' in body
        assert b'filename="a.png"' in body

    @pytest.mark.asyncio
    async def test_download_research(self, api, client):
        api.on(
            "GET", "/api/researchAchievement/research/r1/download",
            content=b"%PDF-1.7",
            headers={"content-disposition": 'attachment; filename="Graph_Survey.pdf"'},
        )

        filename, data = await client.download_research("r1")

        assert filename == "Graph_Survey.pdf"
        assert data == b"%PDF-1.7"


# ─────────────────────────────────────────────────────────────────
# Section controllers
# ─────────────────────────────────────────────────────────────────


class TestSectionController:
    @pytest.mark.asyncio
    async def test_visitor_cannot_edit(self, api, client):
        api.on("GET", "/api/users/profile-data", body={"success": True, "data": {"fullName": "Dr. A"}})
        hero = HeroSection(client, can_edit=False)

        await hero.load()

        assert hero.items == {"fullName": "Dr. A"}
        assert hero.start_edit() is False
        assert hero.is_editing is False

    @pytest.mark.asyncio
    async def test_save_submits_then_reloads(self, api, client):
        api.on("GET", "/api/users/profile-data", body={"success": True, "data": {"fullName": "Dr. A", "bio": "old"}})
        api.on("PUT", "/api/users/update-profile", body={"success": True, "data": {}})
        hero = HeroSection(client, can_edit=True)
        await hero.load()

        hero.start_edit()
        hero.form_data["bio"] = "new"
        assert hero.items["bio"] == "old"

        assert await hero.save() is True
        sent = json.loads(api.last("PUT", "/api/users/update-profile").read())
        assert sent["bio"] == "new"
        assert hero.is_editing is False
        assert len([r for r in api.requests if r.method == "GET"]) == 2

    @pytest.mark.asyncio
    async def test_failed_save_stays_in_edit_mode(self, api, client):
        api.on("GET", "/api/users/news", body={"success": True, "data": []})
        api.on("PUT", "/api/users/news", status=400, body={
            "success": False,
            "message": "Title, description, and date are required for all news items",
        })
        news = NewsSection(client, can_edit=True)
        await news.load()
        news.start_edit()
        news.add_item()

        assert await news.save() is False
        assert news.is_editing is True
        assert news.error == "Title, description, and date are required for all news items"

    @pytest.mark.asyncio
    async def test_cancel_refetches(self, api, client):
        api.on("GET", "/api/users/courses", body={"success": True, "data": [{"_id": "c1", "title": "ML"}]})
        courses = CoursesSection(client, can_edit=True)
        await courses.load()
        courses.start_edit()
        courses.form_data[0]["title"] = "changed"

        await courses.cancel()

        assert courses.is_editing is False
        assert courses.items == [{"_id": "c1", "title": "ML"}]


class TestEmbeddedListSection:
    @pytest.mark.asyncio
    async def test_unsaved_item_removed_locally(self, api, client):
        api.on("GET", "/api/users/news", body={"success": True, "data": []})
        news = NewsSection(client, can_edit=True)
        await news.load()
        news.start_edit()
        news.add_item()

        assert await news.remove_item(0) is True
        assert news.form_data == []
        assert not [r for r in api.requests if r.method == "DELETE"]

    @pytest.mark.asyncio
    async def test_saved_item_deleted_on_server(self, api, client):
        api.on("GET", "/api/users/news", body={"success": True, "data": [{"_id": "n1", "title": "Talk"}]})
        api.on("DELETE", "/api/users/news/n1", body={"success": True})
        news = NewsSection(client, can_edit=True)
        await news.load()
        news.start_edit()

        assert await news.remove_item(0) is True
        assert news.items == []
        assert news.form_data == []


class TestMessagesSection:
    @pytest.mark.asyncio
    async def test_visitor_sees_nothing(self, api, client):
        messages = MessagesSection(client, can_edit=False)

        await messages.load()

        assert messages.items == []
        assert api.requests == []


class TestCollectionSections:
    @pytest.mark.asyncio
    async def test_research_requires_pdf_before_request(self, api, client):
        research = ResearchSection(client, can_edit=True)
        research.start_edit()
        research.form_data.update({"title": "Paper", "publisher": "ACM"})

        assert await research.save() is False
        assert research.error == "PDF file is required"
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_research_update_sends_emptied_lists(self, api, client):
        api.on("GET", "/api/researchAchievement/research", body={"success": True, "data": []})
        api.on("PUT", "/api/researchAchievement/research/r1", body={"success": True, "data": {}})
        research = ResearchSection(client, can_edit=True)
        research.start_edit({
            "_id": "r1",
            "title": "Paper",
            "authors": ["A. Rahman"],
            "tags": ["graphs"],
        })
        research.form_data["authors"] = []
        research.form_data["tags"] = []

        assert await research.save() is True

        sent = parse_qs(api.last("PUT", "/api/researchAchievement/research/r1").read().decode())
        assert sent["authors"] == ["[]"]
        assert sent["tags"] == ["[]"]

    @pytest.mark.asyncio
    async def test_project_update_sends_kept_images(self, api, client):
        images = [{"url": "https://media.test/projects/a", "id": "projects/a", "caption": ""}]
        api.on("GET", "/api/projects", body={"success": True, "data": [], "pagination": {}})
        api.on("PUT", "/api/projects/p1", body={"success": True, "data": {}})
        projects = ProjectsSection(client, can_edit=True)
        projects.start_edit({"_id": "p1", "title": "Robot", "images": images, "createdAt": "2024"})
        projects.pending_files = [("b.png", b"\x89PNG", "image/png")]

        assert await projects.save() is True

        body = api.last("PUT", "/api/projects/p1").read()
        assert b'name="existingImages"' in body
        assert b"projects/a" in body
        assert b'name="createdAt"' not in body
        assert b'filename="b.png"' in body
        assert projects.pending_files == []

    @pytest.mark.asyncio
    async def test_pagination_navigation(self, api, client):
        api.on("GET", "/api/projects", body={
            "success": True,
            "data": [],
            "pagination": {"currentPage": 2, "totalPages": 2, "totalCount": 15, "hasNext": False, "hasPrev": True},
        })
        projects = ProjectsSection(client)

        await projects.go_to_page(2)

        assert api.last("GET", "/api/projects").url.params["page"] == "2"
        assert projects.pagination["hasPrev"] is True
