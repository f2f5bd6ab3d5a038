"""
Async HTTP client for the portfolio API.

Wraps every route, sending JSON or multipart depending on whether files are
attached, and unwraps the response envelope.

Example:
    async with PortfolioClient("http://localhost:8000", token=token) as client:
        projects, pagination = await client.list_projects(category="research")
"""

import json
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx


# (filename, content, content type)
FileTuple = Tuple[str, bytes, str]

JSON_FORM_FIELDS = {
    "technologies", "teamMembers", "skills", "existingImages", "authors", "tags",
}


class ClientError(Exception):
    """Raised when the API answers with success: false or a non-JSON error."""

    def __init__(self, message: str, status_code: int, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


def encode_form(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Encode form values the way the content routes expect them.

    Array fields become JSON strings, so an empty list is still submitted
    and clears the stored one. Booleans become "true"/"false".
    """
    encoded: Dict[str, Any] = {}
    for key, value in fields.items():
        if value is None:
            continue
        if key in JSON_FORM_FIELDS:
            encoded[key] = json.dumps(value)
        elif isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        else:
            encoded[key] = value
    return encoded


class PortfolioClient:
    """
    Client for the /api routes.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize PortfolioClient.

        Args:
            base_url: Server origin, e.g. http://localhost:8000
            token: Bearer token for admin routes (optional)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._http = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/api",
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "PortfolioClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # =========================================================================
    # Transport
    # =========================================================================

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        form: Optional[Dict[str, Any]] = None,
        files: Optional[List[Tuple[str, FileTuple]]] = None,
    ) -> Dict[str, Any]:
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        if files or form is not None:
            response = await self._http.request(
                method,
                path,
                params=params,
                data=encode_form(form or {}),
                files=files or None,
            )
        else:
            response = await self._http.request(method, path, params=params, json=json_body)

        try:
            body = response.json()
        except ValueError:
            raise ClientError(
                response.text or response.reason_phrase,
                status_code=response.status_code,
            )

        if not body.get("success"):
            raise ClientError(
                body.get("message", "Request failed"),
                status_code=response.status_code,
                code=body.get("code"),
            )
        return body

    @staticmethod
    def _files(field: str, files: Optional[Sequence[FileTuple]]) -> List[Tuple[str, FileTuple]]:
        return [(field, f) for f in files or []]

    # =========================================================================
    # Users / profile
    # =========================================================================

    async def get_user_data(self) -> Dict[str, Any]:
        return (await self._request("GET", "/users/user-data"))["data"]

    async def get_profile_data(self) -> Dict[str, Any]:
        return (await self._request("GET", "/users/profile-data"))["data"]

    async def update_profile(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return (await self._request("PUT", "/users/update-profile", json_body=fields))["data"]

    async def upload_profile_picture(self, file: FileTuple) -> Dict[str, Any]:
        body = await self._request(
            "POST", "/users/upload-profile", files=self._files("profilePicture", [file])
        )
        return body["data"]

    async def get_academic_profile(self) -> Dict[str, Any]:
        return (await self._request("GET", "/users/academic-profile"))["data"]

    async def update_academic_profile(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return (await self._request("PUT", "/users/academic-profile", json_body=fields))["data"]

    async def get_about(self) -> Dict[str, Any]:
        return (await self._request("GET", "/users/about"))["data"]

    async def update_about(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return (await self._request("PUT", "/users/about", json_body=fields))["data"]

    async def get_news(self) -> List[Dict[str, Any]]:
        return (await self._request("GET", "/users/news"))["data"]

    async def update_news(self, news_items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        body = await self._request("PUT", "/users/news", json_body={"newsItems": news_items})
        return body["data"]

    async def delete_news_item(self, item_id: str) -> None:
        await self._request("DELETE", f"/users/news/{item_id}")

    async def get_courses(self) -> List[Dict[str, Any]]:
        return (await self._request("GET", "/users/courses"))["data"]

    async def update_courses(self, courses: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        body = await self._request("PUT", "/users/courses", json_body={"courses": courses})
        return body["data"]

    async def delete_course(self, course_id: str) -> None:
        await self._request("DELETE", f"/users/courses/{course_id}")

    async def get_contact(self) -> Dict[str, Any]:
        return (await self._request("GET", "/users/contact"))["data"]

    async def update_contact(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return (await self._request("PUT", "/users/contact", json_body=fields))["data"]

    async def send_message(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return (await self._request("POST", "/users/messages", json_body=fields))["data"]

    async def get_messages(self) -> List[Dict[str, Any]]:
        return (await self._request("GET", "/users/messages"))["data"]

    async def delete_message(self, message_id: str) -> None:
        await self._request("DELETE", f"/users/messages/{message_id}")

    # =========================================================================
    # Achievements / research
    # =========================================================================

    async def list_achievements(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        body = await self._request(
            "GET", "/researchAchievement/achievements", params={"category": category}
        )
        return body["data"]

    async def create_achievement(
        self, fields: Dict[str, Any], photo: Optional[FileTuple] = None
    ) -> Dict[str, Any]:
        body = await self._request(
            "POST",
            "/researchAchievement/achievements",
            form=fields,
            files=self._files("photo", [photo] if photo else None),
        )
        return body["data"]

    async def update_achievement(
        self, achievement_id: str, fields: Dict[str, Any], photo: Optional[FileTuple] = None
    ) -> Dict[str, Any]:
        body = await self._request(
            "PUT",
            f"/researchAchievement/achievements/{achievement_id}",
            form=fields,
            files=self._files("photo", [photo] if photo else None),
        )
        return body["data"]

    async def delete_achievement(self, achievement_id: str) -> None:
        await self._request("DELETE", f"/researchAchievement/achievements/{achievement_id}")

    async def list_research(self) -> List[Dict[str, Any]]:
        return (await self._request("GET", "/researchAchievement/research"))["data"]

    async def create_research(self, fields: Dict[str, Any], pdf: FileTuple) -> Dict[str, Any]:
        body = await self._request(
            "POST",
            "/researchAchievement/research",
            form=fields,
            files=self._files("pdfFile", [pdf]),
        )
        return body["data"]

    async def update_research(
        self, research_id: str, fields: Dict[str, Any], pdf: Optional[FileTuple] = None
    ) -> Dict[str, Any]:
        body = await self._request(
            "PUT",
            f"/researchAchievement/research/{research_id}",
            form=fields,
            files=self._files("pdfFile", [pdf] if pdf else None),
        )
        return body["data"]

    async def delete_research(self, research_id: str) -> None:
        await self._request("DELETE", f"/researchAchievement/research/{research_id}")

    async def download_research(self, research_id: str) -> Tuple[str, bytes]:
        """
        Download a paper's PDF.

        Returns:
            (filename from Content-Disposition, file bytes)
        """
        response = await self._http.get(f"/researchAchievement/research/{research_id}/download")
        if response.status_code != 200:
            try:
                message = response.json().get("message", "Download failed")
            except ValueError:
                message = "Download failed"
            raise ClientError(message, status_code=response.status_code)

        disposition = response.headers.get("content-disposition", "")
        filename = disposition.split("filename=")[-1].strip('"') if "filename=" in disposition else ""
        return filename, response.content

    # =========================================================================
    # Projects / certificates
    # =========================================================================

    async def list_projects(
        self,
        category: Optional[str] = None,
        featured: Optional[bool] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        body = await self._request(
            "GET",
            "/projects",
            params={
                "category": category,
                "featured": "true" if featured else None,
                "page": page,
                "limit": limit,
            },
        )
        return body["data"], body.get("pagination", {})

    async def get_project(self, project_id: str) -> Dict[str, Any]:
        return (await self._request("GET", f"/projects/{project_id}"))["data"]

    async def create_project(
        self, fields: Dict[str, Any], images: Optional[Sequence[FileTuple]] = None
    ) -> Dict[str, Any]:
        body = await self._request(
            "POST", "/projects", form=fields, files=self._files("images", images)
        )
        return body["data"]

    async def update_project(
        self,
        project_id: str,
        fields: Dict[str, Any],
        images: Optional[Sequence[FileTuple]] = None,
    ) -> Dict[str, Any]:
        body = await self._request(
            "PUT", f"/projects/{project_id}", form=fields, files=self._files("images", images)
        )
        return body["data"]

    async def delete_project(self, project_id: str) -> None:
        await self._request("DELETE", f"/projects/{project_id}")

    async def list_certificates(
        self,
        category: Optional[str] = None,
        featured: Optional[bool] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        body = await self._request(
            "GET",
            "/certificates",
            params={
                "category": category,
                "featured": "true" if featured else None,
                "page": page,
                "limit": limit,
            },
        )
        return body["data"], body.get("pagination", {})

    async def create_certificate(
        self, fields: Dict[str, Any], images: Optional[Sequence[FileTuple]] = None
    ) -> Dict[str, Any]:
        body = await self._request(
            "POST", "/certificates", form=fields, files=self._files("images", images)
        )
        return body["data"]

    async def update_certificate(
        self,
        certificate_id: str,
        fields: Dict[str, Any],
        images: Optional[Sequence[FileTuple]] = None,
    ) -> Dict[str, Any]:
        body = await self._request(
            "PUT",
            f"/certificates/{certificate_id}",
            form=fields,
            files=self._files("images", images),
        )
        return body["data"]

    async def delete_certificate(self, certificate_id: str) -> None:
        await self._request("DELETE", f"/certificates/{certificate_id}")
