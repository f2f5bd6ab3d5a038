"""
Hosted media storage using the Cloudinary REST API.

Uploads are signed with the account secret and posted as multipart forms.
Removal is best-effort: failures are logged and reported as False so that
callers can finish the primary operation regardless.
"""

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from common.utils.exceptions import BadRequestException, ServerException

logger = logging.getLogger(__name__)


MB = 1024 * 1024


@dataclass
class UploadedFile:
    """A file received from a multipart request, fully read into memory."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class MediaProfile:
    """Storage rules for one kind of uploaded file."""

    name: str
    folder: str
    max_bytes: int
    resource_type: str = "image"
    transformation: Optional[str] = None

    @property
    def accepts_images(self) -> bool:
        return self.resource_type == "image"

    def accepts(self, content_type: str) -> bool:
        if self.accepts_images:
            return (content_type or "").startswith("image/")
        return content_type == "application/pdf"


PROFILE_PICTURE = MediaProfile(
    "profile", "profile-pictures", 5 * MB, transformation="c_limit,w_500,h_500"
)
ACHIEVEMENT_PHOTO = MediaProfile(
    "achievement", "achievements", 10 * MB, transformation="c_limit,w_800,h_600"
)
RESEARCH_PDF = MediaProfile(
    "research", "research-papers", 20 * MB, resource_type="raw"
)
PROJECT_IMAGE = MediaProfile(
    "project", "projects", 10 * MB, transformation="c_limit,w_1200,h_800"
)
CERTIFICATE_IMAGE = MediaProfile(
    "certificate", "certificates", 8 * MB, transformation="c_limit,w_1000,h_800"
)


class RemoteFile:
    """An open streaming response for a stored asset."""

    def __init__(self, client: httpx.AsyncClient, response: httpx.Response):
        self._client = client
        self._response = response

    @property
    def content_length(self) -> Optional[str]:
        """
        Length of the body as streamed, or None when it is not known.

        iter_bytes() decodes any Content-Encoding, so the upstream length
        only holds for an unencoded response.
        """
        encoding = self._response.headers.get("content-encoding", "identity")
        if encoding.strip().lower() != "identity":
            return None
        return self._response.headers.get("content-length")

    async def iter_bytes(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.aiter_bytes():
                yield chunk
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        await self._response.aclose()
        await self._client.aclose()


class MediaService:
    """
    Stores and removes files in the hosted media service.

    Returned locators have the shape {"url": str, "id": str} where id is the
    provider's public id, needed later for removal.
    """

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        api_base: str = "https://api.cloudinary.com/v1_1",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize MediaService.

        Args:
            cloud_name: Cloudinary cloud name
            api_key: Cloudinary API key
            api_secret: Cloudinary API secret, used for request signing
            api_base: Base URL of the upload API
            timeout: Seconds to wait for each call
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._cloud_name and self._api_key and self._api_secret)

    # =========================================================================
    # Store
    # =========================================================================

    def check(self, file: UploadedFile, profile: MediaProfile) -> None:
        """Reject a file that the profile does not allow. Nothing is uploaded."""
        if not profile.accepts(file.content_type):
            if profile.accepts_images:
                raise BadRequestException("Only image files are allowed", code="INVALID_FILE_TYPE")
            raise BadRequestException("Only PDF files are allowed", code="INVALID_FILE_TYPE")

        if file.size > profile.max_bytes:
            raise BadRequestException(
                "File too large",
                code="FILE_TOO_LARGE",
                details={"maxBytes": profile.max_bytes},
            )

    async def store(self, file: UploadedFile, profile: MediaProfile) -> Dict[str, str]:
        """
        Upload a file under the profile's folder.

        Returns:
            {"url": secure url, "id": public id}
        """
        self.check(file, profile)
        self._require_credentials()

        params: Dict[str, Any] = {"folder": profile.folder}
        if profile.transformation:
            params["transformation"] = profile.transformation

        result = await self._post(
            f"{profile.resource_type}/upload",
            data=self._signed(params),
            files={"file": (file.filename, file.data, file.content_type)},
        )

        url = result.get("secure_url") or result.get("url")
        public_id = result.get("public_id")
        if not url or not public_id:
            logger.error(f"Media upload returned no locator: {result}")
            raise ServerException("Failed to upload file", code="UPLOAD_FAILED")

        logger.info(f"Stored {profile.name} file in {profile.folder}: {public_id}")
        return {"url": url, "id": public_id}

    # =========================================================================
    # Remove
    # =========================================================================

    async def remove(self, public_id: Optional[str], resource_type: str = "image") -> bool:
        """
        Delete a stored asset.

        Never raises; returns False when the asset could not be removed.
        """
        if not public_id:
            return False

        try:
            self._require_credentials()
            result = await self._post(
                f"{resource_type}/destroy",
                data=self._signed({"public_id": public_id}),
            )
        except ServerException as e:
            logger.warning(f"Failed to remove media {public_id}: {e.message}")
            return False
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Failed to remove media {public_id}: {e}")
            return False

        if result.get("result") != "ok":
            logger.warning(f"Media service did not remove {public_id}: {result.get('result')}")
            return False

        logger.info(f"Removed media {public_id}")
        return True

    # =========================================================================
    # Download
    # =========================================================================

    async def open(self, url: str) -> RemoteFile:
        """
        Open a streaming GET on a stored asset's url.

        The caller owns the returned RemoteFile and must exhaust or close it.
        """
        client = httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        )
        try:
            response = await client.send(client.build_request("GET", url), stream=True)
        except httpx.RequestError as e:
            await client.aclose()
            logger.error(f"Media download error for {url}: {e}")
            raise ServerException("Failed to download file", code="DOWNLOAD_FAILED")

        if response.status_code != 200:
            await response.aclose()
            await client.aclose()
            logger.error(f"Media download failed: {response.status_code} for {url}")
            raise ServerException("Failed to download file", code="DOWNLOAD_FAILED")

        return RemoteFile(client, response)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require_credentials(self) -> None:
        if not self.configured:
            raise ServerException(
                message="Media service credentials not configured",
                code="MEDIA_NOT_CONFIGURED",
            )

    def _signed(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Add timestamp, api_key and the SHA-1 signature to request params."""
        signed = dict(params)
        signed["timestamp"] = str(int(time.time()))

        to_sign = "&".join(f"{k}={signed[k]}" for k in sorted(signed))
        signed["signature"] = hashlib.sha1(
            f"{to_sign}{self._api_secret}".encode("utf-8")
        ).hexdigest()
        signed["api_key"] = self._api_key
        return signed

    async def _post(
        self,
        path: str,
        data: Dict[str, Any],
        files: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self._api_base}/{self._cloud_name}/{path}"

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(url, data=data, files=files)

                if response.status_code != 200:
                    logger.error(
                        f"Media service error: {response.status_code} - {response.text}"
                    )
                    raise ServerException(
                        message="Media service request failed",
                        code="MEDIA_REQUEST_FAILED",
                    )

                try:
                    body = response.json()
                except ValueError:
                    body = None

                if not isinstance(body, dict):
                    logger.error(f"Media service returned unexpected body: {response.text[:200]}")
                    raise ServerException(
                        message="Media service request failed",
                        code="MEDIA_REQUEST_FAILED",
                    )
                return body

        except httpx.RequestError as e:
            logger.error(f"Media service request error: {e}")
            raise ServerException(
                message="Failed to connect to media service",
                code="MEDIA_REQUEST_FAILED",
            )
