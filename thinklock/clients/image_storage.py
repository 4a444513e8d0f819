# ==============================================================================
# IMAGE STORAGE - ImageKit Upload Client
# ==============================================================================
# Uploads profile and course images through the ImageKit upload API
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from thinklock.core.exceptions import ServiceUnavailableError
from thinklock.core.settings import settings

logger = logging.getLogger(__name__)

SERVICE_NAME = "imagekit"


class ImageStorage:
    """
    Async client for ImageKit uploads.

    Uploads go to ``<root folder>/<folder>``; the provider's response
    (url, fileId, name...) is returned unchanged.
    """

    def __init__(
        self,
        private_key: Optional[str] = None,
        upload_url: Optional[str] = None,
        root_folder: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._private_key = private_key if private_key is not None else settings.IMAGEKIT_PRIVATE_KEY
        self._upload_url = upload_url or settings.IMAGEKIT_UPLOAD_URL
        self._root_folder = (root_folder or settings.IMAGEKIT_ROOT_FOLDER).strip("/")
        self._timeout = timeout or settings.EXTERNAL_TIMEOUT_SECONDS
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            # ImageKit authenticates with the private key as basic-auth user
            self._client = httpx.AsyncClient(
                auth=(self._private_key, ""),
                timeout=httpx.Timeout(self._timeout, connect=5.0),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def folder_path(self, folder: str) -> str:
        return f"{self._root_folder}/{folder.strip('/')}"

    async def upload(
        self,
        content: bytes,
        filename: str,
        folder: str,
        content_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Upload one image.

        Args:
            content: Raw file bytes
            filename: Name to store the file under
            folder: Sub-folder under the storage root
            content_type: MIME type of the file

        Returns:
            ImageKit upload response

        Raises:
            ServiceUnavailableError: If the provider fails
        """
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        data = {
            "fileName": filename,
            "folder": self.folder_path(folder),
            "useUniqueFileName": "true",
        }

        try:
            response = await self._get_client().post(self._upload_url, files=files, data=data)
        except httpx.HTTPError as e:
            logger.error(f"ImageKit upload of {filename} failed: {e}")
            raise ServiceUnavailableError(
                message="Image storage unreachable",
                service_name=SERVICE_NAME,
            )

        if response.is_error:
            logger.error(f"ImageKit responded {response.status_code}: {response.text}")
            raise ServiceUnavailableError(
                message="Image upload failed",
                service_name=SERVICE_NAME,
                details={"provider_status": response.status_code},
            )

        result = response.json()
        logger.info(f"Uploaded image {result.get('name', filename)} to {data['folder']}")
        return result
