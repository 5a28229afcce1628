"""
Cloudinary relay for listing images.

Uploads go through Cloudinary's REST upload API with a signed request,
so the API secret never leaves the server.
"""

import logging
import time

import httpx
from cloudinary.utils import api_sign_request

from artmarket.config import Settings
from artmarket.errors import UpstreamError

logger = logging.getLogger(__name__)

CLOUDINARY_API_BASE = "https://api.cloudinary.com/v1_1"


class CloudinaryImageHost:
    """Uploads image bytes and returns their durable HTTPS URL."""

    def __init__(
        self,
        cloud_name: str | None,
        api_key: str | None,
        api_secret: str | None,
        folder: str = "my_uploads",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> "CloudinaryImageHost":
        return cls(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            folder=settings.cloudinary_folder,
            timeout=settings.relay_timeout,
            transport=transport,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    @property
    def upload_url(self) -> str:
        return f"{CLOUDINARY_API_BASE}/{self.cloud_name}/image/upload"

    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str | None = None,
    ) -> str:
        """
        Upload an image and return its ``secure_url``.

        Raises:
            UpstreamError: credentials are missing, or Cloudinary rejected
                the upload or was unreachable
        """
        if not self.is_configured:
            logger.warning("Upload attempted without Cloudinary credentials")
            raise UpstreamError("Image hosting not configured")

        params = {
            "folder": self.folder,
            "timestamp": str(int(time.time())),
        }
        data = {
            **params,
            "api_key": self.api_key,
            "signature": api_sign_request(params, self.api_secret),
        }
        files = {
            "file": (filename, content, content_type or "application/octet-stream"),
        }

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self.timeout
            ) as client:
                response = await client.post(self.upload_url, data=data, files=files)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Cloudinary upload failed with %s: %s",
                e.response.status_code,
                e.response.text[:200],
            )
            raise UpstreamError("Image upload failed") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Cloudinary upload error: %s", e)
            raise UpstreamError("Image upload failed") from e

        url = body.get("secure_url") if isinstance(body, dict) else None
        if not url:
            raise UpstreamError("Image host returned no URL")

        logger.info("Uploaded %s (%d bytes) to %s", filename, len(content), url)
        return url
