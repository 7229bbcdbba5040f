"""
Media host gateway for binary uploads.

Sends one file per request to Cloudinary's unsigned upload endpoint and
returns the hosted URL plus the coarse media kind. There is no chunking,
no resumption, and no check of the returned URL.

A file stays hosted once this call succeeds, even if the caller then fails
to persist its record. Such orphans are logged by the upload service and
never cleaned up.

Configuration (via settings):
- CLOUDINARY_CLOUD_NAME: Target cloud
- CLOUDINARY_UPLOAD_PRESET: Unsigned upload preset (the upload-policy token)
- CLOUDINARY_FOLDER: Destination folder (default media_archive)
- CLOUDINARY_API_URL: API root (default https://api.cloudinary.com/v1_1)

Usage:
    gateway = MediaHostGateway()
    uploaded = await gateway.upload(request.FILES["file"])
    uploaded.url, uploaded.kind
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx
from django.conf import settings

from core.exceptions import NetworkError
from core.http import AsyncHTTPGateway, response_error_message
from media.exceptions import UploadRejectedError
from media.types import MediaKind

if TYPE_CHECKING:
    from django.core.files.uploadedfile import UploadedFile


def classify_kind(content_type: str | None) -> MediaKind:
    """video/* is a video; anything else, including unknown types, is an image."""
    if content_type and content_type.lower().startswith("video/"):
        return MediaKind.VIDEO
    return MediaKind.IMAGE


@dataclass(frozen=True)
class UploadedMedia:
    """Result of a successful upload."""

    url: str
    kind: MediaKind


class MediaHostGateway(AsyncHTTPGateway):
    """Uploads files to the media host, one request per file."""

    service_name = "cloudinary"

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        cloud_name: str | None = None,
        upload_preset: str | None = None,
        folder: str | None = None,
        api_url: str | None = None,
    ):
        super().__init__(client=client)
        self._cloud_name = cloud_name or settings.CLOUDINARY_CLOUD_NAME
        self._upload_preset = upload_preset or settings.CLOUDINARY_UPLOAD_PRESET
        self._folder = folder if folder is not None else settings.CLOUDINARY_FOLDER
        self._api_url = (api_url or settings.CLOUDINARY_API_URL).rstrip("/")

    def upload_url(self, kind: MediaKind) -> str:
        return f"{self._api_url}/{self._cloud_name}/{kind.value}/upload"

    async def upload(self, file: UploadedFile) -> UploadedMedia:
        """
        Upload one file.

        Args:
            file: Django uploaded file; its declared content_type picks
                the media kind and destination endpoint.

        Returns:
            UploadedMedia with the hosted URL and kind.

        Raises:
            UploadRejectedError: The host answered with a non-success status
                or without a URL.
            NetworkError: The request produced no response.
        """
        content_type = getattr(file, "content_type", None)
        kind = classify_kind(content_type)
        filename = getattr(file, "name", None) or "upload"

        data = {"upload_preset": self._upload_preset}
        if self._folder:
            data["folder"] = self._folder

        file.seek(0)
        files = {"file": (filename, file.read(), content_type or "application/octet-stream")}

        try:
            response = await self._send(
                "POST",
                self.upload_url(kind),
                operation="upload",
                log_context={"upload_filename": filename, "kind": kind.value},
                data=data,
                files=files,
            )
        except httpx.TransportError as e:
            raise NetworkError(
                "Network error while uploading to the media host",
                details={"service": self.service_name, "original_error": str(e)},
            ) from e

        if not response.is_success:
            raise UploadRejectedError(
                response_error_message(response, "Upload failed"),
                details={"filename": filename, "status_code": response.status_code},
            )

        try:
            url = response.json().get("secure_url")
        except ValueError:
            url = None
        if not url:
            raise UploadRejectedError(
                "Upload failed: media host returned no URL",
                details={"filename": filename, "status_code": response.status_code},
            )

        return UploadedMedia(url=url, kind=kind)
