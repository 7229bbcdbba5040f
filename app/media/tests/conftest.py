"""
Test fixtures for media app.

Provides fixtures for:
- Sample files (JPEG, PNG, MP4, PDF) as uploaded files
- A mocked document store gateway with async methods
- A small gallery snapshot (two collections, mixed kinds)
"""

from __future__ import annotations

import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from media.gateways.store import DocumentStoreGateway
from media.tests.factories import CollectionFactory, MediaItemFactory


# =============================================================================
# Gateway Fixtures
# =============================================================================


@pytest.fixture
def store() -> MagicMock:
    """
    Document store gateway double.

    Every operation is an AsyncMock; reads return empty lists and writes
    succeed unless a test says otherwise.
    """
    gateway = MagicMock(spec=DocumentStoreGateway)
    gateway.list_media = AsyncMock(return_value=[])
    gateway.list_collections = AsyncMock(return_value=[])
    gateway.create_media_record = AsyncMock(return_value="media_new")
    gateway.create_collection = AsyncMock(return_value="col_new")
    gateway.update_media_collection_ref = AsyncMock(return_value=True)
    gateway.delete_media_record = AsyncMock(return_value=True)
    return gateway


# =============================================================================
# Snapshot Fixtures
# =============================================================================


@pytest.fixture
def collections():
    """Two collections: Holidays and Work."""
    return [
        CollectionFactory(id="col_holidays", name="Holidays"),
        CollectionFactory(id="col_work", name="Work"),
    ]


@pytest.fixture
def items():
    """
    Five items.

    Holidays: one image, one video. Work: one image.
    Uncategorized: one image, one video.
    """
    return [
        MediaItemFactory(id="m1", collection_id="col_holidays"),
        MediaItemFactory(id="m2", video=True, collection_id="col_holidays"),
        MediaItemFactory(id="m3", collection_id="col_work"),
        MediaItemFactory(id="m4"),
        MediaItemFactory(id="m5", video=True),
    ]


# =============================================================================
# Uploaded File Fixtures
# =============================================================================


@pytest.fixture
def sample_jpeg() -> io.BytesIO:
    """Generate a valid JPEG image file."""
    image = Image.new("RGB", (100, 100), color="red")
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG")
    buffer.seek(0)
    buffer.name = "test_image.jpg"
    return buffer


@pytest.fixture
def sample_jpeg_uploaded(sample_jpeg: io.BytesIO) -> SimpleUploadedFile:
    """Return JPEG as SimpleUploadedFile."""
    return SimpleUploadedFile(
        name="test_image.jpg",
        content=sample_jpeg.read(),
        content_type="image/jpeg",
    )


@pytest.fixture
def sample_png_uploaded() -> SimpleUploadedFile:
    """Return a PNG with transparency as SimpleUploadedFile."""
    image = Image.new("RGBA", (100, 100), color=(0, 0, 255, 128))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return SimpleUploadedFile(
        name="test_image.png",
        content=buffer.getvalue(),
        content_type="image/png",
    )


@pytest.fixture
def sample_mp4_uploaded() -> SimpleUploadedFile:
    """Return a minimal MP4 header as SimpleUploadedFile."""
    # ftyp box only; the media host is mocked so the payload is never decoded
    content = b"\x00\x00\x00\x18ftypmp42\x00\x00\x00\x00mp42isom"
    return SimpleUploadedFile(
        name="clip.mp4",
        content=content,
        content_type="video/mp4",
    )


@pytest.fixture
def sample_pdf_uploaded() -> SimpleUploadedFile:
    """Return a PDF, which neither upload tab accepts."""
    return SimpleUploadedFile(
        name="test_document.pdf",
        content=b"%PDF-1.4\n%%EOF",
        content_type="application/pdf",
    )
