"""
Domain records for media items and collections.

These are plain frozen dataclasses: the dashboard keeps no local database,
so records are built from document store payloads (after schema validation
in media.serializers) and live only inside a gallery snapshot.

Usage:
    from media.types import MediaItem, MediaKind

    item = MediaItem(
        id="AbC123",
        owner_id="uid_1",
        url="https://res.cloudinary.com/demo/image/upload/v1/cat.jpg",
        kind=MediaKind.IMAGE,
    )
    moved = item.with_collection("col_1")
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

# Collection filter value selecting items with no collection reference
UNCATEGORIZED = "uncategorized"


class MediaKind(str, Enum):
    """Coarse media kind, fixed at creation from the uploaded MIME type."""

    IMAGE = "image"
    VIDEO = "video"


@dataclass(frozen=True)
class MediaItem:
    """
    One uploaded image or video.

    Attributes:
        id: Opaque identifier assigned by the document store.
        owner_id: Identity (uid) of the uploading user.
        url: Public URL returned by the media host.
        kind: Image or video.
        collection_id: Owning collection, or None when uncategorized.
        created_at: Server-assigned creation time (display ordering only).
    """

    id: str
    owner_id: str
    url: str
    kind: MediaKind
    collection_id: str | None = None
    created_at: datetime | None = None

    @property
    def is_categorized(self) -> bool:
        return self.collection_id is not None

    def with_collection(self, collection_id: str | None) -> MediaItem:
        """Return a copy with the collection reference replaced."""
        return replace(self, collection_id=collection_id)


@dataclass(frozen=True)
class Collection:
    """A named group of media items. Never renamed, never deleted."""

    id: str
    owner_id: str
    name: str
    created_at: datetime | None = None


@dataclass
class KindCounts:
    """Per-collection image/video tally derived from a snapshot."""

    images: int = 0
    videos: int = 0

    @property
    def total(self) -> int:
        return self.images + self.videos

    def add(self, kind: MediaKind) -> None:
        if kind == MediaKind.VIDEO:
            self.videos += 1
        else:
            self.images += 1
