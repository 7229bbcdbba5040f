"""
Serializers for media records, gallery views, and upload requests.

Provides:
- MediaRecordSerializer: Schema boundary for media documents from the store
- CollectionRecordSerializer: Schema boundary for collection documents
- MediaItemSerializer: Read-only media item for API responses
- CollectionSerializer: Read-only collection with derived counts
- GalleryQuerySerializer: Kind/collection filter query parameters
- ScreenQuerySerializer: Screen key for mutation views
- MoveMediaSerializer: Collection reassignment request
- CreateCollectionSerializer: New collection request
- MediaUploadSerializer: Multi-file upload request
- DragStartSerializer / DropSerializer: Drag-and-drop requests
- DeleteMediaSerializer: Confirmed delete request
- ScreenStateSerializer: Per-screen dialog and drag state
- UploadBatchResultSerializer: Upload summary response
- serialize_gallery: Gallery snapshot for one screen
"""

from __future__ import annotations

from typing import Any

from drf_spectacular.utils import OpenApiExample, extend_schema_serializer
from rest_framework import serializers

from media.types import UNCATEGORIZED, Collection, MediaItem, MediaKind

KIND_CHOICES = [(kind.value, kind.value.title()) for kind in MediaKind]

# Screen whose UI state is used when a request does not name one
DEFAULT_SCREEN = "all"


# =============================================================================
# Store Record Schemas
# =============================================================================


class MediaRecordSerializer(serializers.Serializer):
    """
    Validate one decoded media document from the document store.

    Field names follow the stored document (userId, mediaUrl, ...).
    The gateway turns any validation failure into RemoteReadError.

    Usage:
        serializer = MediaRecordSerializer(data={"id": doc_id, **fields})
        if serializer.is_valid():
            item = serializer.to_item()
    """

    id = serializers.CharField()
    userId = serializers.CharField()
    mediaUrl = serializers.CharField()
    resourceType = serializers.ChoiceField(choices=KIND_CHOICES)
    collectionId = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, default=None
    )
    createdAt = serializers.DateTimeField(required=False, allow_null=True, default=None)

    def validate_collectionId(self, value: str | None) -> str | None:
        # Blank references were written by older clients for "no collection"
        return value or None

    def to_item(self) -> MediaItem:
        data = self.validated_data
        return MediaItem(
            id=data["id"],
            owner_id=data["userId"],
            url=data["mediaUrl"],
            kind=MediaKind(data["resourceType"]),
            collection_id=data.get("collectionId"),
            created_at=data.get("createdAt"),
        )


class CollectionRecordSerializer(serializers.Serializer):
    """Validate one decoded collection document from the document store."""

    id = serializers.CharField()
    userId = serializers.CharField()
    name = serializers.CharField()
    createdAt = serializers.DateTimeField(required=False, allow_null=True, default=None)

    def to_collection(self) -> Collection:
        data = self.validated_data
        return Collection(
            id=data["id"],
            owner_id=data["userId"],
            name=data["name"],
            created_at=data.get("createdAt"),
        )


# =============================================================================
# Response Serializers
# =============================================================================


@extend_schema_serializer(
    examples=[
        OpenApiExample(
            "Categorized video",
            value={
                "id": "Qx7bE2pLk9",
                "url": "https://res.cloudinary.com/demo/video/upload/v1/media_archive/clip.mp4",
                "kind": "video",
                "collection_id": "c0llecti0n",
                "collection_name": "Holidays",
                "created_at": "2024-01-15T10:30:00Z",
            },
            response_only=True,
        ),
    ]
)
class MediaItemSerializer(serializers.Serializer):
    """
    Read-only media item.

    Pass the loaded collections in context["collections"] to resolve
    collection_name.
    """

    id = serializers.CharField(read_only=True)
    url = serializers.CharField(read_only=True)
    kind = serializers.SerializerMethodField()
    collection_id = serializers.CharField(read_only=True, allow_null=True)
    collection_name = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField(read_only=True, allow_null=True)

    def get_kind(self, obj: MediaItem) -> str:
        return obj.kind.value

    def get_collection_name(self, obj: MediaItem) -> str:
        from media.association import collection_name

        return collection_name(self.context.get("collections", []), obj.collection_id)


class CollectionSerializer(serializers.Serializer):
    """
    Read-only collection with derived counts.

    Pass the derived counts mapping in context["counts"].
    """

    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True, allow_null=True)
    images = serializers.SerializerMethodField()
    videos = serializers.SerializerMethodField()

    def _counts(self, obj: Collection):
        return self.context.get("counts", {}).get(obj.id)

    def get_images(self, obj: Collection) -> int:
        counts = self._counts(obj)
        return counts.images if counts else 0

    def get_videos(self, obj: Collection) -> int:
        counts = self._counts(obj)
        return counts.videos if counts else 0


class ScreenStateSerializer(serializers.Serializer):
    """Per-screen UI state: preview/confirmation target, open dialog, drag source."""

    selected_media_id = serializers.CharField(allow_null=True)
    open_dialog = serializers.CharField(allow_null=True)
    drag_source_id = serializers.CharField(allow_null=True)


class UploadFailureSerializer(serializers.Serializer):
    filename = serializers.CharField()
    error = serializers.CharField()
    error_code = serializers.CharField()


class UploadBatchResultSerializer(serializers.Serializer):
    """Summary of a sequential multi-file upload."""

    created_ids = serializers.ListField(child=serializers.CharField())
    failures = UploadFailureSerializer(many=True)
    succeeded = serializers.IntegerField()
    failed = serializers.IntegerField()
    progress = serializers.FloatField()
    message = serializers.CharField()


# =============================================================================
# Request Serializers
# =============================================================================


class GalleryQuerySerializer(serializers.Serializer):
    """
    Query parameters for a gallery view.

    collection accepts a collection id or "uncategorized"; omit it for all.
    """

    kind = serializers.ChoiceField(choices=KIND_CHOICES, required=False, allow_null=True)
    collection = serializers.CharField(required=False, allow_null=True)
    refresh = serializers.IntegerField(required=False, default=0, min_value=0)
    screen = serializers.SlugField(required=False, default=DEFAULT_SCREEN, max_length=64)


class ScreenQuerySerializer(serializers.Serializer):
    """The ?screen= key naming whose UI state a mutation reads and updates."""

    screen = serializers.SlugField(required=False, default=DEFAULT_SCREEN, max_length=64)


class MoveMediaSerializer(serializers.Serializer):
    """Reassign a media item; null moves it back to uncategorized."""

    collection_id = serializers.CharField(allow_null=True)

    def validate_collection_id(self, value: str | None) -> str | None:
        if value == UNCATEGORIZED:
            return None
        return value


class CreateCollectionSerializer(serializers.Serializer):
    # Blank-after-trim is rejected again by the controller for non-HTTP callers
    name = serializers.CharField(max_length=200, trim_whitespace=True)


class DeleteMediaSerializer(serializers.Serializer):
    """Deletion needs an explicit confirmation, as in the dashboard's dialog."""

    confirm = serializers.BooleanField(default=False)

    def validate_confirm(self, value: bool) -> bool:
        if not value:
            raise serializers.ValidationError(
                "Are you sure you want to delete this media? This action cannot be undone."
            )
        return value


class MediaUploadSerializer(serializers.Serializer):
    """
    Multi-file upload request.

    Request:
        Content-Type: multipart/form-data
        - files (required, repeated): Files to upload
        - kind (optional): Upload tab, image or video (default image)
        - collection_id (optional): Collection for every file in the batch
    """

    files = serializers.ListField(
        child=serializers.FileField(),
        allow_empty=False,
        help_text="Files to upload, processed one at a time",
    )
    kind = serializers.ChoiceField(choices=KIND_CHOICES, default=MediaKind.IMAGE.value)
    collection_id = serializers.CharField(required=False, allow_null=True, default=None)

    def validate_collection_id(self, value: str | None) -> str | None:
        if value in ("", UNCATEGORIZED):
            return None
        return value

    def to_internal_kind(self) -> MediaKind:
        return MediaKind(self.validated_data["kind"])


class DragStartSerializer(serializers.Serializer):
    media_id = serializers.CharField()


class DropSerializer(serializers.Serializer):
    collection_id = serializers.CharField(allow_null=True)

    def validate_collection_id(self, value: str | None) -> str | None:
        if value == UNCATEGORIZED:
            return None
        return value


def serialize_gallery(
    items: list[MediaItem],
    collections: list[Collection],
    counts: dict[str, Any],
) -> dict[str, Any]:
    """Shape a gallery snapshot for an API response."""
    return {
        "items": MediaItemSerializer(
            items, many=True, context={"collections": collections}
        ).data,
        "collections": CollectionSerializer(
            collections, many=True, context={"counts": counts}
        ).data,
    }
