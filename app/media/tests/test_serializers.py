"""
Tests for media serializers.

Covers the store record schemas, response shaping, and request validation.
"""

from __future__ import annotations

from media.association import derive_counts
from media.serializers import (
    CollectionRecordSerializer,
    CollectionSerializer,
    CreateCollectionSerializer,
    DeleteMediaSerializer,
    DropSerializer,
    GalleryQuerySerializer,
    MediaItemSerializer,
    MediaRecordSerializer,
    MoveMediaSerializer,
)
from media.types import MediaKind


class TestMediaRecordSerializer:
    """Tests for the media document schema."""

    def test_valid_record(self):
        serializer = MediaRecordSerializer(
            data={
                "id": "m1",
                "userId": "uid_alice",
                "mediaUrl": "https://cdn.test/m1.mp4",
                "resourceType": "video",
                "collectionId": "col_1",
                "createdAt": "2024-01-15T10:30:00Z",
            }
        )

        assert serializer.is_valid(), serializer.errors
        item = serializer.to_item()
        assert item.kind == MediaKind.VIDEO
        assert item.collection_id == "col_1"
        assert item.created_at.year == 2024

    def test_optional_fields(self):
        serializer = MediaRecordSerializer(
            data={
                "id": "m1",
                "userId": "uid_alice",
                "mediaUrl": "https://cdn.test/m1.jpg",
                "resourceType": "image",
            }
        )

        assert serializer.is_valid(), serializer.errors
        item = serializer.to_item()
        assert item.collection_id is None
        assert item.created_at is None

    def test_missing_url_is_invalid(self):
        serializer = MediaRecordSerializer(
            data={"id": "m1", "userId": "uid_alice", "resourceType": "image"}
        )

        assert not serializer.is_valid()
        assert "mediaUrl" in serializer.errors


class TestCollectionRecordSerializer:
    def test_missing_name_is_invalid(self):
        serializer = CollectionRecordSerializer(data={"id": "c1", "userId": "uid_alice"})

        assert not serializer.is_valid()
        assert "name" in serializer.errors


class TestResponseSerializers:
    """Tests for item/collection output."""

    def test_item_resolves_collection_name(self, items, collections):
        data = MediaItemSerializer(items[0], context={"collections": collections}).data

        assert data["kind"] == "image"
        assert data["collection_name"] == "Holidays"

    def test_item_without_context_is_unknown(self, items):
        data = MediaItemSerializer(items[0]).data

        assert data["collection_name"] == "Unknown Collection"

    def test_collection_counts(self, items, collections):
        data = CollectionSerializer(
            collections, many=True, context={"counts": derive_counts(items)}
        ).data

        assert [(c["images"], c["videos"]) for c in data] == [(1, 1), (1, 0)]

    def test_empty_collection_counts_zero(self, collections):
        data = CollectionSerializer(collections[0], context={"counts": {}}).data

        assert (data["images"], data["videos"]) == (0, 0)


class TestRequestSerializers:
    """Tests for request validation."""

    def test_gallery_query_defaults(self):
        serializer = GalleryQuerySerializer(data={})

        assert serializer.is_valid()
        assert serializer.validated_data["refresh"] == 0
        assert serializer.validated_data["screen"] == "all"

    def test_move_uncategorized_is_null(self):
        serializer = MoveMediaSerializer(data={"collection_id": "uncategorized"})

        assert serializer.is_valid()
        assert serializer.validated_data["collection_id"] is None

    def test_move_requires_key(self):
        assert not MoveMediaSerializer(data={}).is_valid()

    def test_drop_accepts_null(self):
        serializer = DropSerializer(data={"collection_id": None})

        assert serializer.is_valid()
        assert serializer.validated_data["collection_id"] is None

    def test_collection_name_is_trimmed(self):
        serializer = CreateCollectionSerializer(data={"name": "  Trip "})

        assert serializer.is_valid()
        assert serializer.validated_data["name"] == "Trip"

    def test_blank_collection_name(self):
        assert not CreateCollectionSerializer(data={"name": "   "}).is_valid()

    def test_delete_needs_confirmation(self):
        serializer = DeleteMediaSerializer(data={})

        assert not serializer.is_valid()
        assert "cannot be undone" in str(serializer.errors["confirm"][0])

    def test_delete_confirmed(self):
        assert DeleteMediaSerializer(data={"confirm": True}).is_valid()
