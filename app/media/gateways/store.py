"""
Document store gateway for media and collection records.

Talks to the Cloud Firestore REST API. The store holds two logical
collections, each keyed by the owner's identity:

    media/{id}        userId, mediaUrl, resourceType, collectionId, createdAt
    collections/{id}  userId, name, createdAt

Every operation is a single request/response pair: no retry, no
idempotency key, no caching. Writes are atomic per record only; there is
no cross-record transaction, so callers re-derive counts from a full item
list instead of keeping them in sync.

A 401 from the store means the ID token has expired and is raised as
SessionExpiredError for every operation.

Records coming back from the store are validated by the DRF serializers in
media.serializers. A malformed record fails the whole read with
RemoteReadError rather than leaking missing fields into the gallery.

Configuration (via settings):
- FIREBASE_PROJECT_ID: Project owning the (default) database
- FIRESTORE_BASE_URL: API root (default https://firestore.googleapis.com/v1)

Usage:
    gateway = DocumentStoreGateway(id_token=identity.id_token)

    media_id = await gateway.create_media_record(uid, url, MediaKind.VIDEO)
    items = await gateway.list_media(uid)
    await gateway.update_media_collection_ref(media_id, "col_1")
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import httpx
from django.conf import settings

from core.exceptions import SessionExpiredError
from core.http import AsyncHTTPGateway, response_error_message
from media.exceptions import RemoteReadError, RemoteWriteError
from media.serializers import CollectionRecordSerializer, MediaRecordSerializer
from media.types import Collection, MediaItem, MediaKind

if TYPE_CHECKING:
    from typing import Any

MEDIA_COLLECTION = "media"
COLLECTIONS_COLLECTION = "collections"


# =============================================================================
# Firestore Value Encoding
# =============================================================================


def encode_value(value: Any) -> dict[str, Any]:
    """Wrap a Python value in a Firestore typed value."""
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": value.isoformat()}
    if isinstance(value, MediaKind):
        return {"stringValue": value.value}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    return {"stringValue": str(value)}


def encode_fields(data: dict[str, Any]) -> dict[str, Any]:
    return {key: encode_value(value) for key, value in data.items()}


def decode_value(value: dict[str, Any]) -> Any:
    """Unwrap a Firestore typed value. Timestamps stay RFC 3339 strings."""
    if not isinstance(value, dict) or "nullValue" in value:
        return None
    if "stringValue" in value:
        return value["stringValue"]
    if "booleanValue" in value:
        return value["booleanValue"]
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "timestampValue" in value:
        return value["timestampValue"]
    if "referenceValue" in value:
        return value["referenceValue"]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values", [])]
    return None


def decode_fields(fields: dict[str, Any]) -> dict[str, Any]:
    return {key: decode_value(value) for key, value in fields.items()}


def decode_document(document: dict[str, Any]) -> dict[str, Any]:
    """
    Flatten a Firestore document into {"id": ..., **fields}.

    createdAt falls back to the server-assigned createTime for documents
    written without an explicit timestamp.
    """
    fields = document.get("fields")
    data = decode_fields(fields) if isinstance(fields, dict) else {}
    data["id"] = str(document.get("name") or "").rsplit("/", 1)[-1]
    if data.get("createdAt") is None and document.get("createTime"):
        data["createdAt"] = document["createTime"]
    return data


# =============================================================================
# Gateway
# =============================================================================


class DocumentStoreGateway(AsyncHTTPGateway):
    """
    Stateless transport for media and collection records.

    Requests are authorised with the signed-in user's ID token so the
    store's own access rules scope every read and write to that user.
    """

    service_name = "firestore"

    def __init__(
        self,
        id_token: str | None = None,
        client: httpx.AsyncClient | None = None,
        project_id: str | None = None,
        base_url: str | None = None,
    ):
        super().__init__(client=client)
        self._id_token = id_token
        project = project_id or settings.FIREBASE_PROJECT_ID
        root = (base_url or settings.FIRESTORE_BASE_URL).rstrip("/")
        self._documents_url = f"{root}/projects/{project}/databases/(default)/documents"

    def default_headers(self) -> dict[str, str]:
        if self._id_token:
            return {"Authorization": f"Bearer {self._id_token}"}
        return {}

    def _document_url(self, collection: str, document_id: str) -> str:
        return f"{self._documents_url}/{collection}/{document_id}"

    # =========================================================================
    # Internal helpers
    # =========================================================================

    @staticmethod
    def _raise_for_expired_token(response: httpx.Response, operation: str) -> None:
        # 401 means the ID token expired; rule denials answer 403
        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise SessionExpiredError(
                "Your session has expired. Please sign in again",
                details={"operation": operation},
            )

    async def _write(
        self,
        method: str,
        url: str,
        operation: str,
        log_context: dict[str, Any],
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = await self._send(
                method, url, operation=operation, log_context=log_context, **kwargs
            )
        except httpx.TransportError as e:
            raise RemoteWriteError(
                "Network error while writing to the document store",
                details={"operation": operation, "original_error": str(e)},
            ) from e

        self._raise_for_expired_token(response, operation)
        if not response.is_success:
            raise RemoteWriteError(
                response_error_message(
                    response, f"Document store rejected {operation} (HTTP {response.status_code})"
                ),
                details={"operation": operation, "status_code": response.status_code},
            )
        return response

    @staticmethod
    def _created_id(response: httpx.Response, operation: str) -> str:
        """Id of the document a successful create returned."""
        try:
            document = response.json()
        except ValueError as e:
            raise RemoteWriteError(
                "Document store returned an unreadable response",
                details={"operation": operation, "status_code": response.status_code},
            ) from e

        document_id = (
            decode_document(document)["id"] if isinstance(document, dict) else None
        )
        if not document_id:
            raise RemoteWriteError(
                "Document store response did not name the new record",
                details={"operation": operation, "status_code": response.status_code},
            )
        return document_id

    async def _run_owner_query(self, collection: str, owner_id: str) -> list[dict[str, Any]]:
        operation = f"list_{collection}"
        query = {
            "structuredQuery": {
                "from": [{"collectionId": collection}],
                "where": {
                    "fieldFilter": {
                        "field": {"fieldPath": "userId"},
                        "op": "EQUAL",
                        "value": encode_value(owner_id),
                    }
                },
            }
        }

        try:
            response = await self._send(
                "POST",
                f"{self._documents_url}:runQuery",
                operation=operation,
                log_context={"owner_id": owner_id},
                json=query,
            )
        except httpx.TransportError as e:
            raise RemoteReadError(
                "Network error while reading from the document store",
                details={"operation": operation, "original_error": str(e)},
            ) from e

        self._raise_for_expired_token(response, operation)
        if not response.is_success:
            raise RemoteReadError(
                response_error_message(
                    response, f"Failed to load {collection} (HTTP {response.status_code})"
                ),
                details={"operation": operation, "status_code": response.status_code},
            )

        try:
            rows = response.json()
        except ValueError as e:
            raise RemoteReadError(
                f"Document store returned an unreadable {collection} listing",
                details={"operation": operation},
            ) from e

        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            raise RemoteReadError(
                f"Document store returned an unexpected {collection} listing",
                details={"operation": operation},
            )

        # Rows without "document" only carry readTime (e.g. an empty result)
        documents = [row["document"] for row in rows if row.get("document")]
        if not all(isinstance(document, dict) for document in documents):
            raise RemoteReadError(
                f"Document store returned an unexpected {collection} listing",
                details={"operation": operation},
            )
        return [decode_document(document) for document in documents]

    # =========================================================================
    # Media records
    # =========================================================================

    async def create_media_record(
        self,
        owner_id: str,
        url: str,
        kind: MediaKind,
        collection_id: str | None = None,
    ) -> str:
        """
        Persist a media record for an uploaded file.

        The record is not guaranteed to show up in list_media before this
        call returns.

        Returns:
            The id assigned by the store.

        Raises:
            RemoteWriteError: The store rejected the write or was unreachable.
        """
        fields = encode_fields(
            {
                "userId": owner_id,
                "mediaUrl": url,
                "resourceType": MediaKind(kind),
                "collectionId": collection_id,
            }
        )
        response = await self._write(
            "POST",
            f"{self._documents_url}/{MEDIA_COLLECTION}",
            "create_media_record",
            {"owner_id": owner_id, "kind": MediaKind(kind).value},
            json={"fields": fields},
        )
        return self._created_id(response, "create_media_record")

    async def list_media(self, owner_id: str) -> list[MediaItem]:
        """
        List every media record owned by owner_id, in the store's natural order.

        Raises:
            RemoteReadError: The read failed or a record was malformed.
        """
        items = []
        for record in await self._run_owner_query(MEDIA_COLLECTION, owner_id):
            serializer = MediaRecordSerializer(data=record)
            if not serializer.is_valid():
                raise RemoteReadError(
                    "Document store returned a malformed media record",
                    details={"id": record.get("id"), "errors": serializer.errors},
                )
            items.append(serializer.to_item())
        return items

    async def update_media_collection_ref(
        self, media_id: str, collection_id: str | None
    ) -> bool:
        """
        Point a media record at a collection, or at none.

        Only the collectionId field is written, and only if the record still
        exists. There is no version check: concurrent writers race and the
        last write wins.

        Raises:
            RemoteWriteError: The store rejected the write or was unreachable.
        """
        await self._write(
            "PATCH",
            self._document_url(MEDIA_COLLECTION, media_id),
            "update_media_collection_ref",
            {"media_id": media_id, "collection_id": collection_id},
            params=[
                ("updateMask.fieldPaths", "collectionId"),
                ("currentDocument.exists", "true"),
            ],
            json={"fields": encode_fields({"collectionId": collection_id})},
        )
        return True

    async def delete_media_record(self, media_id: str) -> bool:
        """
        Delete a media record.

        The hosted file behind the record is left in place. Ownership is
        enforced by the store's access rules, not checked here.

        Raises:
            RemoteWriteError: The store rejected the delete or was unreachable.
        """
        await self._write(
            "DELETE",
            self._document_url(MEDIA_COLLECTION, media_id),
            "delete_media_record",
            {"media_id": media_id},
        )
        return True

    # =========================================================================
    # Collections
    # =========================================================================

    async def create_collection(self, owner_id: str, name: str) -> str:
        """
        Create a collection. Names are not checked for uniqueness.

        Raises:
            RemoteWriteError: The store rejected the write or was unreachable.
        """
        response = await self._write(
            "POST",
            f"{self._documents_url}/{COLLECTIONS_COLLECTION}",
            "create_collection",
            {"owner_id": owner_id},
            json={"fields": encode_fields({"userId": owner_id, "name": name})},
        )
        return self._created_id(response, "create_collection")

    async def list_collections(self, owner_id: str) -> list[Collection]:
        """
        List every collection owned by owner_id.

        Raises:
            RemoteReadError: The read failed or a record was malformed.
        """
        collections = []
        for record in await self._run_owner_query(COLLECTIONS_COLLECTION, owner_id):
            serializer = CollectionRecordSerializer(data=record)
            if not serializer.is_valid():
                raise RemoteReadError(
                    "Document store returned a malformed collection record",
                    details={"id": record.get("id"), "errors": serializer.errors},
                )
            collections.append(serializer.to_collection())
        return collections
