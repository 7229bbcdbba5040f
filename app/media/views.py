"""
API views for the media gallery, uploads, and collections.

Provides:
- GalleryView: Filtered gallery snapshot with derived counts
- MediaUploadView: Sequential multi-file upload
- MediaCollectionView: Move a media item to a collection
- MediaItemView: Delete a media record (after confirmation)
- CollectionListView: List and create collections
- DragStartView / DropView / DragEndView: Drag-and-drop moves

Every view mounts a GalleryController for the request's screen, so each
request reads a fresh snapshot. Per-screen UI state (selection, open dialog,
drag source) is read from and written back to the session.
"""

from __future__ import annotations

from asgiref.sync import async_to_sync
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import BaseApplicationError
from core.views import error_response
from media.controller import GalleryController
from media.gateways.store import DocumentStoreGateway
from media.serializers import (
    CollectionSerializer,
    CreateCollectionSerializer,
    DeleteMediaSerializer,
    DragStartSerializer,
    DropSerializer,
    GalleryQuerySerializer,
    MediaItemSerializer,
    MediaUploadSerializer,
    MoveMediaSerializer,
    ScreenQuerySerializer,
    ScreenStateSerializer,
    UploadBatchResultSerializer,
    serialize_gallery,
)
from media.services.upload import UploadService

SCREEN_PARAMETER = OpenApiParameter(
    name="screen",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.QUERY,
    description="Screen whose UI state the request reads and updates (default: all)",
    required=False,
)


def mount(request, screen: str) -> GalleryController:
    """Mount and load a controller; a failed media load is raised."""
    controller = GalleryController.for_request(request, screen)
    async_to_sync(controller.load)()
    controller.raise_for_state()
    return controller


def screen_key(request) -> str:
    """Validated ?screen= value; an invalid key is a 400."""
    query = ScreenQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    return query.validated_data["screen"]


def moved_response(controller: GalleryController, item) -> Response:
    name = controller.collection_name(item.collection_id)
    return Response(
        {
            "item": MediaItemSerializer(
                item, context={"collections": controller.collections}
            ).data,
            "message": f"Media moved to {name}",
        }
    )


class GalleryView(APIView):
    """
    Gallery snapshot for one screen.

    GET /api/v1/media/gallery/?kind=&collection=&refresh=&screen=
        kind: image or video (omit for both)
        collection: collection id or "uncategorized" (omit for all)

    Response:
        200 OK: Snapshot (state, errors, items, collections, screen)
        502 Bad Gateway: Media could not be loaded
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_gallery",
        summary="Get gallery snapshot",
        description=(
            "Load media and collections concurrently and return the items matching "
            "the collection filter, then the kind filter. Collection counts are "
            "derived from the full item list. A failed collections load is reported "
            "in errors but does not fail the request."
        ),
        parameters=[GalleryQuerySerializer],
        responses={
            200: OpenApiResponse(description="Gallery snapshot"),
            400: OpenApiResponse(description="Invalid filter"),
            502: OpenApiResponse(description="Document store read failed"),
        },
        tags=["Media - Gallery"],
    )
    def get(self, request):
        query = GalleryQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)
        params = query.validated_data

        controller = GalleryController.for_request(request, params["screen"])
        async_to_sync(controller.refresh)(params["refresh"])
        if "media" in controller.errors:
            return error_response(controller.errors["media"], request)

        items = controller.view(kind=params.get("kind"), collection=params.get("collection"))
        body = serialize_gallery(items, controller.collections, controller.counts)
        body.update(
            {
                "state": controller.state.value,
                "refresh": controller.refresh_signal,
                "errors": {key: exc.to_dict() for key, exc in controller.errors.items()},
                "total": len(controller.items),
                "screen": ScreenStateSerializer(controller.screen.to_dict()).data,
            }
        )
        selected = controller.selected_item
        if selected is not None:
            body["selected"] = MediaItemSerializer(
                selected, context={"collections": controller.collections}
            ).data
        return Response(body)


class MediaUploadView(APIView):
    """
    Upload several files, one after another.

    POST /api/v1/media/upload/
        Content-Type: multipart/form-data
        - files (required, repeated)
        - kind (optional): image or video, default image
        - collection_id (optional): target collection or "uncategorized"

    Response:
        201 Created: At least one file uploaded
        400 Bad Request: Invalid request, or every file had the wrong type
        502 Bad Gateway: No file could be uploaded or recorded
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        operation_id="upload_media_batch",
        summary="Upload media files",
        description=(
            "Upload files sequentially to the media host and record each one. "
            "Files whose type does not match the selected kind fail without being "
            "sent. A hosted file whose record cannot be created is left on the host."
        ),
        request=MediaUploadSerializer,
        responses={
            201: OpenApiResponse(
                response=UploadBatchResultSerializer,
                description="At least one file uploaded",
            ),
            400: OpenApiResponse(
                response=UploadBatchResultSerializer,
                description="Validation error or no file matched the selected kind",
            ),
            502: OpenApiResponse(
                response=UploadBatchResultSerializer,
                description="Every upload failed at the media host or document store",
            ),
        },
        tags=["Media - Upload"],
    )
    def post(self, request):
        upload_serializer = MediaUploadSerializer(data=request.data)
        if not upload_serializer.is_valid():
            return Response(upload_serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = upload_serializer.validated_data
        service = UploadService(store=DocumentStoreGateway(id_token=request.user.id_token))

        try:
            result = async_to_sync(service.upload_batch)(
                owner_id=request.user.uid,
                files=data["files"],
                kind=upload_serializer.to_internal_kind(),
                collection_id=data.get("collection_id"),
            )
        except BaseApplicationError as e:
            return error_response(e, request)

        if result.succeeded:
            status_code = status.HTTP_201_CREATED
        elif all(f.error_code == "KIND_MISMATCH" for f in result.failures):
            status_code = status.HTTP_400_BAD_REQUEST
        else:
            status_code = status.HTTP_502_BAD_GATEWAY

        return Response(UploadBatchResultSerializer(result).data, status=status_code)


class MediaCollectionView(APIView):
    """
    Move a media item to a collection.

    PATCH /api/v1/media/items/{media_id}/collection/
        {"collection_id": "col_1"}   move into a collection
        {"collection_id": null}      move back to uncategorized

    Response:
        200 OK: Updated item and confirmation message
        404 Not Found: Item not in the signed-in user's media
        502 Bad Gateway: Document store rejected the update
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser]

    @extend_schema(
        operation_id="move_media",
        summary="Move media to a collection",
        request=MoveMediaSerializer,
        parameters=[SCREEN_PARAMETER],
        responses={
            200: OpenApiResponse(description="Media moved"),
            400: OpenApiResponse(description="Validation error"),
            404: OpenApiResponse(description="Media not found"),
            502: OpenApiResponse(description="Document store rejected the update"),
        },
        tags=["Media - Collections"],
    )
    def patch(self, request, media_id):
        serializer = MoveMediaSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            controller = mount(request, screen_key(request))
            item = async_to_sync(controller.move)(
                media_id, serializer.validated_data["collection_id"]
            )
        except BaseApplicationError as e:
            return error_response(e, request)

        return moved_response(controller, item)


class MediaItemView(APIView):
    """
    Delete a media record.

    DELETE /api/v1/media/items/{media_id}/
        {"confirm": true}   (or ?confirm=true)

    The hosted file is not deleted. A preview of the item is closed.

    Response:
        204 No Content: Record deleted
        400 Bad Request: Deletion not confirmed
        404 Not Found: Item not in the signed-in user's media
        502 Bad Gateway: Document store rejected the delete
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser]

    @extend_schema(
        operation_id="delete_media",
        summary="Delete media",
        request=DeleteMediaSerializer,
        parameters=[SCREEN_PARAMETER],
        responses={
            204: OpenApiResponse(description="Media deleted"),
            400: OpenApiResponse(description="Deletion not confirmed"),
            404: OpenApiResponse(description="Media not found"),
            502: OpenApiResponse(description="Document store rejected the delete"),
        },
        tags=["Media - Files"],
    )
    def delete(self, request, media_id):
        serializer = DeleteMediaSerializer(data=request.data or request.query_params)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        screen = screen_key(request)
        try:
            controller = mount(request, screen)
            async_to_sync(controller.delete)(media_id)
        except BaseApplicationError as e:
            return error_response(e, request)

        controller.screen.save(request.session, screen)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CollectionListView(APIView):
    """
    List and create collections.

    GET /api/v1/media/collections/
        Collections with image/video counts.

    POST /api/v1/media/collections/
        {"name": "Holidays"}
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser]

    @extend_schema(
        operation_id="list_collections",
        summary="List collections",
        parameters=[SCREEN_PARAMETER],
        responses={
            200: CollectionSerializer(many=True),
            502: OpenApiResponse(description="Document store read failed"),
        },
        tags=["Media - Collections"],
    )
    def get(self, request):
        controller = GalleryController.for_request(request, screen_key(request))
        async_to_sync(controller.load)()
        # Counts need media; the list itself needs collections
        for key in ("collections", "media"):
            if key in controller.errors:
                return error_response(controller.errors[key], request)

        serializer = CollectionSerializer(
            controller.collections, many=True, context={"counts": controller.counts}
        )
        return Response(serializer.data)

    @extend_schema(
        operation_id="create_collection",
        summary="Create collection",
        request=CreateCollectionSerializer,
        parameters=[SCREEN_PARAMETER],
        responses={
            201: CollectionSerializer,
            400: OpenApiResponse(description="Blank name"),
            502: OpenApiResponse(description="Document store rejected the create"),
        },
        tags=["Media - Collections"],
    )
    def post(self, request):
        serializer = CreateCollectionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        screen = screen_key(request)
        controller = GalleryController.for_request(request, screen)
        try:
            collection = async_to_sync(controller.create_collection)(
                serializer.validated_data["name"]
            )
        except BaseApplicationError as e:
            return error_response(e, request)

        controller.screen.save(request.session, screen)
        return Response(CollectionSerializer(collection).data, status=status.HTTP_201_CREATED)


# =============================================================================
# Drag and Drop
# =============================================================================


class DragStartView(APIView):
    """
    POST /api/v1/media/drag/start/
        {"media_id": "abc"}
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser]

    @extend_schema(
        operation_id="drag_start",
        summary="Start dragging a media item",
        request=DragStartSerializer,
        parameters=[SCREEN_PARAMETER],
        responses={
            200: ScreenStateSerializer,
            404: OpenApiResponse(description="Media not found"),
        },
        tags=["Media - Drag and Drop"],
    )
    def post(self, request):
        serializer = DragStartSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        screen = screen_key(request)
        try:
            controller = mount(request, screen)
            controller.start_drag(serializer.validated_data["media_id"])
        except BaseApplicationError as e:
            return error_response(e, request)

        controller.screen.save(request.session, screen)
        return Response(ScreenStateSerializer(controller.screen.to_dict()).data)


class DropView(APIView):
    """
    POST /api/v1/media/drag/drop/
        {"collection_id": "col_1"}   (null or "uncategorized" for no collection)

    Moves the dragged item through the same path as MediaCollectionView.
    The drag source is kept until drag/end/.
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser]

    @extend_schema(
        operation_id="drag_drop",
        summary="Drop the dragged media on a collection",
        request=DropSerializer,
        parameters=[SCREEN_PARAMETER],
        responses={
            200: OpenApiResponse(description="Media moved"),
            404: OpenApiResponse(description="Nothing is being dragged"),
            502: OpenApiResponse(description="Document store rejected the update"),
        },
        tags=["Media - Drag and Drop"],
    )
    def post(self, request):
        serializer = DropSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            controller = mount(request, screen_key(request))
            item = async_to_sync(controller.drop)(serializer.validated_data["collection_id"])
        except BaseApplicationError as e:
            return error_response(e, request)

        return moved_response(controller, item)


class DragEndView(APIView):
    """
    POST /api/v1/media/drag/end/

    Clears the drag source whether or not a drop happened.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="drag_end",
        summary="End a drag",
        request=None,
        parameters=[SCREEN_PARAMETER],
        responses={200: ScreenStateSerializer},
        tags=["Media - Drag and Drop"],
    )
    def post(self, request):
        screen = screen_key(request)
        controller = GalleryController.for_request(request, screen)
        controller.end_drag()
        controller.screen.save(request.session, screen)
        return Response(ScreenStateSerializer(controller.screen.to_dict()).data)
