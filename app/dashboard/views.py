"""
Dashboard shell views.

Provides:
- DashboardView: Shell context plus the active tab's gallery
- SidebarView: Collapse, expand, or toggle the sidebar
- SelectionView: Read or change the active tab's dialog state

All views require a signed-in identity; anonymous requests get 401.
"""

from __future__ import annotations

from asgiref.sync import async_to_sync
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import SessionExpiredError
from core.views import error_response
from dashboard.context import ShellContext, resolve_tab
from dashboard.serializers import (
    DashboardQuerySerializer,
    SelectionSerializer,
    SidebarSerializer,
)
from media.controller import Dialog, FetchState, GalleryController, ScreenState
from media.serializers import MediaItemSerializer, ScreenStateSerializer, serialize_gallery
from media.types import UNCATEGORIZED


class DashboardView(APIView):
    """
    Dashboard screen for one tab.

    GET /api/v1/dashboard/?tab=all|images|videos|collections&collection=

    Response:
        200 OK: Shell context and gallery. A failed media load is reported
        as gallery.state "errored" with the error in gallery.errors.
        401 Unauthorized: Not signed in, or the identity's token expired
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_dashboard",
        summary="Get dashboard screen",
        description=(
            "Return the shell context (user, active tab and title, sidebar state) "
            "and the active tab's gallery: all items, images only, videos only, or "
            "the collection list with derived counts."
        ),
        parameters=[DashboardQuerySerializer],
        responses={200: OpenApiResponse(description="Dashboard screen")},
        tags=["Dashboard"],
    )
    def get(self, request):
        query = DashboardQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        shell = ShellContext.from_request(request, params["tab"])
        controller = GalleryController.for_request(request, shell.tab.key)
        async_to_sync(controller.load)()
        for exc in controller.errors.values():
            if isinstance(exc, SessionExpiredError):
                return error_response(exc, request)

        collection = params.get("collection") if shell.tab.key == "collections" else None
        if shell.tab.key == "collections" and collection is None:
            items = []
        else:
            items = controller.view(kind=shell.tab.kind, collection=collection)

        gallery = serialize_gallery(items, controller.collections, controller.counts)
        gallery.update(
            {
                "state": controller.state.value,
                "errors": {key: exc.to_dict() for key, exc in controller.errors.items()},
                "collection": collection,
                "collection_name": (
                    controller.collection_name(collection)
                    if collection and collection != UNCATEGORIZED
                    else None
                ),
            }
        )
        if controller.state == FetchState.READY:
            gallery["total"] = len(controller.items)

        body = shell.to_dict()
        body["gallery"] = gallery
        body["screen"] = ScreenStateSerializer(controller.screen.to_dict()).data
        selected = controller.selected_item
        if selected is not None:
            body["selected"] = MediaItemSerializer(
                selected, context={"collections": controller.collections}
            ).data
        return Response(body)


class SidebarView(APIView):
    """
    POST /api/v1/dashboard/sidebar/
        {"collapsed": true}   collapse
        {"collapsed": false}  expand
        {}                    toggle
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser]

    @extend_schema(
        operation_id="set_sidebar",
        summary="Collapse or expand the sidebar",
        request=SidebarSerializer,
        responses={200: OpenApiResponse(description="Sidebar state")},
        tags=["Dashboard"],
    )
    def post(self, request):
        serializer = SidebarSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        shell = ShellContext.from_request(request)
        collapsed = shell.set_sidebar(request.session, serializer.validated_data["collapsed"])
        return Response({"collapsed": collapsed})


class SelectionView(APIView):
    """
    Dialog state of a tab's screen.

    GET /api/v1/dashboard/selection/?tab=
    POST /api/v1/dashboard/selection/
        {"tab": "all", "action": "preview", "media_id": "abc"}
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser]

    @extend_schema(
        operation_id="get_selection",
        summary="Get a tab's dialog state",
        parameters=[
            OpenApiParameter(
                name="tab",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
            )
        ],
        responses={200: ScreenStateSerializer},
        tags=["Dashboard"],
    )
    def get(self, request):
        tab = resolve_tab(request.query_params.get("tab"))
        screen = ScreenState.from_session(request.session, tab.key)
        return Response(ScreenStateSerializer(screen.to_dict()).data)

    @extend_schema(
        operation_id="set_selection",
        summary="Open or close a dialog",
        request=SelectionSerializer,
        responses={
            200: ScreenStateSerializer,
            400: OpenApiResponse(description="Validation error"),
        },
        tags=["Dashboard"],
    )
    def post(self, request):
        serializer = SelectionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data

        tab = resolve_tab(data["tab"])
        screen = ScreenState.from_session(request.session, tab.key)

        action = data["action"]
        if action == Dialog.PREVIEW.value:
            screen.open_preview(data["media_id"])
        elif action == Dialog.CONFIRM_DELETE.value:
            screen.request_delete(data["media_id"])
        elif action == Dialog.CREATE_COLLECTION.value:
            screen.selected_media_id = None
            screen.open_dialog = Dialog.CREATE_COLLECTION
        else:
            screen.close_dialog()

        screen.save(request.session, tab.key)
        return Response(ScreenStateSerializer(screen.to_dict()).data)
