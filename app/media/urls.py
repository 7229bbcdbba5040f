"""
URL configuration for media app.

API Documentation Groups (following [App Name] - [Group Name] pattern):

Media - Gallery:
    GET /gallery/                                 - Filtered gallery snapshot

Media - Upload:
    POST /upload/                                 - Upload files sequentially

Media - Files:
    DELETE /items/{media_id}/                     - Delete media record

Media - Collections:
    PATCH /items/{media_id}/collection/           - Move media to a collection
    GET /collections/                             - List collections with counts
    POST /collections/                            - Create collection

Media - Drag and Drop:
    POST /drag/start/                             - Start dragging an item
    POST /drag/drop/                              - Drop on a collection
    POST /drag/end/                               - End the drag
"""

from django.urls import path

from media.views import (
    CollectionListView,
    DragEndView,
    DragStartView,
    DropView,
    GalleryView,
    MediaCollectionView,
    MediaItemView,
    MediaUploadView,
)

app_name = "media"

urlpatterns = [
    # Gallery
    path("gallery/", GalleryView.as_view(), name="gallery"),
    # Upload
    path("upload/", MediaUploadView.as_view(), name="upload"),
    # Items
    path("items/<str:media_id>/", MediaItemView.as_view(), name="item"),
    path(
        "items/<str:media_id>/collection/",
        MediaCollectionView.as_view(),
        name="item-collection",
    ),
    # Collections
    path("collections/", CollectionListView.as_view(), name="collections"),
    # Drag and drop
    path("drag/start/", DragStartView.as_view(), name="drag-start"),
    path("drag/drop/", DropView.as_view(), name="drag-drop"),
    path("drag/end/", DragEndView.as_view(), name="drag-end"),
]
