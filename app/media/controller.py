"""
Gallery view controller.

One GalleryController backs one mounted gallery screen (all media, one
kind, or one collection). It owns the item/collection snapshot for its
lifetime, runs the fetch -> filter -> mutate cycle, and applies the
recover-locally-or-surface rule: the snapshot is only changed after the
matching remote call has succeeded.

Transient UI state (which item is previewed, which dialog is open, which
item is being dragged) lives in ScreenState. It is independent of fetch
state: a refresh never closes an open preview.

Usage:
    controller = GalleryController(owner_id=uid, gateway=gateway, screen=screen)
    await controller.load()
    visible = controller.view(kind=MediaKind.IMAGE, collection="uncategorized")
    await controller.move(media_id, "col_1")
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from core.exceptions import BaseApplicationError, NotFoundError, ValidationError
from media.association import (
    apply_delete,
    apply_move,
    collection_name,
    derive_counts,
    filter_items,
    find_item,
)
from media.dragdrop import DragCarrier
from media.exceptions import RemoteReadError
from media.gateways.store import DocumentStoreGateway
from media.types import Collection, KindCounts, MediaItem

if TYPE_CHECKING:
    from typing import Any

    from media.types import MediaKind

logger = logging.getLogger(__name__)


class FetchState(str, Enum):
    """Fetch lifecycle of a gallery screen."""

    LOADING = "loading"
    READY = "ready"
    ERRORED = "errored"


class Dialog(str, Enum):
    """Dialogs a gallery screen can have open."""

    PREVIEW = "preview"
    CREATE_COLLECTION = "create_collection"
    CONFIRM_DELETE = "confirm_delete"


# =============================================================================
# Screen State
# =============================================================================


@dataclass
class ScreenState:
    """
    Per-screen UI state kept across requests in the browser session.

    Attributes:
        selected_media_id: Item shown in the preview or targeted by a
            pending delete confirmation.
        open_dialog: The dialog currently open, if any.
        drag: Carrier for an in-progress drag.
    """

    SESSION_KEY = "gallery_screens"

    selected_media_id: str | None = None
    open_dialog: Dialog | None = None
    drag: DragCarrier = field(default_factory=DragCarrier)

    @classmethod
    def from_session(cls, session: Any, screen: str) -> ScreenState:
        raw = session.get(cls.SESSION_KEY, {}).get(screen) or {}
        dialog = raw.get("open_dialog")
        return cls(
            selected_media_id=raw.get("selected_media_id"),
            open_dialog=Dialog(dialog) if dialog else None,
            drag=DragCarrier(source_id=raw.get("drag_source_id")),
        )

    def save(self, session: Any, screen: str) -> None:
        screens = dict(session.get(self.SESSION_KEY, {}))
        screens[screen] = self.to_dict()
        session[self.SESSION_KEY] = screens

    def to_dict(self) -> dict[str, Any]:
        return {
            "selected_media_id": self.selected_media_id,
            "open_dialog": self.open_dialog.value if self.open_dialog else None,
            "drag_source_id": self.drag.source_id,
        }

    def open_preview(self, media_id: str) -> None:
        self.selected_media_id = media_id
        self.open_dialog = Dialog.PREVIEW

    def request_delete(self, media_id: str) -> None:
        self.selected_media_id = media_id
        self.open_dialog = Dialog.CONFIRM_DELETE

    def close_dialog(self) -> None:
        self.selected_media_id = None
        self.open_dialog = None

    def forget(self, media_id: str) -> None:
        """Close whatever dialog points at a media item that no longer exists."""
        if self.selected_media_id == media_id:
            self.close_dialog()


# =============================================================================
# Controller
# =============================================================================


class GalleryController:
    """
    Orchestrates one gallery screen over a document store gateway.

    Attributes:
        items: Current media snapshot (replaced, never mutated in place).
        collections: Current collection snapshot.
        state: FetchState of the last load.
        errors: Load failures keyed by "media" / "collections".
        screen: ScreenState for selection, dialogs, and dragging.
    """

    def __init__(
        self,
        owner_id: str,
        gateway: DocumentStoreGateway,
        screen: ScreenState | None = None,
    ):
        self.owner_id = owner_id
        self.gateway = gateway
        self.screen = screen or ScreenState()
        self.items: list[MediaItem] = []
        self.collections: list[Collection] = []
        self.state = FetchState.LOADING
        self.errors: dict[str, BaseApplicationError] = {}
        self.refresh_signal: int | None = None

    @classmethod
    def for_request(cls, request, screen: str) -> GalleryController:
        """Mount a controller for the signed-in identity and one screen's session state."""
        return cls(
            owner_id=request.user.uid,
            gateway=DocumentStoreGateway(id_token=request.user.id_token),
            screen=ScreenState.from_session(request.session, screen),
        )

    # =========================================================================
    # Fetch
    # =========================================================================

    async def load(self) -> FetchState:
        """
        Fetch media and collections together and merge the results.

        Both requests are awaited; one failing does not cancel the other and
        each failure is recorded on its own. A media failure errors the
        screen; a collections failure leaves the gallery usable without
        collection names.
        """
        self.state = FetchState.LOADING
        self.errors = {}

        media_result, collections_result = await asyncio.gather(
            self.gateway.list_media(self.owner_id),
            self.gateway.list_collections(self.owner_id),
            return_exceptions=True,
        )

        for key, result in (("media", media_result), ("collections", collections_result)):
            if isinstance(result, BaseApplicationError):
                logger.warning(f"Failed to load {key} for {self.owner_id}: {result}")
                self.errors[key] = result
            elif isinstance(result, BaseException):
                raise result

        if "collections" not in self.errors:
            self.collections = collections_result
        if "media" in self.errors:
            self.state = FetchState.ERRORED
        else:
            self.items = media_result
            self.state = FetchState.READY
        return self.state

    async def refresh(self, signal: int) -> bool:
        """
        Reload when the external refresh signal changed.

        Returns:
            True if a reload ran.
        """
        if signal == self.refresh_signal:
            return False
        self.refresh_signal = signal
        await self.load()
        return True

    def raise_for_state(self) -> None:
        """Re-raise the media load failure of an errored screen."""
        if self.state == FetchState.ERRORED:
            raise self.errors["media"]

    # =========================================================================
    # Derived views
    # =========================================================================

    def view(
        self,
        kind: MediaKind | str | None = None,
        collection: str | None = None,
    ) -> list[MediaItem]:
        """Items matching the collection filter, then the kind filter."""
        return filter_items(self.items, kind=kind, collection=collection)

    @property
    def counts(self) -> dict[str, KindCounts]:
        return derive_counts(self.items)

    @property
    def selected_item(self) -> MediaItem | None:
        if self.screen.selected_media_id is None:
            return None
        return find_item(self.items, self.screen.selected_media_id)

    def collection_name(self, collection_id: str | None) -> str:
        return collection_name(self.collections, collection_id)

    def _require_item(self, media_id: str) -> MediaItem:
        item = find_item(self.items, media_id)
        if item is None:
            raise NotFoundError(
                "Media not found",
                error_code="MEDIA_NOT_FOUND",
                details={"media_id": media_id},
            )
        return item

    # =========================================================================
    # Mutations
    # =========================================================================

    async def move(self, media_id: str, collection_id: str | None) -> MediaItem:
        """
        Move an item to a collection (or to uncategorized with None).

        Raises:
            NotFoundError: media_id is not in the snapshot.
            RemoteWriteError: The store rejected the update; the snapshot
                is left as it was.
        """
        self._require_item(media_id)
        await self.gateway.update_media_collection_ref(media_id, collection_id)
        self.items = apply_move(self.items, media_id, collection_id)
        logger.info(f"Moved {media_id} to {collection_id or 'uncategorized'}")
        return self._require_item(media_id)

    def start_drag(self, media_id: str) -> None:
        self._require_item(media_id)
        self.screen.drag.start(media_id)

    async def drop(self, collection_id: str | None) -> MediaItem:
        """
        Drop the dragged item on a collection target.

        Uses the same path as move(). The carrier is left for end_drag(),
        which clears it whether or not the drop succeeded.

        Raises:
            NotFoundError: Nothing is being dragged, or the item is gone.
        """
        pair = self.screen.drag.drop(collection_id)
        if pair is None:
            raise NotFoundError("No media is being dragged", error_code="NO_DRAG_SOURCE")
        media_id, target = pair
        return await self.move(media_id, target)

    def end_drag(self) -> None:
        self.screen.drag.end()

    async def delete(self, media_id: str) -> None:
        """
        Delete a media record and drop it from the snapshot.

        The hosted file is not deleted. A preview or confirmation dialog
        pointing at the item is closed.

        Raises:
            NotFoundError: media_id is not in the snapshot.
            RemoteWriteError: The store rejected the delete; nothing changes.
        """
        self._require_item(media_id)
        await self.gateway.delete_media_record(media_id)
        self.items = apply_delete(self.items, media_id)
        self.screen.forget(media_id)
        logger.info(f"Deleted media record {media_id}")

    async def create_collection(self, name: str) -> Collection:
        """
        Create a collection and reload the collection list.

        If the reload fails after a successful create, the new collection
        is added to the snapshot locally instead.

        Raises:
            ValidationError: Name is blank after trimming. No remote call is made.
            RemoteWriteError: The store rejected the create.
        """
        trimmed = (name or "").strip()
        if not trimmed:
            raise ValidationError(
                "Collection name cannot be empty",
                error_code="EMPTY_COLLECTION_NAME",
            )

        collection_id = await self.gateway.create_collection(self.owner_id, trimmed)

        try:
            self.collections = await self.gateway.list_collections(self.owner_id)
        except RemoteReadError as e:
            logger.warning(f"Collection {collection_id} created but reload failed: {e}")
            self.collections = [
                *self.collections,
                Collection(id=collection_id, owner_id=self.owner_id, name=trimmed),
            ]

        if self.screen.open_dialog == Dialog.CREATE_COLLECTION:
            self.screen.close_dialog()

        created = next((c for c in self.collections if c.id == collection_id), None)
        return created or Collection(id=collection_id, owner_id=self.owner_id, name=trimmed)
