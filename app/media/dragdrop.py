"""
Drag-and-drop carrier for collection moves.

Dragging is only a second input channel for the move operation: drag-start
records which item is being dragged, a drop on a collection target yields
the (media_id, target) pair that the gallery feeds into the same move path
as the context-menu action, and drag-end always clears the carrier.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class DragCarrier:
    """Ephemeral holder for the id of the item being dragged."""

    source_id: str | None = None

    @property
    def is_dragging(self) -> bool:
        return self.source_id is not None

    def start(self, media_id: str) -> None:
        if self.source_id and self.source_id != media_id:
            logger.debug(f"Drag of {self.source_id} replaced by {media_id}")
        self.source_id = media_id

    def drop(self, target_collection_id: str | None) -> tuple[str, str | None] | None:
        """
        Read the dragged id for a drop on target_collection_id.

        Returns None when nothing is being dragged. The carrier is not
        cleared here; end() does that whether or not the drop succeeded.
        """
        if self.source_id is None:
            return None
        return self.source_id, target_collection_id

    def end(self) -> None:
        self.source_id = None
