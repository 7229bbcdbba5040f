"""
Collection/media association rules.

Pure, synchronous functions over an in-memory snapshot. Nothing here talks
to the network: callers run the remote operation first and only then mirror
it locally with apply_move / apply_delete, so a failed remote call never
leaves the snapshot changed.

Every item belongs to at most one collection. Per-collection counts are
always derived from the full item list and never stored.

Usage:
    from media.association import derive_counts, filter_items

    visible = filter_items(items, kind=MediaKind.IMAGE, collection="uncategorized")
    counts = derive_counts(items)
    counts["col_1"].images
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from media.types import UNCATEGORIZED, Collection, KindCounts, MediaItem, MediaKind

UNCATEGORIZED_NAME = "Uncategorized"
UNKNOWN_COLLECTION_NAME = "Unknown Collection"


def filter_by_kind(
    items: Iterable[MediaItem], kind: MediaKind | str | None
) -> list[MediaItem]:
    """Keep items of the given kind; None keeps everything."""
    if kind is None:
        return list(items)
    kind = MediaKind(kind)
    return [item for item in items if item.kind == kind]


def filter_by_collection(
    items: Iterable[MediaItem], collection: str | None
) -> list[MediaItem]:
    """
    Keep items matching a collection filter.

    Args:
        items: Snapshot to filter.
        collection: None selects all items, "uncategorized" selects items
            without a collection reference, any other value selects the
            items referencing exactly that collection id.
    """
    if collection is None:
        return list(items)
    if collection == UNCATEGORIZED:
        return [item for item in items if item.collection_id is None]
    return [item for item in items if item.collection_id == collection]


def filter_items(
    items: Iterable[MediaItem],
    kind: MediaKind | str | None = None,
    collection: str | None = None,
) -> list[MediaItem]:
    """Apply the collection filter, then the kind filter."""
    return filter_by_kind(filter_by_collection(items, collection), kind)


def derive_counts(items: Iterable[MediaItem]) -> dict[str, KindCounts]:
    """
    Count images and videos per collection in a single pass.

    Uncategorized items are not counted. Collections with no items do not
    appear in the result.
    """
    counts: dict[str, KindCounts] = {}
    for item in items:
        if item.collection_id is None:
            continue
        counts.setdefault(item.collection_id, KindCounts()).add(item.kind)
    return counts


def apply_move(
    items: Sequence[MediaItem], media_id: str, collection_id: str | None
) -> list[MediaItem]:
    """
    Return a new snapshot with one item's collection reference replaced.

    Must run only after the remote update succeeded. Items other than
    media_id are carried over unchanged; an unknown id yields an equal copy.
    """
    return [
        item.with_collection(collection_id) if item.id == media_id else item
        for item in items
    ]


def apply_delete(items: Sequence[MediaItem], media_id: str) -> list[MediaItem]:
    """Return a new snapshot without media_id. Mirrors a successful remote delete."""
    return [item for item in items if item.id != media_id]


def find_item(items: Iterable[MediaItem], media_id: str) -> MediaItem | None:
    return next((item for item in items if item.id == media_id), None)


def collection_name(
    collections: Iterable[Collection], collection_id: str | None
) -> str:
    """Display name for a collection reference, including the null and dangling cases."""
    if collection_id is None:
        return UNCATEGORIZED_NAME
    for collection in collections:
        if collection.id == collection_id:
            return collection.name
    return UNKNOWN_COLLECTION_NAME
