"""
Factory Boy factories for media records.

Provides realistic test data generation for:
- MediaItem: Uploaded image or video, optionally in a collection
- Collection: Named group of media items

Usage:
    from media.tests.factories import CollectionFactory, MediaItemFactory

    # Uncategorized image
    item = MediaItemFactory()

    # Video inside a collection
    holidays = CollectionFactory(name="Holidays")
    clip = MediaItemFactory(video=True, collection_id=holidays.id)
"""

import factory
from django.utils import timezone

from media.types import Collection, MediaItem, MediaKind


class CollectionFactory(factory.Factory):
    """
    Factory for Collection records.

    Examples:
        collection = CollectionFactory()
        collection = CollectionFactory(name="Holidays", owner_id="uid_bob")
    """

    class Meta:
        model = Collection

    id = factory.Sequence(lambda n: f"col_{n}")
    owner_id = "uid_alice"
    name = factory.Sequence(lambda n: f"Collection {n}")
    created_at = factory.LazyFunction(timezone.now)


class MediaItemFactory(factory.Factory):
    """
    Factory for MediaItem records.

    Items are uncategorized images unless told otherwise.

    Examples:
        item = MediaItemFactory()
        clip = MediaItemFactory(video=True)
        filed = MediaItemFactory(collection_id="col_1")
    """

    class Meta:
        model = MediaItem

    class Params:
        video = factory.Trait(
            kind=MediaKind.VIDEO,
            url=factory.Sequence(
                lambda n: f"https://res.cloudinary.com/demo/video/upload/v1/media_archive/clip_{n}.mp4"
            ),
        )

    id = factory.Sequence(lambda n: f"media_{n}")
    owner_id = "uid_alice"
    url = factory.Sequence(
        lambda n: f"https://res.cloudinary.com/demo/image/upload/v1/media_archive/img_{n}.jpg"
    )
    kind = MediaKind.IMAGE
    collection_id = None
    created_at = None
