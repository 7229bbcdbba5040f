"""
Gateways for the external services behind the media dashboard.

All document store and media host calls should go through these gateways to
ensure consistent error translation, logging, and schema validation.

Usage:
    from media.gateways import DocumentStoreGateway, MediaHostGateway
"""

from media.gateways.store import DocumentStoreGateway
from media.gateways.upload import MediaHostGateway, UploadedMedia, classify_kind

__all__ = [
    "DocumentStoreGateway",
    "MediaHostGateway",
    "UploadedMedia",
    "classify_kind",
]
