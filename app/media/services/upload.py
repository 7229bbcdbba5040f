"""
Sequential multi-file upload.

Each file goes through the media host first and then gets a record in the
document store. The next file starts only after the previous one has
finished, and progress is reported after every file whether it succeeded
or not.

A file whose declared type does not match the selected upload tab is
counted as a failure without any network call. A file that was hosted but
could not be recorded is an orphan: it stays on the media host, is logged,
and is counted as a failure.

Usage:
    from media.services.upload import UploadService

    service = UploadService(store=DocumentStoreGateway(id_token=token))
    result = await service.upload_batch(
        owner_id=uid,
        files=request.FILES.getlist("files"),
        kind=MediaKind.VIDEO,
        collection_id="col_1",
        on_progress=lambda fraction: ...,
    )
    result.message  # "Successfully uploaded 2 files (1 failed)"
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from core.exceptions import ExternalServiceError, SessionExpiredError, ValidationError
from core.services import BaseService
from media.exceptions import RemoteWriteError
from media.gateways.upload import MediaHostGateway
from media.types import MediaKind

if TYPE_CHECKING:
    from django.core.files.uploadedfile import UploadedFile

    from media.gateways.store import DocumentStoreGateway


def matches_tab(content_type: str | None, kind: MediaKind) -> bool:
    """The upload tab accepts only files declaring a type of its own kind."""
    return bool(content_type) and content_type.lower().startswith(f"{kind.value}/")


@dataclass
class UploadFailure:
    """One file that did not end up as a media record."""

    filename: str
    error: str
    error_code: str


@dataclass
class UploadBatchResult:
    """
    Outcome of a multi-file upload.

    Attributes:
        total: Number of files in the batch.
        created_ids: Record ids for files that were hosted and recorded.
        failures: Files that failed, in batch order.
        completed: Files processed so far.
    """

    total: int
    created_ids: list[str] = field(default_factory=list)
    failures: list[UploadFailure] = field(default_factory=list)
    completed: int = 0

    @property
    def succeeded(self) -> int:
        return len(self.created_ids)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def progress(self) -> float:
        if not self.total:
            return 0.0
        return self.completed / self.total

    @property
    def message(self) -> str:
        if not self.succeeded:
            return "Failed to upload any files. Please try again."
        message = f"Successfully uploaded {self.succeeded} files"
        if self.failed:
            message += f" ({self.failed} failed)"
        return message


class UploadService(BaseService):
    """Uploads a batch of files one at a time and records each one."""

    def __init__(
        self,
        store: DocumentStoreGateway,
        media_host: MediaHostGateway | None = None,
    ):
        self.store = store
        self.media_host = media_host or MediaHostGateway()

    async def upload_batch(
        self,
        owner_id: str,
        files: Sequence[UploadedFile],
        kind: MediaKind,
        collection_id: str | None = None,
        on_progress: Callable[[float], None] | None = None,
    ) -> UploadBatchResult:
        """
        Upload and record every file in order.

        Args:
            owner_id: Identity the records belong to.
            files: Files to upload.
            kind: Selected upload tab.
            collection_id: Collection for every record, None for uncategorized.
            on_progress: Called with the completed fraction after each file.

        Returns:
            UploadBatchResult with created ids and per-file failures.

        Raises:
            ValidationError: The batch is empty.
            SessionExpiredError: The store no longer accepts the identity;
                the rest of the batch is not attempted.
        """
        logger = self.get_logger()

        if not files:
            raise ValidationError("Please select files to upload", error_code="NO_FILES")

        kind = MediaKind(kind)
        result = UploadBatchResult(total=len(files))

        for file in files:
            filename = getattr(file, "name", None) or "upload"
            failure = await self._upload_one(owner_id, file, kind, collection_id, result)
            if failure is not None:
                logger.warning(f"Upload of {filename} failed: {failure.error}")
                result.failures.append(failure)

            result.completed += 1
            if on_progress is not None:
                on_progress(result.progress)

        logger.info(
            f"Upload batch for {owner_id} finished: "
            f"{result.succeeded} succeeded, {result.failed} failed"
        )
        return result

    async def _upload_one(
        self,
        owner_id: str,
        file: UploadedFile,
        kind: MediaKind,
        collection_id: str | None,
        result: UploadBatchResult,
    ) -> UploadFailure | None:
        filename = getattr(file, "name", None) or "upload"

        if not matches_tab(getattr(file, "content_type", None), kind):
            return UploadFailure(
                filename=filename,
                error=f"Only {kind.value} files can be uploaded here",
                error_code="KIND_MISMATCH",
            )

        try:
            uploaded = await self.media_host.upload(file)
        except ExternalServiceError as e:
            return UploadFailure(filename=filename, error=e.message, error_code=e.error_code)

        try:
            media_id = await self.store.create_media_record(
                owner_id, uploaded.url, uploaded.kind, collection_id
            )
        except SessionExpiredError:
            self.get_logger().warning(
                f"Orphaned hosted file {uploaded.url}: session expired before recording"
            )
            raise
        except RemoteWriteError as e:
            self.get_logger().warning(
                f"Orphaned hosted file {uploaded.url}: record creation failed ({e.message})"
            )
            return UploadFailure(filename=filename, error=e.message, error_code=e.error_code)

        result.created_ids.append(media_id)
        return None
