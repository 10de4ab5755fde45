"""Blob store boundary used by the file registry.

The registry never touches storage directly: it allocates upload slots,
commits payloads, resolves download URLs and deletes blobs through the
``BlobStore`` protocol, always by the reference stored on a record.
"""

import logging
import re
import uuid
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Protocol, final

from boto3.exceptions import Boto3Error
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from django.core.exceptions import SuspiciousOperation
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from server.apps.files.exceptions import UpstreamStoreFailureError

if TYPE_CHECKING:
    from server.apps.files.infrastructure.storage import FileStorage

logger = logging.getLogger(__name__)

_STORE_ERRORS = (Boto3Error, BotoCoreError, ClientError)

# One flat key segment under the upload prefix, well below the S3 key limit
_HANDLE_NAME = re.compile(r'[A-Za-z0-9_-]{1,128}')


@final
@dataclass(frozen=True)
class UploadSlot:
    """Single-use write destination in the blob store."""

    handle: str
    upload_url: str
    expires_in: int


@final
@dataclass(frozen=True)
class StoredBlob:
    """Blob present in the store, as seen by a listing."""

    blob_ref: str
    modified_at: datetime


class BlobStore(Protocol):
    """Operations the file registry needs from a blob store."""

    def allocate_upload_slot(self) -> UploadSlot:
        """Reserve a destination for a new payload."""

    def is_upload_handle(self, blob_ref: str) -> bool:
        """Check that a reference has the shape of an allocated slot."""

    def commit(self, handle: str, content: bytes, content_type: str) -> str:
        """Write a payload to a slot and return its blob reference."""

    def resolve_download_url(self, blob_ref: str) -> str | None:
        """Return an expiring download URL, None when not retrievable."""

    def delete(self, blob_ref: str) -> None:
        """Delete a blob."""

    def exists(self, blob_ref: str) -> bool:
        """Check whether a blob is stored."""

    def iter_blobs(self) -> Iterator[StoredBlob]:
        """Iterate over every blob under the upload prefix."""


@final
class S3BlobStore:
    """Blob store backed by the S3-compatible ``FileStorage``.

    Every botocore failure is logged with its details and surfaced as
    ``UpstreamStoreFailureError``.
    """

    def __init__(
        self,
        storage: 'FileStorage',
        upload_prefix: str,
        upload_url_expire: int,
    ) -> None:
        """Initialize the adapter.

        Args:
            storage: Configured S3 storage backend.
            upload_prefix: Key prefix for allocated upload slots.
            upload_url_expire: Presigned upload URL lifetime in seconds.
        """
        self._storage = storage
        self._prefix = upload_prefix.strip('/')
        self._upload_url_expire = upload_url_expire

    def allocate_upload_slot(self) -> UploadSlot:
        """Reserve a fresh key and presign a PUT for it.

        Returns:
            UploadSlot with the handle and the direct upload URL.

        Raises:
            UpstreamStoreFailureError: If presigning fails.
        """
        handle = f'{self._prefix}/{uuid.uuid4().hex}'
        try:
            upload_url = self._storage.presigned_upload_url(
                handle,
                self._upload_url_expire,
            )
        except _STORE_ERRORS as exc:
            logger.exception('Failed to allocate upload slot: %s', handle)
            raise UpstreamStoreFailureError('allocate_upload_slot') from exc

        logger.info('Allocated upload slot: %s', handle)
        return UploadSlot(
            handle=handle,
            upload_url=upload_url,
            expires_in=self._upload_url_expire,
        )

    def is_upload_handle(self, blob_ref: str) -> bool:
        """Check that a reference names a single key under the upload prefix.

        Only the shape is checked, not whether the slot was issued.

        Args:
            blob_ref: Reference to check.

        Returns:
            True for ``<prefix>/<name>`` with a plain name segment.
        """
        prefix, _, name = blob_ref.rpartition('/')
        return prefix == self._prefix and bool(_HANDLE_NAME.fullmatch(name))

    def commit(self, handle: str, content: bytes, content_type: str) -> str:
        """Write a payload into an allocated slot.

        Args:
            handle: Handle from ``allocate_upload_slot``.
            content: Payload bytes.
            content_type: MIME type stored with the object.

        Returns:
            Blob reference of the stored payload.

        Raises:
            UpstreamStoreFailureError: If the handle is foreign or already
                used, or if the upload fails.
        """
        if not self.is_upload_handle(handle):
            logger.warning('Refused commit to foreign handle: %s', handle)
            raise UpstreamStoreFailureError('commit')

        if self.exists(handle):
            logger.warning('Refused commit to used upload slot: %s', handle)
            raise UpstreamStoreFailureError('commit')

        payload = ContentFile(content)
        payload.content_type = content_type  # type: ignore[attr-defined]
        try:
            return self._storage.save(handle, payload)
        except _STORE_ERRORS as exc:
            raise UpstreamStoreFailureError('commit') from exc

    def resolve_download_url(self, blob_ref: str) -> str | None:
        """Resolve an expiring download URL.

        Args:
            blob_ref: Reference stored on a file record.

        Returns:
            Presigned URL, or None if the blob is not stored or the
            reference cannot address one.

        Raises:
            UpstreamStoreFailureError: If the store cannot be queried.
        """
        if not self.exists(blob_ref):
            logger.warning('Blob not retrievable: %s', blob_ref)
            return None
        try:
            return self._storage.url(blob_ref)
        except _STORE_ERRORS as exc:
            logger.exception('Failed to resolve download URL: %s', blob_ref)
            raise UpstreamStoreFailureError('resolve_download_url') from exc

    def delete(self, blob_ref: str) -> None:
        """Delete a blob.

        Args:
            blob_ref: Reference stored on a file record.

        Raises:
            UpstreamStoreFailureError: If the delete fails.
        """
        try:
            self._storage.delete(blob_ref)
        except SuspiciousOperation:
            # No object can be stored under an unaddressable key
            logger.warning('Skipped delete of unaddressable blob: %s', blob_ref)
        except _STORE_ERRORS as exc:
            raise UpstreamStoreFailureError('delete') from exc

    def exists(self, blob_ref: str) -> bool:
        """Check whether a blob is stored.

        Args:
            blob_ref: Blob reference.

        Returns:
            True if the object exists, False also for references that
            cannot address an object (e.g. ``../escape``).

        Raises:
            UpstreamStoreFailureError: If the store cannot be queried.
        """
        try:
            return self._storage.exists(blob_ref)
        except SuspiciousOperation:
            logger.warning('Unaddressable blob reference: %s', blob_ref)
            return False
        except _STORE_ERRORS as exc:
            logger.exception('Failed to check blob: %s', blob_ref)
            raise UpstreamStoreFailureError('exists') from exc

    def iter_blobs(self) -> Iterator[StoredBlob]:
        """Iterate over every blob under the upload prefix.

        Yields:
            StoredBlob for each stored object.

        Raises:
            UpstreamStoreFailureError: If listing fails.
        """
        try:
            for summary in self._storage.iter_objects(self._prefix):
                yield StoredBlob(
                    blob_ref=summary.key,
                    modified_at=summary.last_modified,
                )
        except _STORE_ERRORS as exc:
            logger.exception('Failed to list blobs under: %s', self._prefix)
            raise UpstreamStoreFailureError('iter_blobs') from exc


def get_blob_store() -> BlobStore:
    """Get the blob store bound to the configured default storage.

    Returns:
        S3BlobStore using ``default_storage`` and project settings.
    """
    return S3BlobStore(
        storage=default_storage,  # type: ignore[arg-type]
        upload_prefix=settings.FILES_UPLOAD_PREFIX,
        upload_url_expire=settings.FILES_UPLOAD_URL_EXPIRE,
    )
