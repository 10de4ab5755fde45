"""Business logic for file operations.

Every operation takes the caller explicitly. Writes require an
authenticated caller; owner-scoped listings return nothing for
anonymous callers instead of failing.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, final

from django.core.exceptions import ValidationError
from django.db import transaction

from server.apps.accounts.logic.identity import require_caller
from server.apps.files.exceptions import (
    NotFoundOrUnauthorizedError,
    ResourceUnavailableError,
    UpstreamStoreFailureError,
)
from server.apps.files.infrastructure.blob_store import (
    BlobStore,
    UploadSlot,
    get_blob_store,
)
from server.apps.files.infrastructure.metadata import (
    detect_mime_type,
    normalize_tags,
)
from server.apps.files.logic.access import get_owned_file, get_readable_file
from server.apps.files.models import FileRecord

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from server.apps.accounts.models import User

logger = logging.getLogger(__name__)

ANONYMOUS_UPLOADER: Final = 'Anonymous'


@final
@dataclass(frozen=True)
class FileListing:
    """File record paired with data resolved at read time.

    ``url`` is None when the blob store cannot serve the payload right
    now; callers must present that as "download unavailable".
    """

    file: FileRecord
    url: str | None
    uploader_name: str | None = None


def request_upload_slot(caller: 'User | None') -> UploadSlot:
    """Allocate a single-use upload destination in the blob store.

    Args:
        caller: Resolved caller.

    Returns:
        UploadSlot the client writes the payload to.

    Raises:
        UnauthenticatedError: If there is no caller.
        UpstreamStoreFailureError: If the blob store fails.
    """
    caller = require_caller(caller, 'request_upload_slot')
    slot = get_blob_store().allocate_upload_slot()
    logger.info('Upload slot %s issued to user %s', slot.handle, caller.pk)
    return slot


def create_file_record(  # noqa: WPS211
    caller: 'User | None',
    name: str,
    size: int,
    mime_type: str,
    blob_ref: str,
    is_public: bool = False,
    tags: Iterable[str] | None = None,
    description: str = '',
) -> FileRecord:
    """Create the record of a payload already committed to the blob store.

    The blob reference and size are taken as reported: neither is
    checked against the blob store. Only the shape of the reference is
    checked, so it can never address a key outside the upload prefix.

    Args:
        caller: Resolved caller, becomes the owner.
        name: Human-readable file name.
        size: Caller-reported size in bytes.
        mime_type: Caller-reported MIME type.
        blob_ref: Reference returned by the blob store.
        is_public: Whether the file is listed publicly.
        tags: Optional free-form tags.
        description: Optional description.

    Returns:
        Created FileRecord instance.

    Raises:
        UnauthenticatedError: If there is no caller.
        ValidationError: If name is empty, size is negative, or the blob
            reference is not an upload slot handle or is already used.
    """
    caller = require_caller(caller, 'create_file_record')

    if not name.strip():
        raise ValidationError('File name cannot be empty')
    if size < 0:
        raise ValidationError(f'File size cannot be negative: {size}')
    if not get_blob_store().is_upload_handle(blob_ref):
        raise ValidationError(f'Not an upload slot reference: {blob_ref!r}')

    file_record = FileRecord(
        uploaded_by=caller,
        name=name.strip(),
        size_bytes=size,
        mime_type=mime_type,
        blob_ref=blob_ref,
        is_public=is_public is True,
        tags=normalize_tags(tags),
        description=description,
    )
    file_record.full_clean()

    with transaction.atomic():
        file_record.save()

    logger.info(
        'File record created: %s (ID: %d, owner: %s, public: %s)',
        file_record.name,
        file_record.id,
        caller.pk,
        file_record.is_public,
    )
    return file_record


def upload_file(  # noqa: WPS211
    caller: 'User | None',
    name: str,
    content: bytes,
    mime_type: str | None = None,
    is_public: bool = False,
    tags: Iterable[str] | None = None,
    description: str = '',
) -> FileRecord:
    """Store a payload and create its record in one call.

    Transaction safety: Commit to the blob store first, then create the
    record. If the record cannot be created, the committed blob is
    deleted again (rollback).

    Args:
        caller: Resolved caller, becomes the owner.
        name: Human-readable file name.
        content: Payload bytes.
        mime_type: MIME type, detected from the name when omitted.
        is_public: Whether the file is listed publicly.
        tags: Optional free-form tags.
        description: Optional description.

    Returns:
        Created FileRecord instance.

    Raises:
        UnauthenticatedError: If there is no caller.
        UpstreamStoreFailureError: If the blob store fails.
        ValidationError: If record validation fails.
    """
    caller = require_caller(caller, 'upload_file')
    mime_type = mime_type or detect_mime_type(name)

    blob_store = get_blob_store()
    slot = blob_store.allocate_upload_slot()
    blob_ref = blob_store.commit(slot.handle, content, mime_type)

    try:
        return create_file_record(
            caller,
            name=name,
            size=len(content),
            mime_type=mime_type,
            blob_ref=blob_ref,
            is_public=is_public,
            tags=tags,
            description=description,
        )
    except Exception:
        logger.exception(
            'Record creation failed, rolling back blob: %s',
            blob_ref,
        )
        _rollback_blob(blob_store, blob_ref)
        raise


def _rollback_blob(blob_store: BlobStore, blob_ref: str) -> None:
    try:
        blob_store.delete(blob_ref)
    except UpstreamStoreFailureError:
        # Left for reclaim_orphan_blobs
        logger.exception('Failed to roll back blob (orphaned): %s', blob_ref)


def list_own_files(
    caller: 'User | None',
    search: str = '',
) -> list[FileListing]:
    """List every file owned by the caller, public or private.

    Args:
        caller: Resolved caller.
        search: Optional case-insensitive substring of the file name.

    Returns:
        Listings with download URLs, newest first. Empty for anonymous
        callers.

    Raises:
        UpstreamStoreFailureError: If URL resolution fails.
    """
    # Anonymous callers get an empty dashboard, not an error
    if caller is None or not caller.is_authenticated:
        return []

    files = _filter_by_name(
        FileRecord.objects.filter(uploaded_by=caller),
        search,
    )
    logger.debug('Listing files of user %s', caller.pk)

    blob_store = get_blob_store()
    return [
        FileListing(
            file=file_record,
            url=blob_store.resolve_download_url(file_record.blob_ref),
        )
        for file_record in files
    ]


def list_public_files(
    caller: 'User | None' = None,
    search: str = '',
) -> list[FileListing]:
    """List every public file, for any caller including anonymous ones.

    Args:
        caller: Resolved caller, only used for logging.
        search: Optional case-insensitive substring of the file name.

    Returns:
        Listings with download URLs and uploader names, newest first.

    Raises:
        UpstreamStoreFailureError: If URL resolution fails.
    """
    files = _filter_by_name(
        FileRecord.objects.filter(is_public=True).select_related(
            'uploaded_by',
        ),
        search,
    )
    logger.debug(
        'Listing public files for %s',
        caller.pk if caller is not None else 'anonymous',
    )

    blob_store = get_blob_store()
    return [
        FileListing(
            file=file_record,
            url=blob_store.resolve_download_url(file_record.blob_ref),
            uploader_name=(
                file_record.uploaded_by.display_name or ANONYMOUS_UPLOADER
            ),
        )
        for file_record in files
    ]


def _filter_by_name(
    files: 'QuerySet[FileRecord]',
    search: str,
) -> 'QuerySet[FileRecord]':
    search = search.strip()
    if search:
        return files.filter(name__icontains=search)
    return files


def get_file(caller: 'User | None', file_id: int) -> FileRecord:
    """Fetch a single file the caller may read.

    Args:
        caller: Resolved caller or None.
        file_id: ID of the file.

    Returns:
        FileRecord instance.

    Raises:
        NotFoundOrUnauthorizedError: If missing or private to someone else.
    """
    return get_readable_file(caller, file_id)


def get_download_url(caller: 'User | None', file_id: int) -> str:
    """Resolve the download URL of a file the caller may read.

    Args:
        caller: Resolved caller or None.
        file_id: ID of the file.

    Returns:
        Expiring download URL.

    Raises:
        NotFoundOrUnauthorizedError: If missing or private to someone else.
        ResourceUnavailableError: If the payload cannot be served now.
        UpstreamStoreFailureError: If the blob store fails.
    """
    file_record = get_readable_file(caller, file_id)
    url = get_blob_store().resolve_download_url(file_record.blob_ref)
    if url is None:
        raise ResourceUnavailableError(file_id)
    return url


def delete_file(caller: 'User | None', file_id: int) -> None:
    """Delete a file owned by the caller.

    Ordering: delete the blob first, then the record. A failure in
    between leaves a record whose download resolves as unavailable,
    never a blob that no record points to.

    Args:
        caller: Resolved caller.
        file_id: ID of file to delete.

    Raises:
        UnauthenticatedError: If there is no caller.
        NotFoundOrUnauthorizedError: If the file is missing or owned by
            someone else, including when a concurrent delete won.
        UpstreamStoreFailureError: If the blob delete fails; the record
            is kept.
    """
    caller = require_caller(caller, 'delete_file')
    file_record = get_owned_file(caller, file_id)
    blob_ref = file_record.blob_ref

    logger.info('Deleting file: ID=%d, blob=%s', file_id, blob_ref)

    get_blob_store().delete(blob_ref)

    try:
        with transaction.atomic():
            deleted, _ = FileRecord.objects.filter(
                id=file_id,
                uploaded_by=caller,
            ).delete()
    except Exception:
        logger.exception(
            'Blob deleted but record kept: ID=%d, blob=%s',
            file_id,
            blob_ref,
        )
        raise

    if not deleted:
        # A concurrent delete removed the record after we fetched it
        raise NotFoundOrUnauthorizedError(file_id)

    logger.info('File record deleted from database: ID=%d', file_id)
