"""Read and ownership rules for file records."""

import logging
from typing import TYPE_CHECKING

from server.apps.files.exceptions import NotFoundOrUnauthorizedError
from server.apps.files.models import FileRecord

if TYPE_CHECKING:
    from server.apps.accounts.models import User

logger = logging.getLogger(__name__)


def _caller_id(caller: 'User | None') -> int | None:
    if caller is None or not caller.is_authenticated:
        return None
    return caller.pk


def can_read(file_record: FileRecord, caller: 'User | None') -> bool:
    """Check whether the caller may see a file.

    Args:
        file_record: File to check.
        caller: Resolved caller or None for anonymous access.

    Returns:
        True if the file is public or owned by the caller.
    """
    return file_record.is_public or file_record.is_owned_by(_caller_id(caller))


def get_readable_file(caller: 'User | None', file_id: int) -> FileRecord:
    """Fetch a file the caller may read.

    Args:
        caller: Resolved caller or None for anonymous access.
        file_id: ID of the file.

    Returns:
        FileRecord instance.

    Raises:
        NotFoundOrUnauthorizedError: If the file is missing, or private
            and owned by someone else.
    """
    file_record = (
        FileRecord.objects.select_related('uploaded_by')
        .filter(id=file_id)
        .first()
    )
    if file_record is None or not can_read(file_record, caller):
        logger.warning('File not readable: ID=%s', file_id)
        raise NotFoundOrUnauthorizedError(file_id)
    return file_record


def get_owned_file(caller: 'User', file_id: int) -> FileRecord:
    """Fetch a file owned by the caller.

    Args:
        caller: Authenticated caller.
        file_id: ID of the file.

    Returns:
        FileRecord instance.

    Raises:
        NotFoundOrUnauthorizedError: If the file is missing or owned by
            someone else.
    """
    file_record = FileRecord.objects.filter(
        id=file_id,
        uploaded_by=caller,
    ).first()
    if file_record is None:
        logger.warning(
            'File not found or not owned: ID=%s, user=%s',
            file_id,
            caller.pk,
        )
        raise NotFoundOrUnauthorizedError(file_id)
    return file_record
