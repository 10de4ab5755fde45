"""Signal handlers for files app."""

import logging

from django.db.models.signals import pre_delete
from django.dispatch import receiver

from server.apps.files.infrastructure.blob_store import get_blob_store
from server.apps.files.models import FileRecord

logger = logging.getLogger(__name__)


@receiver(pre_delete, sender=FileRecord)
def delete_blob_before_record(
    sender: type[FileRecord],
    instance: FileRecord,
    **kwargs: object,
) -> None:
    """Delete the blob before its record is deleted.

    Covers deletions that bypass ``delete_file`` (admin, cascade from a
    deleted user). ``delete_file`` has already removed the blob by the
    time this runs, so a missing blob is skipped. A failing delete
    propagates and aborts the record deletion.

    Args:
        sender: The FileRecord model class.
        instance: The FileRecord instance being deleted.
        **kwargs: Additional signal arguments.
    """
    blob_store = get_blob_store()
    if not blob_store.exists(instance.blob_ref):
        logger.debug(
            'Blob already gone before record delete: %s',
            instance.blob_ref,
        )
        return

    logger.info(
        'Deleting blob before record delete: %s (ID: %d)',
        instance.blob_ref,
        instance.id,
    )
    blob_store.delete(instance.blob_ref)
