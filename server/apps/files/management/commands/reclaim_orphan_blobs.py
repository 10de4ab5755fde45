"""Management command to delete blobs that no file record references."""

import logging
from datetime import timedelta
from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from server.apps.files.exceptions import UpstreamStoreFailureError
from server.apps.files.infrastructure.blob_store import get_blob_store
from server.apps.files.models import FileRecord

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Delete unreferenced blobs older than the retention window.

    Orphans come from upload slots that were written but never turned
    into a record, and from rollbacks that failed.
    """

    help = 'Delete blobs that no file record references'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without deleting',
        )
        parser.add_argument(
            '--min-age-hours',
            type=int,
            default=settings.FILES_ORPHAN_MIN_AGE_HOURS,
            help='Skip blobs younger than this (default: %(default)s)',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the reclamation command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        dry_run = options['dry_run']
        cutoff = timezone.now() - timedelta(hours=options['min_age_hours'])

        self.stdout.write(
            f'Looking for unreferenced blobs stored before {cutoff}',
        )

        blob_store = get_blob_store()
        candidates = [
            blob
            for blob in blob_store.iter_blobs()
            if blob.modified_at <= cutoff
        ]
        referenced = set(
            FileRecord.objects.filter(
                blob_ref__in=[blob.blob_ref for blob in candidates],
            ).values_list('blob_ref', flat=True),
        )

        count = 0
        failed = 0

        for blob in candidates:
            if blob.blob_ref in referenced:
                continue

            if dry_run:
                self.stdout.write(
                    f'Would delete: {blob.blob_ref} '
                    f'(stored: {blob.modified_at})',
                )
                count += 1
                continue

            try:
                blob_store.delete(blob.blob_ref)
            except UpstreamStoreFailureError as exc:
                self.stderr.write(f'Failed to delete {blob.blob_ref}: {exc}')
                logger.exception(
                    'Failed to reclaim orphan blob: %s',
                    blob.blob_ref,
                )
                failed += 1
                continue

            count += 1
            logger.info('Reclaimed orphan blob: %s', blob.blob_ref)

        if dry_run:
            self.stdout.write(
                self.style.SUCCESS(f'Would reclaim {count} orphan blobs'),
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(
                    f'Reclaimed {count} orphan blobs, {failed} failed',
                ),
            )
