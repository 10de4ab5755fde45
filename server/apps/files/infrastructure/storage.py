"""S3-compatible storage backend for uploaded blobs."""

import logging
from typing import Any, final, override

from storages.backends.s3 import S3Storage

logger = logging.getLogger(__name__)


@final
class FileStorage(S3Storage):
    """S3Storage with the extras the blob store adapter needs.

    Adds presigned PUT URLs for direct client uploads, listing by key
    prefix, and logging around every write and delete. Errors from
    boto3 propagate unchanged; ``S3BlobStore`` translates them.
    """

    @override
    def save(  # noqa: WPS211
        self,
        name: str,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Write a blob, logging the outcome.

        Args:
            name: Object key.
            content: File-like payload; its ``content_type`` is stored
                with the object.
            max_length: Optional maximum key length.

        Returns:
            Key actually used.
        """
        logger.info('Writing blob: %s', name)
        try:
            stored_name = super().save(name, content, max_length)
        except Exception:
            logger.exception('Blob write failed: %s', name)
            raise
        logger.debug('Blob written: %s', stored_name)
        return stored_name

    @override
    def delete(self, name: str) -> None:
        """Delete a blob, logging the outcome.

        Args:
            name: Object key.
        """
        logger.info('Deleting blob: %s', name)
        try:
            super().delete(name)
        except Exception:
            logger.exception('Blob delete failed: %s', name)
            raise
        logger.debug('Blob deleted: %s', name)

    def presigned_upload_url(self, name: str, expire: int) -> str:
        """Generate a presigned PUT URL for a direct client upload.

        Args:
            name: Object key the client will write to.
            expire: URL lifetime in seconds.

        Returns:
            Presigned URL accepting a single PUT of the object.
        """
        return self.bucket.meta.client.generate_presigned_url(
            'put_object',
            Params={
                'Bucket': self.bucket_name,
                'Key': self._normalize_name(name),
            },
            ExpiresIn=expire,
        )

    def iter_objects(self, prefix: str) -> Any:
        """Iterate over object summaries stored under a key prefix.

        Args:
            prefix: Key prefix, without the trailing slash.

        Returns:
            Iterable of boto3 ObjectSummary (``key``, ``last_modified``).
        """
        return self.bucket.objects.filter(Prefix=f'{prefix.rstrip("/")}/')
