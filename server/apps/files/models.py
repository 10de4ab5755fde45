"""Database models for files app."""

from typing import Final, final, override

from django.conf import settings
from django.db import models

from server.apps.files.infrastructure.metadata import get_mime_category

# Constants for field max lengths
_NAME_MAX_LENGTH: Final = 255
_MIME_TYPE_MAX_LENGTH: Final = 255
_BLOB_REF_MAX_LENGTH: Final = 1024


@final
class FileRecord(models.Model):
    """Metadata of one uploaded file.

    The payload lives in the blob store under ``blob_ref``; the record is
    created only after the payload is committed there. Records are never
    edited: visibility, tags and description are fixed at creation and
    the only way out is deletion by the owner, which removes the blob
    first.
    """

    # Owner relationship, immutable after creation
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='files',
        db_index=True,
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
        help_text='Human-readable file name',
    )

    size_bytes = models.BigIntegerField(
        help_text='Caller-reported size in bytes',
    )

    # Empty when the client could not tell the type
    mime_type = models.CharField(
        max_length=_MIME_TYPE_MAX_LENGTH,
        blank=True,
        default='',
        help_text='MIME type reported by the uploader',
    )

    # Reference into the blob store, one record per blob
    blob_ref = models.CharField(
        max_length=_BLOB_REF_MAX_LENGTH,
        unique=True,
        help_text='Opaque blob store reference',
    )

    is_public = models.BooleanField(
        default=False,
        db_index=True,
        help_text='Listed for every caller when true',
    )

    tags = models.JSONField(
        default=list,
        blank=True,
        help_text='Free-form tags, distinct strings',
    )

    description = models.TextField(
        blank=True,
        default='',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering = ['-created_at', '-id']

        indexes = [
            # Owner listing and storage accounting
            models.Index(
                fields=['uploaded_by', '-created_at'],
                name='files_owner_recent_idx',
            ),
            # Public listing
            models.Index(
                fields=['is_public', '-created_at'],
                name='files_public_recent_idx',
            ),
        ]

        constraints = [
            models.CheckConstraint(
                condition=models.Q(size_bytes__gte=0),
                name='files_size_bytes_non_negative',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.uploaded_by.username}:{self.name}'

    def is_owned_by(self, user_id: int | None) -> bool:
        """Check whether the given user owns this file.

        Args:
            user_id: User ID to compare, None for anonymous callers.

        Returns:
            True if the user uploaded the file.
        """
        return user_id is not None and self.uploaded_by_id == user_id

    def get_category(self) -> str:
        """Major MIME type, e.g. 'image' for 'image/png'.

        Returns:
            Category name, 'other' when the type has no major part.
        """
        return get_mime_category(self.mime_type)
