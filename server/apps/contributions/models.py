"""Database models for contributions app."""

from typing import Final, final, override

from django.conf import settings
from django.db import models

from server.apps.files.models import FileRecord

_KIND_MAX_LENGTH: Final = 16


class ContributionKind(models.TextChoices):
    """Actions a contribution can record."""

    UPLOAD = 'upload', 'Upload'
    SHARE = 'share', 'Share'
    COMMENT = 'comment', 'Comment'


@final
class Contribution(models.Model):
    """Append-only record of something a user did with a file.

    The file reference carries no database constraint: the file may be
    deleted later (or never have existed), and readers fall back to a
    placeholder name.
    """

    file = models.ForeignKey(
        FileRecord,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='contributions',
        db_index=True,
    )

    contributor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='contributions',
        db_index=True,
    )

    kind = models.CharField(
        max_length=_KIND_MAX_LENGTH,
        choices=ContributionKind.choices,
    )

    message = models.TextField(
        blank=True,
        default='',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Contribution'  # type: ignore[mutable-override]
        verbose_name_plural = 'Contributions'  # type: ignore[mutable-override]
        ordering = ['-created_at', '-id']

        indexes = [
            models.Index(
                fields=['contributor', '-created_at'],
                name='contrib_contributor_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.contributor_id}:{self.kind}:{self.file_id}'
