"""Storage accounting derived from file records.

Nothing here is persisted: every figure is recomputed from the current
file records on each call. The capacity is a display value; uploads are
never refused for exceeding it.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, final

from django.conf import settings
from django.db.models import Count, Sum  # noqa: WPS347

from server.apps.files.infrastructure.metadata import get_mime_category
from server.apps.files.models import FileRecord

if TYPE_CHECKING:
    from server.apps.accounts.models import User

# Field name constant to avoid string literal over-use
_SIZE_FIELD = 'size_bytes'  # noqa: WPS226

logger = logging.getLogger(__name__)


@final
@dataclass(frozen=True)
class StorageStats:
    """Number of files and bytes owned by one user."""

    file_count: int
    total_bytes: int


@final
@dataclass(frozen=True)
class StorageUsage:
    """Usage against the display capacity."""

    used_bytes: int
    capacity_bytes: int
    available_bytes: int
    percentage: float


def _is_anonymous(caller: 'User | None') -> bool:
    return caller is None or not caller.is_authenticated


def get_storage_stats(caller: 'User | None') -> StorageStats:
    """Count the caller's files and sum their sizes.

    Args:
        caller: Resolved caller.

    Returns:
        StorageStats for the caller. Zeros for anonymous callers.
    """
    # Anonymous callers see an empty dashboard, not an error
    if _is_anonymous(caller):
        return StorageStats(file_count=0, total_bytes=0)

    totals = FileRecord.objects.filter(uploaded_by=caller).aggregate(
        file_count=Count('id'),
        total_bytes=Sum(_SIZE_FIELD),
    )
    stats = StorageStats(
        file_count=totals['file_count'],
        total_bytes=totals['total_bytes'] or 0,
    )
    logger.debug(
        'Storage stats for user %s: %d files, %d bytes',
        caller.pk,  # type: ignore[union-attr]
        stats.file_count,
        stats.total_bytes,
    )
    return stats


def get_usage_summary(
    caller: 'User | None',
    capacity_bytes: int | None = None,
) -> StorageUsage:
    """Compare the caller's usage with the display capacity.

    Args:
        caller: Resolved caller.
        capacity_bytes: Capacity to compare against, defaults to
            ``FILES_DISPLAY_CAPACITY_BYTES``.

    Returns:
        StorageUsage; available bytes never go below zero while the
        percentage may exceed 100.
    """
    if capacity_bytes is None:
        capacity_bytes = settings.FILES_DISPLAY_CAPACITY_BYTES

    used = get_storage_stats(caller).total_bytes
    if capacity_bytes > 0:
        percentage = used / capacity_bytes * 100
    else:
        percentage = 0.0

    return StorageUsage(
        used_bytes=used,
        capacity_bytes=capacity_bytes,
        available_bytes=max(0, capacity_bytes - used),
        percentage=percentage,
    )


def get_type_breakdown(caller: 'User | None') -> dict[str, int]:
    """Sum the caller's bytes per MIME category.

    Args:
        caller: Resolved caller.

    Returns:
        Mapping of category ('image', 'video', ..., 'other') to bytes,
        largest first. Empty for anonymous callers.
    """
    if _is_anonymous(caller):
        return {}

    rows = FileRecord.objects.filter(uploaded_by=caller).values_list(
        'mime_type',
        _SIZE_FIELD,
    )
    breakdown: dict[str, int] = {}
    for mime_type, size_bytes in rows:
        category = get_mime_category(mime_type)
        breakdown[category] = breakdown.get(category, 0) + size_bytes

    return dict(sorted(
        breakdown.items(),
        key=lambda item: (-item[1], item[0]),
    ))
