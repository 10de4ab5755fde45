"""Metadata helpers for file records."""

import mimetypes
from collections.abc import Iterable
from typing import Final

_DEFAULT_MIME_TYPE: Final = 'application/octet-stream'
_OTHER_CATEGORY: Final = 'other'
_BYTE_UNITS: Final = ('KB', 'MB', 'GB', 'TB')
_UNIT_STEP: Final = 1024


def detect_mime_type(filename: str) -> str:
    """Guess MIME type from a filename extension.

    Args:
        filename: Filename with extension.

    Returns:
        MIME type string (e.g., 'image/jpeg', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return _DEFAULT_MIME_TYPE
    return mime_type


def get_mime_category(mime_type: str) -> str:
    """Get the major part of a MIME type.

    Example: 'image/png' -> 'image'

    Args:
        mime_type: MIME type string, possibly empty.

    Returns:
        Lowercase category, 'other' when there is none.
    """
    category = mime_type.split('/', 1)[0].strip().lower()
    return category or _OTHER_CATEGORY


def normalize_tags(tags: Iterable[str] | None) -> list[str]:
    """Turn caller-supplied tags into a list of distinct strings.

    Surrounding whitespace is stripped, blanks are dropped and the
    first occurrence wins, so the caller's order is kept.

    Args:
        tags: Tags as supplied, or None.

    Returns:
        Distinct non-empty tags.
    """
    if not tags:
        return []
    return list(dict.fromkeys(
        stripped
        for stripped in (tag.strip() for tag in tags)
        if stripped
    ))


def format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '1.5 MB', '234 B').
    """
    if size_bytes < _UNIT_STEP:
        return f'{size_bytes} B'

    size = float(size_bytes)
    unit = _BYTE_UNITS[0]
    for unit in _BYTE_UNITS:  # noqa: B007
        size /= _UNIT_STEP
        if size < _UNIT_STEP:
            break
    return f'{size:.1f} {unit}'
