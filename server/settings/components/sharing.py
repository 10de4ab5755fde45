"""File registry and storage accounting settings."""

from server.settings.components import config

# Key prefix under which upload slots are allocated in the blob store
FILES_UPLOAD_PREFIX = config('FILES_UPLOAD_PREFIX', default='uploads')

# Lifetime of a presigned upload URL, in seconds
FILES_UPLOAD_URL_EXPIRE = config(
    'FILES_UPLOAD_URL_EXPIRE',
    cast=int,
    default=900,
)

# Capacity shown on the storage dashboard. Display only, never enforced.
FILES_DISPLAY_CAPACITY_BYTES = config(
    'FILES_DISPLAY_CAPACITY_BYTES',
    cast=int,
    default=1024 * 1024 * 1024,
)

# Unreferenced blobs younger than this are left alone by reclamation
FILES_ORPHAN_MIN_AGE_HOURS = config(
    'FILES_ORPHAN_MIN_AGE_HOURS',
    cast=int,
    default=24,
)
