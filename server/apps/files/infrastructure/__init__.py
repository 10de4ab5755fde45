"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Custom storage backend (S3/MinIO/R2)
- Blob store adapter used by the file registry
- Metadata helpers (MIME type, tags, size formatting)

Keep infrastructure concerns separate from business logic.
"""
