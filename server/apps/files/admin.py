"""Django admin configuration for files app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.files.infrastructure.metadata import format_bytes
from server.apps.files.models import FileRecord


@admin.register(FileRecord)
class FileRecordAdmin(admin.ModelAdmin[FileRecord]):
    """Admin interface for FileRecord model.

    Records are immutable, so every field is read-only. Deleting from
    the admin goes through the pre_delete handler, which removes the
    blob first.
    """

    list_display = [
        'name',
        'uploaded_by',
        'size_display',
        'mime_type',
        'is_public',
        'created_at',
    ]

    list_filter = [
        'is_public',
        'mime_type',
        'created_at',
    ]

    search_fields = [
        'name',
        'blob_ref',
        'uploaded_by__username',
    ]

    readonly_fields = [
        'name',
        'uploaded_by',
        'size_bytes',
        'mime_type',
        'blob_ref',
        'is_public',
        'tags',
        'description',
        'created_at',
    ]

    fieldsets = (
        ('File Information', {
            'fields': ('name', 'uploaded_by', 'description', 'tags'),
        }),
        ('Storage', {
            'fields': ('blob_ref', 'size_bytes', 'mime_type'),
        }),
        ('Visibility', {
            'fields': ('is_public',),
        }),
        ('Timestamps', {
            'fields': ('created_at',),
        }),
    )

    def size_display(self, obj: FileRecord) -> str:
        """Display file size in human-readable format.

        Args:
            obj: FileRecord instance.

        Returns:
            Formatted size string (e.g., '1.5 MB', '234 B').
        """
        return format_bytes(obj.size_bytes)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def has_add_permission(self, request: HttpRequest) -> bool:
        """Records are only created by uploads."""
        return False

    def get_queryset(self, request: HttpRequest) -> QuerySet[FileRecord]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('uploaded_by')
