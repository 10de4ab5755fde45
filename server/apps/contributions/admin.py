"""Django admin configuration for contributions app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.contributions.models import Contribution


@admin.register(Contribution)
class ContributionAdmin(admin.ModelAdmin[Contribution]):
    """Read-only admin interface for the append-only ledger."""

    list_display = [
        'kind',
        'contributor',
        'file_id',
        'created_at',
    ]

    list_filter = [
        'kind',
        'created_at',
    ]

    search_fields = [
        'contributor__username',
        'message',
    ]

    readonly_fields = [
        'file_id',
        'contributor',
        'kind',
        'message',
        'created_at',
    ]

    def has_add_permission(self, request: HttpRequest) -> bool:
        """Contributions are only appended by the ledger."""
        return False

    def has_delete_permission(
        self,
        request: HttpRequest,
        obj: Contribution | None = None,
    ) -> bool:
        """Contributions are never deleted."""
        return False

    def get_queryset(self, request: HttpRequest) -> QuerySet[Contribution]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('contributor')
