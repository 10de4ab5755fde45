"""Django app configuration for files app."""

from typing import override

from django.apps import AppConfig


class FilesConfig(AppConfig):
    """File registry: records, blob store adapter and accounting."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.files'
    verbose_name = 'Shared files'

    @override
    def ready(self) -> None:
        """Connect the blob cleanup handler to record deletion."""
        from server.apps.files import signals  # noqa: F401
