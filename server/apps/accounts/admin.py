"""Django admin configuration for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from server.apps.accounts.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin interface for User model."""

    list_display = [
        'username',
        'name',
        'email',
        'role',
        'is_staff',
    ]

    list_filter = [
        'role',
        'is_staff',
        'is_active',
    ]

    search_fields = [
        'username',
        'name',
        'email',
    ]

    fieldsets = (
        *BaseUserAdmin.fieldsets,
        ('Profile', {
            'fields': ('name', 'role'),
        }),
    )
