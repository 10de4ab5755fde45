"""Database models for accounts app."""

from typing import Final, final, override

from django.contrib.auth.models import AbstractUser
from django.db import models

_NAME_MAX_LENGTH: Final = 150
_ROLE_MAX_LENGTH: Final = 16


class Role(models.TextChoices):
    """Roles an identity provider may assign to a user."""

    ADMIN = 'admin', 'Admin'
    USER = 'user', 'User'
    MEMBER = 'member', 'Member'


@final
class User(AbstractUser):
    """Identity principal.

    Created by the identity provider on first authentication. The file
    registry and the contribution ledger only read users, they never
    change or delete them.
    """

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Display name shown next to shared files',
    )

    email = models.EmailField(
        blank=True,
        db_index=True,
    )

    role = models.CharField(
        max_length=_ROLE_MAX_LENGTH,
        choices=Role.choices,
        blank=True,
        default='',
    )

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.name or self.username

    @property
    def display_name(self) -> str | None:
        """Display name, or None when the user never set one."""
        return self.name or None
