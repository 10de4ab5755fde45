"""Tests for User model."""

import pytest

from server.apps.accounts.models import Role


@pytest.mark.django_db
def test_user_display_name(user, nameless_user):
    """Test display name is the name or None."""
    assert user.display_name == 'Alice'
    assert nameless_user.display_name is None


@pytest.mark.django_db
def test_user_str(user, nameless_user):
    """Test string representation falls back to username."""
    assert str(user) == 'Alice'
    assert str(nameless_user) == 'carol'


@pytest.mark.django_db
def test_user_role(django_user_model):
    """Test role defaults to blank and accepts known roles."""
    member = django_user_model.objects.create_user(
        username='dave',
        password='testpass123',
        role=Role.MEMBER,
    )

    assert member.role == 'member'
    assert django_user_model.objects.create_user(username='erin').role == ''
