"""Tests for files admin configuration."""

import pytest
from django.contrib import admin
from django.test import RequestFactory

from server.apps.files.admin import FileRecordAdmin
from server.apps.files.models import FileRecord


@pytest.fixture
def model_admin():
    """Admin instance for FileRecord.

    Returns:
        FileRecordAdmin bound to the default admin site.
    """
    return FileRecordAdmin(FileRecord, admin.site)


@pytest.mark.django_db
def test_size_display(model_admin, user):
    """Test size column uses human-readable units."""
    file_record = FileRecord(
        uploaded_by=user,
        name='big.bin',
        size_bytes=1536,
        mime_type='application/octet-stream',
        blob_ref='uploads/big',
    )

    assert model_admin.size_display(file_record) == '1.5 KB'


def test_add_not_permitted(model_admin):
    """Test records cannot be created from the admin."""
    request = RequestFactory().get('/admin/files/filerecord/add/')

    assert model_admin.has_add_permission(request) is False
