"""Tests for storage accounting."""

import pytest

from server.apps.files.logic.storage_stats import (
    StorageStats,
    get_storage_stats,
    get_type_breakdown,
    get_usage_summary,
)
from server.apps.files.models import FileRecord


def _make_record(owner, blob_ref, size_bytes, mime_type='text/plain'):
    return FileRecord.objects.create(
        uploaded_by=owner,
        name=blob_ref.rsplit('/', 1)[-1],
        size_bytes=size_bytes,
        mime_type=mime_type,
        blob_ref=blob_ref,
    )


@pytest.mark.django_db
def test_get_storage_stats(user, other_user):
    """Test count and total cover the caller's files only."""
    _make_record(user, 'uploads/a', 100)
    _make_record(user, 'uploads/b', 250)
    _make_record(other_user, 'uploads/c', 9999)

    stats = get_storage_stats(user)

    assert stats == StorageStats(file_count=2, total_bytes=350)


@pytest.mark.django_db
def test_get_storage_stats_no_files(user):
    """Test caller without files gets zeros."""
    assert get_storage_stats(user) == StorageStats(file_count=0, total_bytes=0)


@pytest.mark.django_db
def test_get_storage_stats_anonymous(user):
    """Test anonymous caller gets zeros, not an error."""
    _make_record(user, 'uploads/a', 100)

    assert get_storage_stats(None) == StorageStats(
        file_count=0,
        total_bytes=0,
    )


@pytest.mark.django_db
def test_get_usage_summary(user):
    """Test usage against an explicit capacity."""
    _make_record(user, 'uploads/a', 250)

    usage = get_usage_summary(user, capacity_bytes=1000)

    assert usage.used_bytes == 250
    assert usage.capacity_bytes == 1000
    assert usage.available_bytes == 750
    assert usage.percentage == pytest.approx(25.0)


@pytest.mark.django_db
def test_get_usage_summary_over_capacity(user):
    """Test usage beyond capacity is reported, never refused."""
    _make_record(user, 'uploads/a', 1500)

    usage = get_usage_summary(user, capacity_bytes=1000)

    assert usage.available_bytes == 0
    assert usage.percentage == pytest.approx(150.0)


@pytest.mark.django_db
def test_get_usage_summary_default_capacity(user, settings):
    """Test capacity defaults to the configured display value."""
    settings.FILES_DISPLAY_CAPACITY_BYTES = 2048

    usage = get_usage_summary(user)

    assert usage.capacity_bytes == 2048
    assert usage.available_bytes == 2048
    assert usage.percentage == pytest.approx(0.0)


@pytest.mark.django_db
def test_get_usage_summary_zero_capacity(user):
    """Test zero capacity does not divide by zero."""
    _make_record(user, 'uploads/a', 10)

    usage = get_usage_summary(user, capacity_bytes=0)

    assert usage.percentage == pytest.approx(0.0)
    assert usage.available_bytes == 0


@pytest.mark.django_db
def test_get_type_breakdown(user, other_user):
    """Test bytes are summed per category, largest first."""
    _make_record(user, 'uploads/a', 100, 'image/png')
    _make_record(user, 'uploads/b', 300, 'image/jpeg')
    _make_record(user, 'uploads/c', 500, 'video/mp4')
    _make_record(user, 'uploads/d', 50, '')
    _make_record(other_user, 'uploads/e', 10000, 'audio/mpeg')

    breakdown = get_type_breakdown(user)

    assert breakdown == {'video': 500, 'image': 400, 'other': 50}
    assert list(breakdown) == ['video', 'image', 'other']
    assert sum(breakdown.values()) == get_storage_stats(user).total_bytes


@pytest.mark.django_db
def test_get_type_breakdown_anonymous(user):
    """Test anonymous caller gets an empty breakdown."""
    _make_record(user, 'uploads/a', 100, 'image/png')

    assert get_type_breakdown(None) == {}
