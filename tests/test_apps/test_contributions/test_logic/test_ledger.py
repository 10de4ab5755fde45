"""Tests for the contribution ledger."""

import pytest
from django.core.exceptions import ValidationError

from server.apps.accounts.exceptions import UnauthenticatedError
from server.apps.contributions.logic.ledger import (
    UNKNOWN_FILE_NAME,
    count_own_contributions,
    list_own_contributions,
    record_contribution,
)
from server.apps.contributions.models import Contribution
from server.apps.files.models import FileRecord


@pytest.fixture
def shared_file(other_user):
    """Public file owned by another user.

    Returns:
        FileRecord instance.
    """
    return FileRecord.objects.create(
        uploaded_by=other_user,
        name='shared.txt',
        size_bytes=10,
        mime_type='text/plain',
        blob_ref='uploads/shared',
        is_public=True,
    )


@pytest.mark.django_db
def test_record_contribution(user, shared_file):
    """Test event is stored with caller as contributor."""
    contribution = record_contribution(
        user,
        shared_file.id,
        'comment',
        message='Nice one',
    )

    assert contribution.id is not None
    assert contribution.contributor == user
    assert contribution.file_id == shared_file.id
    assert contribution.kind == 'comment'
    assert contribution.message == 'Nice one'
    assert contribution.created_at is not None


@pytest.mark.django_db
def test_record_contribution_unknown_file(user):
    """Test file reference is not checked at write time."""
    contribution = record_contribution(user, 424242, 'share')

    assert contribution.file_id == 424242
    assert Contribution.objects.count() == 1


@pytest.mark.django_db
def test_record_contribution_invalid_kind(user, shared_file):
    """Test unknown kind is rejected."""
    with pytest.raises(ValidationError):
        record_contribution(user, shared_file.id, 'like')

    assert Contribution.objects.count() == 0


def test_record_contribution_unauthenticated():
    """Test anonymous caller cannot contribute."""
    with pytest.raises(UnauthenticatedError):
        record_contribution(None, 1, 'upload')


@pytest.mark.django_db
def test_list_own_contributions(user, other_user, shared_file):
    """Test listing holds the caller's events, newest first."""
    first = record_contribution(user, shared_file.id, 'upload')
    second = record_contribution(user, shared_file.id, 'comment')
    record_contribution(other_user, shared_file.id, 'share')

    entries = list_own_contributions(user)

    assert [entry.contribution for entry in entries] == [second, first]
    assert {entry.file_name for entry in entries} == {'shared.txt'}


@pytest.mark.django_db
def test_list_own_contributions_deleted_file(
    user,
    shared_file,
    mock_s3,
):
    """Test deleted file falls back to the placeholder name."""
    record_contribution(user, shared_file.id, 'comment')
    record_contribution(user, 424242, 'share')
    shared_file.delete()

    entries = list_own_contributions(user)

    assert len(entries) == 2
    assert {entry.file_name for entry in entries} == {UNKNOWN_FILE_NAME}
    assert Contribution.objects.filter(contributor=user).count() == 2


@pytest.mark.django_db
def test_list_own_contributions_anonymous(user, shared_file):
    """Test anonymous caller gets an empty list."""
    record_contribution(user, shared_file.id, 'upload')

    assert list_own_contributions(None) == []


@pytest.mark.django_db
def test_count_own_contributions(user, other_user, shared_file):
    """Test counts per kind include kinds never used."""
    record_contribution(user, shared_file.id, 'comment')
    record_contribution(user, shared_file.id, 'comment')
    record_contribution(user, shared_file.id, 'upload')
    record_contribution(other_user, shared_file.id, 'share')

    counts = count_own_contributions(user)

    assert counts.total == 3
    assert counts.by_kind == {'upload': 1, 'share': 0, 'comment': 2}


@pytest.mark.django_db
def test_count_own_contributions_anonymous():
    """Test anonymous caller gets zeros for every kind."""
    counts = count_own_contributions(None)

    assert counts.total == 0
    assert counts.by_kind == {'upload': 0, 'share': 0, 'comment': 0}
