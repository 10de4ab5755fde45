"""End-to-end sharing scenarios across registry, accounting and ledger."""

import pytest

from server.apps.contributions.logic.ledger import (
    UNKNOWN_FILE_NAME,
    list_own_contributions,
    record_contribution,
)
from server.apps.files.exceptions import NotFoundOrUnauthorizedError
from server.apps.files.logic.file_operations import (
    ANONYMOUS_UPLOADER,
    create_file_record,
    delete_file,
    get_download_url,
    list_own_files,
    list_public_files,
    request_upload_slot,
    upload_file,
)
from server.apps.files.logic.storage_stats import (
    StorageStats,
    get_storage_stats,
)


@pytest.mark.django_db
def test_private_file_stays_private(user, mock_s3):
    """Test private file shows in own listing and stats only."""
    slot = request_upload_slot(user)
    file_record = create_file_record(
        user,
        name='secret.pdf',
        size=1000,
        mime_type='application/pdf',
        blob_ref=slot.handle,
    )

    assert file_record.id not in {
        listing.file.id for listing in list_public_files(None)
    }
    assert [listing.file.id for listing in list_own_files(user)] == [
        file_record.id,
    ]
    assert get_storage_stats(user) == StorageStats(
        file_count=1,
        total_bytes=1000,
    )


@pytest.mark.django_db
@pytest.mark.parametrize(('owner_fixture', 'expected_name'), [
    ('user', 'Alice'),
    ('nameless_user', ANONYMOUS_UPLOADER),
])
def test_public_file_seen_by_others(
    request,
    other_user,
    mock_s3,
    owner_fixture,
    expected_name,
):
    """Test another user sees a public file with its uploader name."""
    owner = request.getfixturevalue(owner_fixture)
    file_record = upload_file(owner, 'shared.txt', b'hi', is_public=True)

    listings = list_public_files(other_user)

    assert [
        (listing.file.id, listing.uploader_name) for listing in listings
    ] == [(file_record.id, expected_name)]


@pytest.mark.django_db
def test_cannot_delete_someone_elses_file(user, other_user, mock_s3):
    """Test foreign delete fails and the file stays retrievable."""
    file_record = upload_file(other_user, 'bobs.txt', b'mine')

    with pytest.raises(NotFoundOrUnauthorizedError):
        delete_file(user, file_record.id)

    assert [listing.file.id for listing in list_own_files(other_user)] == [
        file_record.id,
    ]
    assert get_download_url(other_user, file_record.id)


@pytest.mark.django_db
def test_stats_follow_creates_and_deletes(user, mock_s3):
    """Test stats always equal count and sum of owned files."""
    first = upload_file(user, 'a.txt', b'12345')
    upload_file(user, 'b.txt', b'123')
    assert get_storage_stats(user) == StorageStats(
        file_count=2,
        total_bytes=8,
    )

    delete_file(user, first.id)

    assert get_storage_stats(user) == StorageStats(
        file_count=1,
        total_bytes=3,
    )


@pytest.mark.django_db
def test_contribution_name_survives_until_delete(user, mock_s3):
    """Test ledger shows file name, then the placeholder once deleted."""
    file_record = upload_file(user, 'draft.md', b'# title')
    record_contribution(user, file_record.id, 'upload')

    assert list_own_contributions(user)[0].file_name == 'draft.md'

    delete_file(user, file_record.id)

    assert list_own_contributions(user)[0].file_name == UNKNOWN_FILE_NAME
