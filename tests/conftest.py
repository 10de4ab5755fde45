"""Shared fixtures for all app tests."""

import boto3
import pytest
from django.conf import settings
from django.contrib.auth import get_user_model
from moto import mock_aws

User = get_user_model()


@pytest.fixture
def bucket_name():
    """Bucket configured for the default storage.

    Returns:
        Bucket name from STORAGES settings.
    """
    return settings.STORAGES['default']['OPTIONS']['bucket_name']


@pytest.fixture
def user(db):
    """Create test user with a display name.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='alice',
        password='testpass123',
        email='alice@example.com',
        name='Alice',
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        username='bob',
        password='testpass123',
        email='bob@example.com',
        name='Bob',
    )


@pytest.fixture
def nameless_user(db):
    """Create a user who never set a display name.

    Returns:
        User instance with a blank name.
    """
    return User.objects.create_user(
        username='carol',
        password='testpass123',
    )


@pytest.fixture
def mock_s3(bucket_name):
    """Mock S3 service with the configured bucket.

    Yields:
        boto3 S3 resource with the bucket created.
    """
    with mock_aws():
        # Create S3 resource
        conn = boto3.resource('s3', region_name='us-east-1')

        # Create bucket
        conn.create_bucket(Bucket=bucket_name)

        yield conn
