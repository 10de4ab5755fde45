"""Fixtures for files app tests."""

import boto3
import pytest
from moto import mock_aws


@pytest.fixture
def mock_s3_without_bucket():
    """Mock S3 service where the configured bucket does not exist.

    Every write fails upstream.

    Yields:
        boto3 S3 resource.
    """
    with mock_aws():
        yield boto3.resource('s3', region_name='us-east-1')


@pytest.fixture
def sample_content():
    """Sample payload for uploads.

    Returns:
        Bytes to upload.
    """
    return b'test file content'
