"""Global test configuration and fixtures."""

from unittest.mock import Mock

import pytest

from tests.helpers import EXPIRATION, NEXT_REFRESH_TIME, client_error, set_pages


@pytest.fixture
def provisioned_client() -> Mock:
    """Mock boto3 ``redshift`` client with no clusters."""
    aws_client = Mock()
    set_pages(aws_client, {"Clusters": []})
    aws_client.describe_clusters.return_value = {"Clusters": []}
    aws_client.get_cluster_credentials.return_value = {
        "DbUser": "IAM:admin",
        "DbPassword": "provisioned-secret",
        "Expiration": EXPIRATION,
    }
    return aws_client


@pytest.fixture
def serverless_client() -> Mock:
    """Mock boto3 ``redshift-serverless`` client with no workgroups."""
    aws_client = Mock()
    set_pages(aws_client, {"workgroups": []})
    aws_client.get_workgroup.side_effect = client_error(
        "ResourceNotFoundException", "GetWorkgroup"
    )
    aws_client.get_credentials.return_value = {
        "dbUser": "IAMR:admin",
        "dbPassword": "serverless-secret",
        "expiration": EXPIRATION,
        "nextRefreshTime": NEXT_REFRESH_TIME,
    }
    return aws_client
