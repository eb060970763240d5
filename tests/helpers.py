"""Builders for boto3 responses and mock clients used across the tests."""

from datetime import datetime, timezone
from typing import Any, Dict, List
from unittest.mock import Mock

from botocore.exceptions import ClientError

EXPIRATION = datetime(2024, 5, 1, 12, 15, 0, tzinfo=timezone.utc)
NEXT_REFRESH_TIME = datetime(2024, 5, 1, 12, 45, 0, tzinfo=timezone.utc)


def client_error(code: str, operation: str = "Operation") -> ClientError:
    """Build a botocore ClientError with the given AWS error code."""
    return ClientError({"Error": {"Code": code, "Message": f"{code} message"}}, operation)


def set_pages(aws_client: Mock, *pages: Any) -> None:
    """Make ``aws_client.get_paginator(...).paginate()`` yield ``pages``.

    An exception instance among the pages is raised when iteration reaches it.
    """

    def _iterate(**kwargs: Any):
        for page in pages:
            if isinstance(page, BaseException):
                raise page
            yield page

    aws_client.get_paginator.return_value.paginate.side_effect = _iterate


def cluster(
    identifier: str,
    master_user: str = "admin",
    db_name: str = "dev",
    port: int = 5439,
) -> Dict[str, Any]:
    return {
        "ClusterIdentifier": identifier,
        "MasterUsername": master_user,
        "DBName": db_name,
        "Endpoint": {
            "Address": f"{identifier}.abc123.us-east-1.redshift.amazonaws.com",
            "Port": port,
        },
    }


def workgroup(name: str, port: int = 5439) -> Dict[str, Any]:
    return {
        "workgroupName": name,
        "endpoint": {
            "address": f"{name}.123456789012.us-east-1.redshift-serverless.amazonaws.com",
            "port": port,
        },
    }


def paginator_calls(aws_client: Mock) -> List[str]:
    return [call.args[0] for call in aws_client.get_paginator.call_args_list]


