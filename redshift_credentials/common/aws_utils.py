from typing import Any, AsyncIterator, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from redshift_credentials.common.utils import run_sync
from redshift_credentials.constants import ACCESS_DENIED_ERROR_PREFIX

# Failures raised by boto3 clients for a remote call. Anything else is a bug
# in the caller and is left to propagate untouched.
AWS_CALL_ERRORS = (ClientError, BotoCoreError)


def get_error_code(error: BaseException) -> Optional[str]:
    """
    Return the AWS error code of a ``ClientError``, e.g. ``AccessDeniedException``.

    Args:
        error: Exception raised by a boto3 client.

    Returns:
        Optional[str]: The error code, or None for non-service errors.
    """
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code")
    return None


def is_access_denied(error: BaseException) -> bool:
    """
    Check whether a boto3 error is a permission-denied response.

    Redshift answers ``AccessDenied`` while Redshift Serverless answers
    ``AccessDeniedException``; both share the prefix.
    """
    code = get_error_code(error)
    return bool(code) and code.startswith(ACCESS_DENIED_ERROR_PREFIX)


def create_session(
    profile_name: Optional[str] = None, region_name: Optional[str] = None
) -> boto3.Session:
    """
    Create a boto3 session from the default credential chain.

    Args:
        profile_name: Shared config profile, or None for the default chain.
        region_name: AWS region, or None to use the profile/env region.

    Returns:
        boto3.Session: Configured boto3 session
    """
    session_kwargs = {}
    if profile_name:
        session_kwargs["profile_name"] = profile_name
    if region_name:
        session_kwargs["region_name"] = region_name
    return boto3.Session(**session_kwargs)


def create_boto3_client(
    session: boto3.Session,
    service_name: str,
    max_attempts: Optional[int] = None,
    **kwargs,
) -> Any:
    """
    Create an AWS client from a session.

    Args:
        session: Boto3 session instance
        service_name: AWS service name ('redshift' or 'redshift-serverless')
        max_attempts: botocore transport retry attempts, None for the botocore default
        **kwargs: Additional parameters to pass to session.client()

    Returns:
        AWS client instance
    """
    client_kwargs: Dict[str, Any] = dict(kwargs)
    if max_attempts is not None:
        client_kwargs["config"] = Config(retries={"max_attempts": max_attempts})

    # The boto3 client method has many overloads for different services
    # but we need to support dynamic service names
    return session.client(service_name, **client_kwargs)  # type: ignore


async def paginate(
    aws_client: Any, operation_name: str, **kwargs: Any
) -> AsyncIterator[Dict[str, Any]]:
    """
    Yield the pages of a paginated AWS operation one at a time.

    Each page is fetched in a worker thread and awaited before the next one
    is requested.

    Args:
        aws_client: Boto3 client instance
        operation_name: Paginator name, e.g. 'describe_clusters'
        **kwargs: Operation parameters

    Yields:
        Dict[str, Any]: One response page.
    """
    pages = iter(aws_client.get_paginator(operation_name).paginate(**kwargs))
    while True:
        page = await run_sync(next, pages, None)
        if page is None:
            return
        yield page
