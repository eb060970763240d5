"""Entry point for fetching Redshift temporary credentials.

Example:
    >>> import asyncio
    >>> from redshift_credentials.credentials import RedshiftCredentialsClient, Request
    >>>
    >>> client = RedshiftCredentialsClient.from_session(region_name="us-east-1")
    >>> bundle = asyncio.run(client.get_credentials(Request(cluster_identifier="analytics")))
    >>> bundle.db_user
    'IAM:admin'
"""

from typing import Any, Optional

import boto3

from redshift_credentials.common.aws_utils import create_boto3_client, create_session
from redshift_credentials.config import RedshiftCredentialsSettings
from redshift_credentials.constants import (
    PROVISIONED_SERVICE_NAME,
    SERVERLESS_SERVICE_NAME,
)
from redshift_credentials.credentials.exceptions import UnresolvedTargetError
from redshift_credentials.credentials.models import (
    CredentialBundle,
    Request,
    ResolutionState,
)
from redshift_credentials.credentials.provisioned import ProvisionedCredentialFetcher
from redshift_credentials.credentials.resolver import TargetResolver
from redshift_credentials.credentials.selectors import SelectorLike
from redshift_credentials.credentials.serverless import ServerlessCredentialFetcher
from redshift_credentials.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


class RedshiftCredentialsClient:
    """Resolves a Redshift target and fetches temporary credentials for it.

    Each :meth:`get_credentials` call works on its own resolution state: no
    result is cached and the caller's request is never modified.

    Args:
        provisioned_client: boto3 ``redshift`` client.
        serverless_client: boto3 ``redshift-serverless`` client.
        selector: Strategy for choosing among several discovered targets.
    """

    def __init__(
        self,
        provisioned_client: Any,
        serverless_client: Any,
        selector: Optional[SelectorLike] = None,
    ):
        self.resolver = TargetResolver(provisioned_client, serverless_client, selector)
        self.provisioned = ProvisionedCredentialFetcher(provisioned_client)
        self.serverless = ServerlessCredentialFetcher(serverless_client)

    @classmethod
    def from_session(
        cls,
        session: Optional[boto3.Session] = None,
        *,
        profile_name: Optional[str] = None,
        region_name: Optional[str] = None,
        max_attempts: Optional[int] = None,
        selector: Optional[SelectorLike] = None,
    ) -> "RedshiftCredentialsClient":
        """
        Build both AWS clients from one boto3 session.

        Args:
            session: Session to use; created from the default credential chain when omitted.
            profile_name: Shared config profile for a new session.
            region_name: AWS region for a new session.
            max_attempts: botocore transport retry attempts.
            selector: Strategy for choosing among several discovered targets.
        """
        if session is None:
            session = create_session(profile_name=profile_name, region_name=region_name)
        return cls(
            create_boto3_client(session, PROVISIONED_SERVICE_NAME, max_attempts=max_attempts),
            create_boto3_client(session, SERVERLESS_SERVICE_NAME, max_attempts=max_attempts),
            selector=selector,
        )

    @classmethod
    def from_settings(
        cls,
        settings: RedshiftCredentialsSettings,
        selector: Optional[SelectorLike] = None,
    ) -> "RedshiftCredentialsClient":
        return cls.from_session(
            profile_name=settings.profile,
            region_name=settings.region,
            max_attempts=settings.max_attempts,
            selector=selector,
        )

    async def get_credentials(self, request: Request) -> CredentialBundle:
        """
        Resolve the target described by ``request`` and fetch its credentials.

        Args:
            request: Caller input; may name nothing, in which case the account
                is searched.

        Returns:
            CredentialBundle: Credentials plus the target's endpoint when known.

        Raises:
            RedshiftCredentialsError: Any resolution or fetch failure.
        """
        state = ResolutionState.from_request(request)
        await self.resolver.resolve(state)
        return await self.dispatch(state)

    async def dispatch(self, state: ResolutionState) -> CredentialBundle:
        """Run the fetcher matching the resolved target."""
        if state.cluster_identifier:
            logger.debug(f"get credentials for provisioned cluster {state.cluster_identifier}")
            return await self.provisioned.fetch(state)
        if state.workgroup_name:
            logger.debug(f"get credentials for serverless workgroup {state.workgroup_name}")
            return await self.serverless.fetch(state)
        raise UnresolvedTargetError("neither cluster identifier nor workgroup name was resolved")
