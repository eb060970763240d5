"""Temporary credentials for a provisioned Redshift cluster."""

from typing import Any, Dict

from redshift_credentials.common.aws_utils import (
    AWS_CALL_ERRORS,
    get_error_code,
    is_access_denied,
)
from redshift_credentials.common.utils import run_sync
from redshift_credentials.constants import CLUSTER_NOT_FOUND_ERROR_CODE
from redshift_credentials.credentials.exceptions import (
    RemoteCallFailedError,
    TargetNotFoundError,
)
from redshift_credentials.credentials.models import CredentialBundle, ResolutionState
from redshift_credentials.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


class ProvisionedCredentialFetcher:
    """Issues ``GetClusterCredentials`` for a resolved cluster.

    When no database user was requested, the cluster's master user is used
    and its endpoint is taken from the same ``DescribeClusters`` call.
    Otherwise the endpoint is looked up afterwards on a best-effort basis.
    """

    def __init__(self, aws_client: Any):
        self.aws_client = aws_client

    async def fetch(self, state: ResolutionState) -> CredentialBundle:
        """
        Fetch credentials for ``state.cluster_identifier``.

        Raises:
            TargetNotFoundError: If the cluster does not exist.
            RemoteCallFailedError: If DescribeClusters or GetClusterCredentials failed.
        """
        if state.db_user is None:
            cluster = await self.describe_cluster(state.cluster_identifier)
            state.db_user = cluster.get("MasterUsername")
            endpoint = cluster.get("Endpoint") or {}
            state.set_endpoint(endpoint.get("Address"), endpoint.get("Port"))

        params: Dict[str, Any] = {
            "ClusterIdentifier": state.cluster_identifier,
            "DbUser": state.db_user,
        }
        if state.db_name is not None:
            params["DbName"] = state.db_name
        if state.duration_seconds is not None:
            params["DurationSeconds"] = state.duration_seconds
        try:
            output = await run_sync(self.aws_client.get_cluster_credentials, **params)
        except AWS_CALL_ERRORS as e:
            raise RemoteCallFailedError.from_error("GetClusterCredentials", e) from e

        if state.address is None:
            await self._backfill_endpoint(state)

        return CredentialBundle(
            cluster_identifier=state.cluster_identifier,
            endpoint=state.address,
            port=state.port,
            db_user=output["DbUser"],
            db_password=output["DbPassword"],
            expiration=output["Expiration"],
        )

    async def describe_cluster(self, cluster_identifier: str) -> Dict[str, Any]:
        """
        Describe a single cluster.

        Raises:
            TargetNotFoundError: If no cluster has this identifier.
            RemoteCallFailedError: For any other DescribeClusters failure.
        """
        try:
            response = await run_sync(
                self.aws_client.describe_clusters, ClusterIdentifier=cluster_identifier
            )
        except AWS_CALL_ERRORS as e:
            if get_error_code(e) == CLUSTER_NOT_FOUND_ERROR_CODE:
                raise TargetNotFoundError(
                    f"cluster `{cluster_identifier}` is not found"
                ) from e
            raise RemoteCallFailedError.from_error("DescribeClusters", e) from e

        clusters = response.get("Clusters", [])
        if not clusters:
            raise TargetNotFoundError(f"cluster `{cluster_identifier}` is not found")
        return clusters[0]

    async def _backfill_endpoint(self, state: ResolutionState) -> None:
        try:
            cluster = await self.describe_cluster(state.cluster_identifier)
        except (RemoteCallFailedError, TargetNotFoundError) as e:
            cause = e.__cause__
            if cause is not None and is_access_denied(cause):
                logger.debug(
                    "failed to get endpoint info because redshift:DescribeClusters is AccessDenied"
                )
            else:
                logger.debug(f"failed to redshift:DescribeClusters, {e}")
            return
        endpoint = cluster.get("Endpoint") or {}
        state.set_endpoint(endpoint.get("Address"), endpoint.get("Port"))
