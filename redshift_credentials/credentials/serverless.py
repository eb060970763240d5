"""Temporary credentials for a Redshift Serverless workgroup."""

from typing import Any, Dict

from redshift_credentials.common.aws_utils import AWS_CALL_ERRORS, is_access_denied
from redshift_credentials.common.utils import run_sync
from redshift_credentials.credentials.exceptions import RemoteCallFailedError
from redshift_credentials.credentials.models import CredentialBundle, ResolutionState
from redshift_credentials.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


class ServerlessCredentialFetcher:
    """Issues ``GetCredentials`` for a resolved workgroup.

    Serverless credentials rotate server side, so the bundle carries the
    ``nextRefreshTime`` returned by the service.
    """

    def __init__(self, aws_client: Any):
        self.aws_client = aws_client

    async def fetch(self, state: ResolutionState) -> CredentialBundle:
        """
        Fetch credentials for ``state.workgroup_name``.

        Raises:
            RemoteCallFailedError: If GetCredentials failed.
        """
        params: Dict[str, Any] = {"workgroupName": state.workgroup_name}
        if state.db_name is not None:
            params["dbName"] = state.db_name
        if state.duration_seconds is not None:
            params["durationSeconds"] = state.duration_seconds
        try:
            output = await run_sync(self.aws_client.get_credentials, **params)
        except AWS_CALL_ERRORS as e:
            raise RemoteCallFailedError.from_error("GetCredentials", e) from e

        if state.address is None:
            await self._backfill_endpoint(state)

        return CredentialBundle(
            workgroup_name=state.workgroup_name,
            endpoint=state.address,
            port=state.port,
            db_user=output["dbUser"],
            db_password=output["dbPassword"],
            expiration=output["expiration"],
            next_refresh_time=output.get("nextRefreshTime"),
        )

    async def _backfill_endpoint(self, state: ResolutionState) -> None:
        try:
            response = await run_sync(
                self.aws_client.get_workgroup, workgroupName=state.workgroup_name
            )
        except AWS_CALL_ERRORS as e:
            if is_access_denied(e):
                logger.debug(
                    "failed to get endpoint info because redshift-serverless:GetWorkgroup is AccessDenied"
                )
            else:
                logger.debug(f"failed to redshift-serverless:GetWorkgroup, {e}")
            return
        endpoint = (response.get("workgroup") or {}).get("endpoint") or {}
        state.set_endpoint(endpoint.get("address"), endpoint.get("port"))
