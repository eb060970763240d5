"""Resolve partial caller input to exactly one Redshift target.

Resolution runs in two steps on a :class:`ResolutionState`:

1. If an endpoint URL was given, its host decides the target: hosts under
   ``.redshift.amazonaws.com`` name a provisioned cluster and hosts under
   ``.redshift-serverless.amazonaws.com`` a serverless workgroup, in both cases
   by their first DNS label. The URL path gives the database name.
2. If no target is known yet, the account's clusters (and, when no database
   user was requested, its workgroups) are enumerated. A single candidate is
   used as is; several are handed to the configured selector.

A permission-denied answer while enumerating one kind of target only means
that kind is skipped; every other AWS failure aborts resolution.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlsplit

from redshift_credentials.common.aws_utils import (
    AWS_CALL_ERRORS,
    is_access_denied,
    paginate,
)
from redshift_credentials.common.utils import call_maybe_async
from redshift_credentials.constants import (
    PROVISIONED_DOMAIN_SUFFIX,
    SERVERLESS_DOMAIN_SUFFIX,
)
from redshift_credentials.credentials.exceptions import (
    AmbiguousSelectionError,
    InvalidEndpointError,
    InvalidRequestError,
    NoTargetFoundError,
    RemoteCallFailedError,
    SelectionFailedError,
)
from redshift_credentials.credentials.models import (
    DiscoveredTarget,
    ResolutionState,
    TargetKind,
)
from redshift_credentials.credentials.selectors import SelectorLike
from redshift_credentials.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Enumeration:
    """How to list one kind of target."""

    kind: TargetKind
    operation: str
    paginator: str
    result_key: str
    permission: str
    factory: Callable[[Dict[str, Any]], DiscoveredTarget]


PROVISIONED_ENUMERATION = _Enumeration(
    kind=TargetKind.PROVISIONED,
    operation="DescribeClusters",
    paginator="describe_clusters",
    result_key="Clusters",
    permission="redshift:DescribeClusters",
    factory=DiscoveredTarget.from_cluster,
)

SERVERLESS_ENUMERATION = _Enumeration(
    kind=TargetKind.SERVERLESS,
    operation="ListWorkgroups",
    paginator="list_workgroups",
    result_key="workgroups",
    permission="redshift-serverless:ListWorkgroups",
    factory=DiscoveredTarget.from_workgroup,
)


def apply_endpoint(state: ResolutionState) -> None:
    """
    Derive target, database name and network address from ``state.endpoint``.

    Schemeless endpoints (``host:5439/dev``) and JDBC URLs
    (``jdbc:redshift://host:5439/dev``) are accepted as well.

    Args:
        state: Resolution state with ``endpoint`` set.

    Raises:
        InvalidEndpointError: If the endpoint has no parseable host or port.
        InvalidRequestError: If the endpoint names a different kind of target
            than an identifier given explicitly.
    """
    raw = state.endpoint or ""
    text = raw[len("jdbc:") :] if raw.startswith("jdbc:") else raw
    if "//" not in text:
        text = f"//{text}"
    try:
        parsed = urlsplit(text)
        host = parsed.hostname
        port = parsed.port
    except ValueError as e:
        raise InvalidEndpointError(f"endpoint can not parse as URL, {e}") from e
    if not host:
        raise InvalidEndpointError(f"endpoint can not parse as URL, no host in {raw!r}")

    label = host.split(".")[0]
    if host.endswith(PROVISIONED_DOMAIN_SUFFIX):
        if state.workgroup_name:
            raise InvalidRequestError(
                f"endpoint {host} is a provisioned cluster but workgroup {state.workgroup_name} was given"
            )
        state.cluster_identifier = label
    elif host.endswith(SERVERLESS_DOMAIN_SUFFIX):
        if state.cluster_identifier:
            raise InvalidRequestError(
                f"endpoint {host} is a serverless workgroup but cluster {state.cluster_identifier} was given"
            )
        state.workgroup_name = label

    if state.db_name is None:
        db_name = parsed.path.lstrip("/")
        if db_name:
            state.db_name = db_name
    state.set_endpoint(host, port)
    logger.debug(f"endpoint parsed as host={host} port={port}")


def apply_target(state: ResolutionState, target: DiscoveredTarget) -> None:
    """Record the selected target on the state, filling provisioned defaults."""
    if target.kind is TargetKind.PROVISIONED:
        state.cluster_identifier = target.identifier
        if state.db_user is None:
            state.db_user = target.master_user
        if state.db_name is None:
            state.db_name = target.initial_db_name
    else:
        state.workgroup_name = target.identifier
    state.address = target.address
    state.port = target.port


class TargetResolver:
    """Turns partial caller input into exactly one cluster or workgroup.

    Args:
        provisioned_client: boto3 ``redshift`` client.
        serverless_client: boto3 ``redshift-serverless`` client.
        selector: Strategy used when several targets are found. Without one,
            several targets are an error.
    """

    def __init__(
        self,
        provisioned_client: Any,
        serverless_client: Any,
        selector: Optional[SelectorLike] = None,
    ):
        self.provisioned_client = provisioned_client
        self.serverless_client = serverless_client
        self.selector = selector

    async def resolve(self, state: ResolutionState) -> ResolutionState:
        """
        Fill in ``state`` until it names exactly one target.

        Remote calls are only made when neither a cluster identifier nor a
        workgroup name is known after endpoint parsing.

        Raises:
            InvalidEndpointError: If the endpoint can not be parsed.
            NoTargetFoundError: If discovery found nothing.
            AmbiguousSelectionError: If several targets were found and there is no selector.
            SelectionFailedError: If the selector failed or returned an unknown line.
            RemoteCallFailedError: If an enumeration call failed other than AccessDenied.
        """
        if state.endpoint is not None:
            apply_endpoint(state)
        if state.has_target:
            return state

        targets = await self.discover(include_serverless=state.db_user is None)
        if not targets:
            raise NoTargetFoundError(
                "input parameters endpoint, workgroup name and cluster identifier were not given, "
                "and no Redshift cluster or workgroup could be found"
            )
        selected = await self.select(targets)
        apply_target(state, selected)
        return state

    async def discover(self, include_serverless: bool = True) -> List[DiscoveredTarget]:
        """
        List candidate targets, provisioned clusters first.

        Args:
            include_serverless: Also list serverless workgroups. Skipped when
                a database user was requested, which only clusters accept.
        """
        targets = await self._enumerate(self.provisioned_client, PROVISIONED_ENUMERATION)
        if include_serverless:
            targets += await self._enumerate(self.serverless_client, SERVERLESS_ENUMERATION)
        logger.debug(f"redshift {len(targets)} found")
        return targets

    async def _enumerate(
        self, aws_client: Any, enumeration: _Enumeration
    ) -> List[DiscoveredTarget]:
        targets: List[DiscoveredTarget] = []
        try:
            async for page in paginate(aws_client, enumeration.paginator):
                for item in page.get(enumeration.result_key, []):
                    target = enumeration.factory(item)
                    logger.debug(f"{target} is found")
                    targets.append(target)
        except AWS_CALL_ERRORS as e:
            if not is_access_denied(e):
                raise RemoteCallFailedError.from_error(enumeration.operation, e) from e
            # keep what earlier pages returned
            logger.warning(
                f"Assume that the Redshift {enumeration.kind.value} does not exist because "
                f"{enumeration.permission} is AccessDenied"
            )
        return targets

    async def select(self, targets: List[DiscoveredTarget]) -> DiscoveredTarget:
        """
        Choose one target, asking the selector only when there are several.

        Raises:
            AmbiguousSelectionError: If there are several targets and no selector.
            SelectionFailedError: If the selector failed or returned an unknown line.
        """
        if len(targets) == 1:
            return targets[0]
        if self.selector is None:
            raise AmbiguousSelectionError(
                f"automatic selection was not possible because {len(targets)} redshifts were found",
                candidates=len(targets),
            )

        items = {target.line(index): target for index, target in enumerate(targets, start=1)}
        select_func = getattr(self.selector, "select", self.selector)
        try:
            selected_line = await call_maybe_async(select_func, list(items))
        except SelectionFailedError:
            raise
        except Exception as e:
            raise SelectionFailedError(f"manual selection was failed, {e}") from e

        selected = items.get(selected_line)
        if selected is None:
            raise SelectionFailedError(
                "manual selection was failed, selector returned an invalid line"
            )
        logger.debug(f"redshift {selected} selected")
        return selected
