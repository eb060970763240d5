"""Redshift target resolution and temporary credential fetching.

Quick Start:
    >>> from redshift_credentials.credentials import RedshiftCredentialsClient, Request
    >>>
    >>> client = RedshiftCredentialsClient.from_session(selector=PromptSelector())
    >>> bundle = await client.get_credentials(Request(endpoint=os.environ["REDSHIFT_ENDPOINT"]))

Resolution order:
    - An endpoint URL names a cluster or workgroup by its host.
    - An explicit cluster identifier or workgroup name is used as is.
    - Otherwise clusters and workgroups are enumerated and one is selected.
"""

from redshift_credentials.credentials.client import RedshiftCredentialsClient
from redshift_credentials.credentials.exceptions import (
    AmbiguousSelectionError,
    InvalidEndpointError,
    InvalidRequestError,
    NoTargetFoundError,
    RedshiftCredentialsError,
    RemoteCallFailedError,
    SelectionFailedError,
    TargetNotFoundError,
    UnresolvedTargetError,
)
from redshift_credentials.credentials.models import (
    CredentialBundle,
    DiscoveredTarget,
    Request,
    ResolutionState,
    TargetKind,
)
from redshift_credentials.credentials.selectors import (
    CommandSelector,
    PromptSelector,
    Selector,
    default_selector,
)

__all__ = [
    "AmbiguousSelectionError",
    "CommandSelector",
    "CredentialBundle",
    "DiscoveredTarget",
    "InvalidEndpointError",
    "InvalidRequestError",
    "NoTargetFoundError",
    "PromptSelector",
    "RedshiftCredentialsClient",
    "RedshiftCredentialsError",
    "RemoteCallFailedError",
    "Request",
    "ResolutionState",
    "SelectionFailedError",
    "Selector",
    "TargetKind",
    "TargetNotFoundError",
    "UnresolvedTargetError",
    "default_selector",
]
