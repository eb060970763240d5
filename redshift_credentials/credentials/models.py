"""Data types for resolving a Redshift target and describing its credentials.

- :class:`Request` is what the caller asks for and never changes.
- :class:`ResolutionState` is the resolver's private working copy.
- :class:`DiscoveredTarget` is one cluster or workgroup found during discovery.
- :class:`CredentialBundle` is the immutable result handed to the output adapter.

Example:
    >>> request = Request(endpoint="https://mycluster.abc.us-east-1.redshift.amazonaws.com:5439/dev")
    >>> state = ResolutionState.from_request(request)
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
    model_validator,
)

from redshift_credentials.constants import MAX_DURATION_SECONDS, MIN_DURATION_SECONDS
from redshift_credentials.credentials.exceptions import InvalidRequestError


class TargetKind(Enum):
    """The two kinds of Redshift compute a credential can be issued for."""

    PROVISIONED = "provisioned cluster"
    SERVERLESS = "serverless workgroup"


class Request(BaseModel):
    """Caller input: any subset of endpoint, identifiers and overrides.

    Empty strings are treated as not given, so command line defaults can be
    passed straight through.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: Optional[str] = None
    workgroup_name: Optional[str] = None
    cluster_identifier: Optional[str] = None
    db_user: Optional[str] = None
    db_name: Optional[str] = None
    duration_seconds: Optional[int] = Field(
        default=None, ge=MIN_DURATION_SECONDS, le=MAX_DURATION_SECONDS
    )

    @field_validator(
        "endpoint",
        "workgroup_name",
        "cluster_identifier",
        "db_user",
        "db_name",
        mode="before",
    )
    @classmethod
    def _empty_as_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("duration_seconds", mode="before")
    @classmethod
    def _zero_as_none(cls, value: Any) -> Any:
        if value == 0 or value == "":
            return None
        return value

    @classmethod
    def create(cls, **fields: Any) -> "Request":
        """Validate ``fields`` into a request, raising InvalidRequestError on bad input."""
        try:
            return cls(**fields)
        except ValidationError as e:
            raise InvalidRequestError(f"invalid request, {e}") from e

    @model_validator(mode="after")
    def _single_identifier(self) -> "Request":
        if self.workgroup_name and self.cluster_identifier:
            raise ValueError(
                "cluster_identifier and workgroup_name are mutually exclusive"
            )
        return self


@dataclass
class ResolutionState:
    """Mutable working record owned by a single resolution call.

    ``address`` and ``port`` are filled in by the resolver and fetchers; the
    caller never sees this object.
    """

    endpoint: Optional[str] = None
    workgroup_name: Optional[str] = None
    cluster_identifier: Optional[str] = None
    db_user: Optional[str] = None
    db_name: Optional[str] = None
    duration_seconds: Optional[int] = None
    address: Optional[str] = None
    port: Optional[str] = None

    @classmethod
    def from_request(cls, request: Request) -> "ResolutionState":
        return cls(
            endpoint=request.endpoint,
            workgroup_name=request.workgroup_name,
            cluster_identifier=request.cluster_identifier,
            db_user=request.db_user,
            db_name=request.db_name,
            duration_seconds=request.duration_seconds,
        )

    @property
    def has_target(self) -> bool:
        return bool(self.cluster_identifier or self.workgroup_name)

    def set_endpoint(self, address: Optional[str], port: Any) -> None:
        self.address = address or None
        self.port = str(port) if port is not None else None


@dataclass
class DiscoveredTarget:
    """A cluster or workgroup found while enumerating the account."""

    kind: TargetKind
    identifier: str
    master_user: Optional[str] = None
    initial_db_name: Optional[str] = None
    address: Optional[str] = None
    port: Optional[str] = None

    @classmethod
    def from_cluster(cls, cluster: Dict[str, Any]) -> "DiscoveredTarget":
        """Build from a ``DescribeClusters`` entry."""
        endpoint = cluster.get("Endpoint") or {}
        port = endpoint.get("Port")
        return cls(
            kind=TargetKind.PROVISIONED,
            identifier=cluster["ClusterIdentifier"],
            master_user=cluster.get("MasterUsername"),
            initial_db_name=cluster.get("DBName"),
            address=endpoint.get("Address"),
            port=str(port) if port is not None else None,
        )

    @classmethod
    def from_workgroup(cls, workgroup: Dict[str, Any]) -> "DiscoveredTarget":
        """Build from a ``ListWorkgroups`` entry."""
        endpoint = workgroup.get("endpoint") or {}
        port = endpoint.get("port")
        return cls(
            kind=TargetKind.SERVERLESS,
            identifier=workgroup["workgroupName"],
            address=endpoint.get("address"),
            port=str(port) if port is not None else None,
        )

    def __str__(self) -> str:
        return f"{self.identifier}\t{self.kind.value}"

    def line(self, index: int) -> str:
        """Selection line shown to the selector, ``index`` counting from 1."""
        return f"[{index}] {self}\t{self.address or ''}"


class CredentialBundle(BaseModel):
    """Temporary credentials for one Redshift target.

    ``db_password`` is a ``SecretStr`` so it stays masked in logs and reprs;
    renderers read it with ``get_secret_value()``. ``next_refresh_time`` is
    only ever set for serverless workgroups.
    """

    model_config = ConfigDict(frozen=True)

    workgroup_name: Optional[str] = None
    cluster_identifier: Optional[str] = None
    endpoint: Optional[str] = None
    port: Optional[str] = None
    db_user: str
    db_password: SecretStr
    expiration: datetime
    next_refresh_time: Optional[datetime] = None

    @property
    def kind(self) -> TargetKind:
        if self.cluster_identifier:
            return TargetKind.PROVISIONED
        return TargetKind.SERVERLESS
