"""Custom exceptions for credential resolution.

Each failure mode of resolving a Redshift target and fetching its temporary
credentials has its own exception class, so callers can react to a specific
condition or catch :class:`RedshiftCredentialsError` for all of them.
"""

from typing import Optional

from redshift_credentials.common.aws_utils import get_error_code
from redshift_credentials.common.error_codes import ERROR_CODES, ErrorCode


class RedshiftCredentialsError(Exception):
    """Base exception for credential resolution.

    Attributes:
        error_code: Stable error code describing the failure category.
    """

    default_code = "REDSHIFT_CREDENTIALS_ERROR"

    def __init__(self, message: str, error_code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.error_code = error_code or ERROR_CODES[self.default_code]


class InvalidRequestError(RedshiftCredentialsError):
    """Raised when the request itself is contradictory or out of range.

    Example:
        >>> raise InvalidRequestError(
        ...     "cluster_identifier and workgroup_name are mutually exclusive"
        ... )
    """

    default_code = "INVALID_REQUEST_ERROR"


class InvalidEndpointError(RedshiftCredentialsError):
    """Raised when the endpoint can not be parsed as a URL with a host."""

    default_code = "INVALID_ENDPOINT_ERROR"


class NoTargetFoundError(RedshiftCredentialsError):
    """Raised when discovery finds neither clusters nor workgroups."""

    default_code = "NO_TARGET_FOUND_ERROR"


class AmbiguousSelectionError(RedshiftCredentialsError):
    """Raised when several targets were found and no selector is configured.

    Attributes:
        candidates: Number of targets that were found.
    """

    default_code = "AMBIGUOUS_SELECTION_ERROR"

    def __init__(self, message: str, candidates: int = 0):
        super().__init__(message)
        self.candidates = candidates


class SelectionFailedError(RedshiftCredentialsError):
    """Raised when the selector fails or returns a line that was not offered."""

    default_code = "SELECTION_FAILED_ERROR"


class TargetNotFoundError(RedshiftCredentialsError):
    """Raised when a named cluster does not exist."""

    default_code = "TARGET_NOT_FOUND_ERROR"


class UnresolvedTargetError(RedshiftCredentialsError):
    """Raised when resolution ends with neither a cluster nor a workgroup."""

    default_code = "UNRESOLVED_TARGET_ERROR"


class RemoteCallFailedError(RedshiftCredentialsError):
    """Raised when an AWS API call fails for a reason other than AccessDenied
    on a discovery call.

    The botocore exception is chained as ``__cause__``.

    Attributes:
        operation: Name of the AWS operation, e.g. ``GetClusterCredentials``.
        error_code_name: AWS error code when the service returned one.

    Example:
        >>> raise RemoteCallFailedError(
        ...     "GetClusterCredentials", "User is not authorized", "UnauthorizedOperation"
        ... )
    """

    default_code = "REMOTE_CALL_ERROR"

    def __init__(
        self, operation: str, message: str, error_code_name: Optional[str] = None
    ):
        super().__init__(f"failed to {operation}, {message}")
        self.operation = operation
        self.error_code_name = error_code_name

    @classmethod
    def from_error(
        cls, operation: str, error: BaseException
    ) -> "RemoteCallFailedError":
        """Build from a botocore exception, keeping its AWS error code."""
        return cls(operation, str(error), get_error_code(error))
