"""Temporary credentials for Amazon Redshift provisioned clusters and serverless workgroups."""

from redshift_credentials.constants import VERSION
from redshift_credentials.credentials import (
    CredentialBundle,
    RedshiftCredentialsClient,
    RedshiftCredentialsError,
    Request,
)

__version__ = VERSION

__all__ = [
    "CredentialBundle",
    "RedshiftCredentialsClient",
    "RedshiftCredentialsError",
    "Request",
    "__version__",
]
