import os
import shlex
from typing import Dict, List, Mapping, Optional, Tuple

from redshift_credentials.constants import DEFAULT_ENV_PREFIX
from redshift_credentials.credentials.models import CredentialBundle
from redshift_credentials.outputs import Output, bundle_values

# (bundle field, variable name without prefix), in export order
ENV_VARIABLES: Tuple[Tuple[str, str], ...] = (
    ("cluster_identifier", "PROVISIONED_CLUSTER"),
    ("workgroup_name", "SERVERLESS_WORKGROUP"),
    ("endpoint", "HOST"),
    ("port", "PORT"),
    ("db_password", "PASSWORD"),
    ("db_user", "USER"),
    ("expiration", "EXPIRATION"),
    ("next_refresh_time", "NEXT_REFRESH_TIME"),
)


def environment_pairs(
    bundle: CredentialBundle, prefix: str = DEFAULT_ENV_PREFIX
) -> List[Tuple[str, str]]:
    """Variable name and value for every field set on ``bundle``."""
    values = bundle_values(bundle)
    return [
        (f"{prefix}{name}", values[field])
        for field, name in ENV_VARIABLES
        if field in values
    ]


def build_environment(
    bundle: CredentialBundle,
    prefix: str = DEFAULT_ENV_PREFIX,
    base: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Merge the bundle into a copy of a process environment.

    Args:
        bundle: Credentials to expose.
        prefix: Prefix for every variable name, e.g. ``REDSHIFT_``.
        base: Environment to start from; defaults to ``os.environ``.

    Returns:
        Dict[str, str]: Environment for the child process.
    """
    env = dict(os.environ if base is None else base)
    env.update(environment_pairs(bundle, prefix))
    return env


class EnvOutput(Output):
    """Shell ``export NAME=value`` lines, suitable for ``eval``."""

    def __init__(self, prefix: str = DEFAULT_ENV_PREFIX):
        self.prefix = prefix

    def render(self, bundle: CredentialBundle) -> str:
        return "".join(
            f"export {name}={shlex.quote(value)}\n"
            for name, value in environment_pairs(bundle, self.prefix)
        )
