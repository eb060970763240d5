"""Output module for rendering a credential bundle.

A bundle can be printed as shell ``export`` lines, as a JSON or YAML
document, or merged into the environment of a child process. Fields that
are absent from the bundle never produce a line or key.
"""

from abc import ABC, abstractmethod
from typing import Dict, Type

from redshift_credentials.common.utils import format_timestamp
from redshift_credentials.credentials.models import CredentialBundle

# Field order of the structured documents
BUNDLE_FIELDS = (
    "workgroup_name",
    "cluster_identifier",
    "endpoint",
    "port",
    "db_password",
    "db_user",
    "expiration",
    "next_refresh_time",
)


def bundle_values(bundle: CredentialBundle) -> Dict[str, str]:
    """
    Flatten a bundle to strings, keyed by field name.

    The password is revealed and timestamps are formatted as RFC 3339; fields
    that are not set are left out.
    """
    values: Dict[str, str] = {}
    for name in BUNDLE_FIELDS:
        value = getattr(bundle, name)
        if value is None:
            continue
        if name == "db_password":
            values[name] = value.get_secret_value()
        elif name in ("expiration", "next_refresh_time"):
            values[name] = format_timestamp(value)
        else:
            values[name] = str(value)
    return values


class Output(ABC):
    """Base class for bundle renderers."""

    @abstractmethod
    def render(self, bundle: CredentialBundle) -> str:
        """Render ``bundle`` as text ready to be written to stdout."""
        raise NotImplementedError


def get_output(output_format: str, prefix: str = "") -> Output:
    """
    Get the renderer for an output format.

    Args:
        output_format: One of ``env``, ``json``, ``yaml`` or ``yml``.
        prefix: Variable name prefix, used by the ``env`` format only.

    Raises:
        ValueError: If the format is not supported.
    """
    from redshift_credentials.outputs.env import EnvOutput
    from redshift_credentials.outputs.json import JsonOutput
    from redshift_credentials.outputs.yaml import YamlOutput

    outputs: Dict[str, Type[Output]] = {
        "json": JsonOutput,
        "yaml": YamlOutput,
        "yml": YamlOutput,
    }
    output_format = output_format.lower()
    if output_format == "env":
        return EnvOutput(prefix)
    if output_format not in outputs:
        raise ValueError(f"Unsupported output format: {output_format}")
    return outputs[output_format]()
