import yaml

from redshift_credentials.credentials.models import CredentialBundle
from redshift_credentials.outputs import Output, bundle_values


class YamlOutput(Output):
    """YAML mapping with snake_case keys."""

    def render(self, bundle: CredentialBundle) -> str:
        return yaml.safe_dump(
            bundle_values(bundle), default_flow_style=False, sort_keys=False
        )
