import orjson

from redshift_credentials.credentials.models import CredentialBundle
from redshift_credentials.outputs import Output, bundle_values


def to_pascal_case(name: str) -> str:
    """``db_password`` -> ``DbPassword``"""
    return "".join(part.capitalize() for part in name.split("_"))


class JsonOutput(Output):
    """Indented JSON object with PascalCase keys."""

    def render(self, bundle: CredentialBundle) -> str:
        document = {
            to_pascal_case(name): value for name, value in bundle_values(bundle).items()
        }
        return orjson.dumps(
            document, option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE
        ).decode("utf-8")
