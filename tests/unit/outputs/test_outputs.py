import orjson
import pytest
import yaml
from hypothesis import given

from redshift_credentials.credentials.models import CredentialBundle
from redshift_credentials.outputs import bundle_values, get_output
from redshift_credentials.outputs.env import (
    EnvOutput,
    build_environment,
    environment_pairs,
)
from redshift_credentials.outputs.json import JsonOutput, to_pascal_case
from redshift_credentials.outputs.yaml import YamlOutput
from tests.helpers import EXPIRATION, NEXT_REFRESH_TIME
from tests.hypothesis.strategies.credentials import minimal_bundle_strategy


@pytest.fixture
def provisioned_bundle() -> CredentialBundle:
    return CredentialBundle(
        cluster_identifier="analytics",
        endpoint="analytics.abc123.us-east-1.redshift.amazonaws.com",
        port="5439",
        db_user="IAM:admin",
        db_password="p@ss word$",
        expiration=EXPIRATION,
    )


@pytest.fixture
def serverless_bundle() -> CredentialBundle:
    return CredentialBundle(
        workgroup_name="default",
        db_user="IAMR:admin",
        db_password="serverless-secret",
        expiration=EXPIRATION,
        next_refresh_time=NEXT_REFRESH_TIME,
    )


class TestBundleValues:
    def test_reveals_password_and_formats_timestamps(self, serverless_bundle):
        assert bundle_values(serverless_bundle) == {
            "workgroup_name": "default",
            "db_password": "serverless-secret",
            "db_user": "IAMR:admin",
            "expiration": "2024-05-01T12:15:00Z",
            "next_refresh_time": "2024-05-01T12:45:00Z",
        }


class TestEnvOutput:
    def test_provisioned(self, provisioned_bundle):
        rendered = EnvOutput("REDSHIFT_").render(provisioned_bundle)

        assert rendered == (
            "export REDSHIFT_PROVISIONED_CLUSTER=analytics\n"
            "export REDSHIFT_HOST=analytics.abc123.us-east-1.redshift.amazonaws.com\n"
            "export REDSHIFT_PORT=5439\n"
            "export REDSHIFT_PASSWORD='p@ss word$'\n"
            "export REDSHIFT_USER=IAM:admin\n"
            "export REDSHIFT_EXPIRATION=2024-05-01T12:15:00Z\n"
        )

    def test_absent_fields_have_no_lines(self, serverless_bundle):
        rendered = EnvOutput("").render(serverless_bundle)

        assert "PROVISIONED_CLUSTER" not in rendered
        assert "HOST" not in rendered
        assert "PORT" not in rendered
        assert rendered.splitlines() == [
            "export SERVERLESS_WORKGROUP=default",
            "export PASSWORD=serverless-secret",
            "export USER=IAMR:admin",
            "export EXPIRATION=2024-05-01T12:15:00Z",
            "export NEXT_REFRESH_TIME=2024-05-01T12:45:00Z",
        ]

    def test_environment_pairs(self, serverless_bundle):
        names = [name for name, _ in environment_pairs(serverless_bundle, "RS_")]
        assert names == [
            "RS_SERVERLESS_WORKGROUP",
            "RS_PASSWORD",
            "RS_USER",
            "RS_EXPIRATION",
            "RS_NEXT_REFRESH_TIME",
        ]

    def test_build_environment_keeps_base(self, provisioned_bundle):
        base = {"PATH": "/usr/bin", "REDSHIFT_USER": "stale"}

        env = build_environment(provisioned_bundle, "REDSHIFT_", base=base)

        assert env["PATH"] == "/usr/bin"
        assert env["REDSHIFT_USER"] == "IAM:admin"
        assert env["REDSHIFT_PASSWORD"] == "p@ss word$"
        assert "REDSHIFT_NEXT_REFRESH_TIME" not in env
        assert base["REDSHIFT_USER"] == "stale"


class TestJsonOutput:
    def test_pascal_case_keys(self, serverless_bundle):
        document = orjson.loads(JsonOutput().render(serverless_bundle))

        assert document == {
            "WorkgroupName": "default",
            "DbPassword": "serverless-secret",
            "DbUser": "IAMR:admin",
            "Expiration": "2024-05-01T12:15:00Z",
            "NextRefreshTime": "2024-05-01T12:45:00Z",
        }

    def test_trailing_newline(self, provisioned_bundle):
        rendered = JsonOutput().render(provisioned_bundle)

        assert rendered.endswith("}\n")
        assert '"Port": "5439"' in rendered
        assert "NextRefreshTime" not in rendered

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("cluster_identifier", "ClusterIdentifier"),
            ("db_password", "DbPassword"),
            ("next_refresh_time", "NextRefreshTime"),
            ("endpoint", "Endpoint"),
        ],
    )
    def test_to_pascal_case(self, name, expected):
        assert to_pascal_case(name) == expected


class TestYamlOutput:
    def test_document(self, provisioned_bundle):
        rendered = YamlOutput().render(provisioned_bundle)
        document = yaml.safe_load(rendered)

        assert document == {
            "cluster_identifier": "analytics",
            "endpoint": "analytics.abc123.us-east-1.redshift.amazonaws.com",
            "port": "5439",
            "db_password": "p@ss word$",
            "db_user": "IAM:admin",
            "expiration": "2024-05-01T12:15:00Z",
        }
        assert list(document) == [
            "cluster_identifier",
            "endpoint",
            "port",
            "db_password",
            "db_user",
            "expiration",
        ]


class TestGetOutput:
    @pytest.mark.parametrize(
        "output_format,output_class",
        [
            ("env", EnvOutput),
            ("json", JsonOutput),
            ("yaml", YamlOutput),
            ("yml", YamlOutput),
            ("JSON", JsonOutput),
        ],
    )
    def test_formats(self, output_format, output_class):
        assert isinstance(get_output(output_format), output_class)

    def test_env_prefix(self):
        assert get_output("env", "PG_").prefix == "PG_"

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported output format"):
            get_output("toml")


class TestMinimalBundle:
    """A bundle with only the mandatory fields renders without placeholders."""

    @pytest.fixture
    def minimal_bundle(self) -> CredentialBundle:
        return CredentialBundle(
            db_user="IAM:admin", db_password="secret", expiration=EXPIRATION
        )

    def test_env(self, minimal_bundle):
        lines = get_output("env", "REDSHIFT_").render(minimal_bundle).splitlines()

        assert lines == [
            "export REDSHIFT_PASSWORD=secret",
            "export REDSHIFT_USER=IAM:admin",
            "export REDSHIFT_EXPIRATION=2024-05-01T12:15:00Z",
        ]

    @pytest.mark.parametrize(
        "output_format,load,keys",
        [
            ("json", orjson.loads, ["DbPassword", "DbUser", "Expiration"]),
            ("yaml", yaml.safe_load, ["db_password", "db_user", "expiration"]),
            ("yml", yaml.safe_load, ["db_password", "db_user", "expiration"]),
        ],
    )
    def test_structured(self, minimal_bundle, output_format, load, keys):
        rendered = get_output(output_format).render(minimal_bundle)
        document = load(rendered)

        assert list(document) == keys
        assert all(isinstance(value, str) and value for value in document.values())
        assert "null" not in rendered
        assert "None" not in rendered

    @given(bundle=minimal_bundle_strategy)
    def test_env_has_one_line_per_field(self, bundle):
        lines = EnvOutput("").render(bundle).splitlines()

        assert [line.split("=", 1)[0] for line in lines] == [
            "export PASSWORD",
            "export USER",
            "export EXPIRATION",
        ]
        assert all(line.split("=", 1)[1] for line in lines)
