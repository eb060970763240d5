import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from redshift_credentials.credentials.exceptions import InvalidRequestError
from redshift_credentials.credentials.models import (
    CredentialBundle,
    DiscoveredTarget,
    Request,
    ResolutionState,
    TargetKind,
)
from tests.helpers import EXPIRATION, cluster, workgroup
from tests.hypothesis.strategies.credentials import (
    credential_bundle_strategy,
    request_strategy,
)


class TestRequest:
    def test_empty_strings_are_not_given(self):
        request = Request.create(
            endpoint="",
            workgroup_name=" ",
            cluster_identifier="",
            db_user="",
            db_name="",
            duration_seconds=0,
        )
        assert request == Request()

    @pytest.mark.parametrize("duration", [900, 1800, 3600])
    def test_duration_in_range(self, duration: int):
        assert Request(duration_seconds=duration).duration_seconds == duration

    @pytest.mark.parametrize("duration", [899, 3601, -1])
    def test_duration_out_of_range(self, duration: int):
        with pytest.raises(InvalidRequestError):
            Request.create(duration_seconds=duration)

    def test_both_identifiers_rejected(self):
        with pytest.raises(InvalidRequestError):
            Request.create(cluster_identifier="alpha", workgroup_name="beta")

    def test_frozen(self):
        request = Request(cluster_identifier="alpha")
        with pytest.raises(ValidationError):
            request.cluster_identifier = "beta"

    @given(request=request_strategy)
    def test_state_copies_request(self, request: Request):
        state = ResolutionState.from_request(request)

        assert state.endpoint == request.endpoint
        assert state.workgroup_name == request.workgroup_name
        assert state.cluster_identifier == request.cluster_identifier
        assert state.db_user == request.db_user
        assert state.db_name == request.db_name
        assert state.duration_seconds == request.duration_seconds
        assert state.address is None
        assert state.port is None


class TestResolutionState:
    def test_has_target(self):
        assert not ResolutionState().has_target
        assert ResolutionState(cluster_identifier="alpha").has_target
        assert ResolutionState(workgroup_name="beta").has_target

    def test_set_endpoint(self):
        state = ResolutionState()
        state.set_endpoint("alpha.example.com", 5439)
        assert (state.address, state.port) == ("alpha.example.com", "5439")

        state.set_endpoint("", None)
        assert (state.address, state.port) == (None, None)


class TestDiscoveredTarget:
    def test_from_cluster(self):
        target = DiscoveredTarget.from_cluster(cluster("alpha", master_user="root"))

        assert target.kind is TargetKind.PROVISIONED
        assert target.identifier == "alpha"
        assert target.master_user == "root"
        assert target.initial_db_name == "dev"
        assert target.port == "5439"
        assert target.line(3) == (
            "[3] alpha\tprovisioned cluster\talpha.abc123.us-east-1.redshift.amazonaws.com"
        )

    def test_from_workgroup(self):
        target = DiscoveredTarget.from_workgroup(workgroup("beta"))

        assert target.kind is TargetKind.SERVERLESS
        assert str(target) == "beta\tserverless workgroup"
        assert target.master_user is None

    def test_missing_endpoint(self):
        target = DiscoveredTarget.from_cluster({"ClusterIdentifier": "creating"})

        assert target.address is None
        assert target.port is None
        assert target.line(1) == "[1] creating\tprovisioned cluster\t"


class TestCredentialBundle:
    def test_password_is_masked(self):
        bundle = CredentialBundle(
            cluster_identifier="alpha",
            db_user="IAM:admin",
            db_password="hunter2",
            expiration=EXPIRATION,
        )

        assert "hunter2" not in repr(bundle)
        assert "hunter2" not in str(bundle)
        assert bundle.db_password.get_secret_value() == "hunter2"
        assert bundle.kind is TargetKind.PROVISIONED

    @given(bundle=credential_bundle_strategy)
    def test_kind_follows_identifier(self, bundle: CredentialBundle):
        if bundle.cluster_identifier:
            assert bundle.kind is TargetKind.PROVISIONED
        else:
            assert bundle.kind is TargetKind.SERVERLESS
            assert bundle.workgroup_name
