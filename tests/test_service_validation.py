"""Tests for fail-fast input validation of service declarations."""
import dataclasses

import pulumi
import pytest

from homelab.core.errors import MissingInputError
from homelab.docker_services import DOCKER_SERVICES
from homelab.docker_services.caddy import CaddyDockerService
from homelab.docker_services.coder import CoderDockerService
from homelab.docker_services.tailscale import TailscaleDockerService
from homelab.kube_services import KUBE_SERVICES

DOCKER_CASES = [
    (name, field)
    for name, service in DOCKER_SERVICES.items()
    for field in service.required_inputs()
]
KUBE_CASES = [
    (name, field)
    for name, service in KUBE_SERVICES.items()
    for field in service.required_inputs()
]


def _blank(args, field):
    """Return ``args`` with the dotted input ``field`` unset."""
    path = field.split(".")[1:]
    if path[0] == "settings" and len(path) == 2:
        return dataclasses.replace(args, settings=dataclasses.replace(args.settings, **{path[1]: None}))
    return dataclasses.replace(args, **{path[0]: None})


@pytest.fixture
def registrations(monkeypatch):
    """Record every ComponentResource registration."""
    calls = []
    original = pulumi.ComponentResource.__init__

    def spy(self, t, name, *args, **kwargs):
        calls.append((t, name))
        original(self, t, name, *args, **kwargs)

    monkeypatch.setattr(pulumi.ComponentResource, "__init__", spy)
    return calls


class TestRequiredInputs:
    """Test the declared required inputs of each service."""

    def test_storage_backed_service_checks_shared_inputs_first(self):
        assert CaddyDockerService.required_inputs() == [
            "args.network",
            "args.storage",
            "args.sftp_base_path",
            "args.platform",
        ]

    def test_settings_follow_shared_inputs(self):
        inputs = CoderDockerService.required_inputs()
        assert inputs[:4] == ["args.network", "args.storage", "args.sftp_base_path", "args.platform"]
        assert "args.settings.postgres_password" in inputs
        assert "args.settings.access_url" in inputs

    def test_stateless_services_skip_storage(self):
        inputs = TailscaleDockerService.required_inputs()
        assert "args.storage" not in inputs
        assert "args.sftp_base_path" not in inputs
        assert "args.settings.auth_key" in inputs

    def test_tailscale_declares_without_base_path(self, service_args):
        args = service_args(TailscaleDockerService, storage=None, sftp_base_path=None)
        component = TailscaleDockerService("tailscale", args)
        assert "tailscale" in component.containers

    def test_optional_settings_are_not_required(self):
        assert "args.settings.cluster_name" not in DOCKER_SERVICES["concourse"].required_inputs()

    def test_kube_services_require_provider_and_domain(self):
        for service in KUBE_SERVICES.values():
            inputs = service.required_inputs()
            assert "args.provider" in inputs
            assert "args.domain" in inputs


@pytest.mark.parametrize("name,field", DOCKER_CASES)
def test_docker_service_fails_fast_on_missing_input(name, field, service_args, registrations):
    """Should raise before the component registers anything."""
    service = DOCKER_SERVICES[name]
    args = _blank(service_args(service), field)

    with pytest.raises(MissingInputError) as exc_info:
        service(name, args)

    assert exc_info.value.field == field
    assert f"{service.TYPE} '{name}'" in str(exc_info.value)
    assert f"{field} must be provided" in str(exc_info.value)
    assert registrations == []


@pytest.mark.parametrize("name,field", KUBE_CASES)
def test_kube_service_fails_fast_on_missing_input(name, field, kube_args, registrations):
    service = KUBE_SERVICES[name]
    args = _blank(kube_args(service), field)

    with pytest.raises(MissingInputError) as exc_info:
        service(name, args)

    assert exc_info.value.field == field
    assert registrations == []


class TestMissingValues:
    """Test what counts as a missing input."""

    def test_no_args(self, registrations):
        with pytest.raises(MissingInputError, match="args must be provided"):
            CaddyDockerService("caddy", None)
        assert registrations == []

    def test_empty_string_counts_as_missing(self, service_args):
        args = service_args(CaddyDockerService, sftp_base_path="")
        with pytest.raises(MissingInputError, match="args.sftp_base_path"):
            CaddyDockerService("caddy", args)

    def test_first_missing_input_is_reported(self, service_args):
        args = service_args(CaddyDockerService, network=None, platform=None)
        with pytest.raises(MissingInputError) as exc_info:
            CaddyDockerService("caddy", args)
        assert exc_info.value.field == "args.network"

    def test_missing_settings_record(self, service_args):
        args = service_args(CoderDockerService, settings=None)
        with pytest.raises(MissingInputError) as exc_info:
            CoderDockerService("coder", args)
        assert exc_info.value.field == "args.settings"

    def test_missing_input_is_a_run_error(self, service_args):
        """The engine reports RunError messages without a traceback."""
        with pytest.raises(pulumi.RunError):
            CaddyDockerService("caddy", service_args(CaddyDockerService, platform=None))

    def test_outputs_count_as_present(self, service_args):
        args = service_args(CaddyDockerService, sftp_base_path=pulumi.Output.from_input("/srv"))
        CaddyDockerService.validate("caddy", args)

    def test_settings_default_when_none_are_required(self, service_args):
        """Services whose settings are all optional get the defaults."""
        grafana = DOCKER_SERVICES["grafana"]("grafana", service_args(DOCKER_SERVICES["grafana"], settings=None))
        assert grafana.resources["grafana"] is not None
