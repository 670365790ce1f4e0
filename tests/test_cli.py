"""Tests for the homelab CLI."""
import pytest
from typer.testing import CliRunner

from homelab.cli import app

runner = CliRunner()
WIDE = {"COLUMNS": "200"}


def invoke(*args):
    return runner.invoke(app, list(args), env=WIDE)


class TestServicesCommand:
    """Test the catalog listing."""

    def test_lists_docker_and_kube_services(self):
        result = invoke("services")
        assert result.exit_code == 0
        assert "docker.caddy" in result.output
        assert "kube.registry" in result.output

    def test_kind_filter(self):
        result = invoke("services", "--kind", "kube")
        assert result.exit_code == 0
        assert "registry" in result.output
        assert "caddy" not in result.output

    def test_unknown_kind(self):
        result = invoke("services", "--kind", "nomad")
        assert result.exit_code == 1
        assert "Unknown service kind" in result.output


class TestKeysCommand:
    """Test config key hints."""

    def test_required_and_optional_keys(self):
        result = invoke("keys", "concourse")
        assert result.exit_code == 0
        assert "pulumi config set --secret homelab:concourse.postgres_password '<value>'" in result.output
        assert "# optional: pulumi config set homelab:concourse.cluster_name 'dev'" in result.output

    def test_project_name(self):
        result = invoke("keys", "kube.registry", "--project", "lab")
        assert result.exit_code == 0
        assert "lab:kube.registry.domain" in result.output

    def test_service_without_settings(self):
        result = invoke("keys", "caddy")
        assert result.exit_code == 0
        assert "needs no service settings" in result.output

    def test_unknown_service(self):
        result = invoke("keys", "nextcloud")
        assert result.exit_code == 1
        assert "Unknown service 'nextcloud'" in result.output


class TestCheckCommand:
    """Test the stack file check."""

    @pytest.fixture
    def stack_file(self, tmp_path):
        path = tmp_path / "Pulumi.dev.yaml"
        path.write_text(
            "config:\n"
            "  homelab:docker.platform: linux/amd64\n"
            "  homelab:docker.services: [tailscale]\n"
        )
        return path

    def test_missing_keys_exit_1(self, stack_file):
        result = invoke("check", str(stack_file))
        assert result.exit_code == 1
        assert "homelab:tailscale.auth_key is not set" in result.output

    def test_complete_stack(self, stack_file):
        stack_file.write_text(
            stack_file.read_text() + "  homelab:tailscale.auth_key:\n    secure: v1:key\n"
        )
        result = invoke("check", str(stack_file))
        assert result.exit_code == 0
        assert "All required keys are set" in result.output

    def test_missing_file(self, tmp_path):
        result = invoke("check", str(tmp_path / "Pulumi.none.yaml"))
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_error_without_traceback(self, tmp_path):
        result = invoke("check", str(tmp_path / "Pulumi.none.yaml"))
        assert "Traceback" not in result.output

    def test_verbose_error_prints_traceback(self, tmp_path):
        result = invoke("--verbose", "check", str(tmp_path / "Pulumi.none.yaml"))
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Traceback" in result.output

    def test_verbose_and_log_file(self, stack_file, tmp_path):
        log_file = tmp_path / "homelab.log"
        result = invoke("--verbose", "--log-file", str(log_file), "check", str(stack_file))
        assert result.exit_code == 1
        assert log_file.exists()
