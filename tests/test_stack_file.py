"""Tests for the offline stack file check."""
import textwrap

import pytest

from homelab.config.stack_file import StackFile, check_stack_file, load_stack_file
from homelab.core.errors import ConfigValidationError

COMPLETE_STACK = """
encryptionsalt: v1:abc
config:
  homelab:docker.platform: linux/amd64
  homelab:docker.services:
    - caddy
    - rss_miniflux
  homelab:sftp.host:
    secure: v1:host
  homelab:sftp.port:
    secure: v1:port
  homelab:sftp.user:
    secure: v1:user
  homelab:sftp.password:
    secure: v1:password
  homelab:rss_miniflux.postgres_password:
    secure: v1:miniflux
"""


@pytest.fixture
def write_stack(tmp_path):
    def write(content, name="Pulumi.dev.yaml"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content))
        return path
    return write


class TestCheckStackFile:
    """Test missing-key reports."""

    def test_complete_stack(self, write_stack):
        report = check_stack_file(write_stack(COMPLETE_STACK))
        assert report.ok
        assert report.docker_services == ["caddy", "rss_miniflux"]
        assert report.kube_services == []

    def test_missing_service_secret(self, write_stack):
        content = COMPLETE_STACK.replace(
            "  homelab:rss_miniflux.postgres_password:\n    secure: v1:miniflux\n", ""
        )
        report = check_stack_file(write_stack(content))
        assert not report.ok
        assert report.missing["rss_miniflux"] == ["rss_miniflux.postgres_password"]
        assert report.missing["stack"] == []

    def test_empty_values_count_as_missing(self, write_stack):
        report = check_stack_file(write_stack("""
            config:
              homelab:docker.platform: ""
              homelab:docker.services: [kellnr]
              homelab:sftp.host: sftp.lan
              homelab:sftp.port: "22"
              homelab:sftp.user: homelab
              homelab:sftp.password:
              homelab:kellnr.origin_hostname: ""
        """))
        assert report.missing["stack"] == ["docker.platform", "sftp.password"]
        assert report.missing["kellnr"] == ["kellnr.origin_hostname"]

    def test_default_services_need_platform_and_sftp(self, write_stack):
        report = check_stack_file(write_stack("config: {}\n"))
        assert report.docker_services == ["caddy"]
        assert report.missing["stack"] == [
            "docker.platform", "sftp.host", "sftp.port", "sftp.user", "sftp.password",
        ]

    def test_stateless_services_need_no_sftp(self, write_stack):
        report = check_stack_file(write_stack("""
            config:
              homelab:docker.platform: linux/amd64
              homelab:docker.services: [tailscale]
              homelab:tailscale.auth_key:
                secure: v1:key
        """))
        assert report.ok

    def test_kube_service_domain(self, write_stack):
        report = check_stack_file(write_stack("""
            config:
              homelab:docker.platform: linux/amd64
              homelab:docker.services: []
              homelab:kube.services: [registry]
        """))
        assert report.missing["kube.registry"] == ["kube.registry.domain"]

    def test_other_project_keys_are_ignored(self, write_stack):
        report = check_stack_file(write_stack("""
            config:
              lab:docker.platform: linux/amd64
              lab:docker.services: []
        """), project="lab")
        assert report.ok

        report = check_stack_file(write_stack("""
            config:
              lab:docker.platform: linux/amd64
              lab:docker.services: []
        """, name="Pulumi.other.yaml"))
        assert report.missing["stack"] == ["docker.platform", "sftp.host", "sftp.port", "sftp.user", "sftp.password"]

    def test_unknown_service(self, write_stack):
        with pytest.raises(ConfigValidationError, match="nextcloud"):
            check_stack_file(write_stack("""
                config:
                  homelab:docker.services: [nextcloud]
            """))

    def test_service_list_must_be_a_list(self, write_stack):
        with pytest.raises(ConfigValidationError, match="list of service names"):
            check_stack_file(write_stack("""
                config:
                  homelab:docker.services: caddy
            """))


class TestLoadStackFile:
    """Test stack file parsing."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_stack_file(tmp_path / "Pulumi.nope.yaml")

    def test_invalid_yaml(self, write_stack):
        with pytest.raises(ConfigValidationError, match="not valid YAML"):
            load_stack_file(write_stack("config: [unclosed\n"))

    def test_not_a_mapping(self, write_stack):
        with pytest.raises(ConfigValidationError, match="mapping"):
            load_stack_file(write_stack("- a\n- b\n"))

    def test_empty_file(self, write_stack):
        assert load_stack_file(write_stack("")).config == {}

    def test_key_without_namespace(self, write_stack):
        with pytest.raises(ConfigValidationError, match="namespaced"):
            load_stack_file(write_stack("config:\n  platform: linux/amd64\n"))

    def test_malformed_secure_value(self, write_stack):
        with pytest.raises(ConfigValidationError, match="secure"):
            load_stack_file(write_stack("config:\n  homelab:sftp.host:\n    secure: 12\n"))

    def test_project_values(self):
        stack = StackFile(config={"homelab:timezone": "UTC", "aws:region": "eu-west-3"})
        assert stack.project_values("homelab") == {"timezone": "UTC"}
