"""Shared test fixtures for homelab tests."""
import dataclasses
from typing import Any, Dict, Optional, Type

import pulumi
import pulumi_docker as docker
import pulumi_kubernetes as k8s
import pytest

from homelab.core.component import ServiceArgs, ServiceComponent
from homelab.core.kube import KubeServiceArgs
from homelab.core.storage import SftpStorage
from homelab.models.settings import setting_keys


class HomelabMocks(pulumi.runtime.Mocks):
    """Echo inputs back as outputs, filling the outputs the engine would compute."""

    def __init__(self):
        self.inputs: Dict[str, Dict[str, Any]] = {}

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        self.inputs[args.name] = dict(args.inputs)
        outputs: Dict[str, Any] = dict(args.inputs)
        if args.typ == "docker:index/volume:Volume":
            outputs.setdefault("name", args.name)
            outputs["mountpoint"] = f"/var/lib/docker/volumes/{args.name}/_data"
        elif args.typ == "docker:index/remoteImage:RemoteImage":
            outputs["imageId"] = f"sha256:{args.name}"
        elif args.typ.startswith("kubernetes:"):
            metadata = dict(outputs.get("metadata") or {})
            metadata.setdefault("name", args.name)
            outputs["metadata"] = metadata
        return [f"{args.name}_id", outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        return {}


@pytest.fixture(autouse=True)
def pulumi_mocks():
    mocks = HomelabMocks()
    pulumi.runtime.set_mocks(mocks, preview=False)
    yield mocks


@pytest.fixture
def network():
    return docker.Network("proxy")


@pytest.fixture
def storage():
    return SftpStorage(host="sftp.lan", port="22", user="homelab", password="hunter2")


@pytest.fixture
def kube_provider():
    return k8s.Provider("kube")


def settings_for(service: Type[ServiceComponent]) -> Optional[Any]:
    """Settings record with every required field set to ``<field>-value``."""
    if service.SETTINGS is None:
        return None
    values = {key.name: f"{key.name}-value" for key in setting_keys(service.SETTINGS) if key.required}
    return service.SETTINGS(**values)


@pytest.fixture
def service_args(network, storage):
    """Build complete declaration inputs for a docker service."""
    def build(service: Type[ServiceComponent], **overrides) -> ServiceArgs:
        args = ServiceArgs(
            network=network,
            platform="linux/amd64",
            storage=storage,
            sftp_base_path="/srv/homelab",
            settings=settings_for(service),
        )
        return dataclasses.replace(args, **overrides)
    return build


@pytest.fixture
def kube_args(network, kube_provider):
    """Build complete declaration inputs for a kube service."""
    def build(service: Type[ServiceComponent], **overrides) -> KubeServiceArgs:
        args = KubeServiceArgs(
            network=network,
            platform="linux/amd64",
            provider=kube_provider,
            domain=f"{service.APP}.example.org",
            settings=settings_for(service),
        )
        return dataclasses.replace(args, **overrides)
    return build


class FakeConfig:
    """Stand-in for ``pulumi.Config`` recording which getter read each key."""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self.values = dict(values or {})
        self.reads: Dict[str, str] = {}

    def _read(self, key: str, how: str, required: bool, secret: bool = False):
        self.reads[key] = how
        if key not in self.values:
            if required:
                raise pulumi.ConfigMissingError(key, secret)
            return None
        return self.values[key]

    def get(self, key):
        return self._read(key, "get", False)

    def require(self, key):
        return self._read(key, "require", True)

    def get_secret(self, key):
        return self._read(key, "get_secret", False, secret=True)

    def require_secret(self, key):
        return self._read(key, "require_secret", True, secret=True)

    def get_object(self, key):
        return self._read(key, "get_object", False)


@pytest.fixture
def minimal_config():
    return FakeConfig({
        "docker.platform": "linux/arm64",
        "sftp.host": "sftp.lan",
        "sftp.port": "22",
        "sftp.user": "homelab",
        "sftp.password": "hunter2",
    })
