"""Service declaration template shared by every homelab service.

A service is a ``pulumi.ComponentResource`` that validates its inputs before
registering anything, then declares images, volumes, networks and containers
as children. Every child is recorded in three ledgers keyed by its logical
name:

* ``resources``: the declared resource
* ``references``: the resources its arguments point at
* ``dependencies``: what was passed to ``depends_on``

Containers also record their ``pulumi.Output`` inputs in ``inputs``.
Container dependencies are computed from the container spec, so the
dependency set always covers the references. Resources reached only through
an interpolated output are listed by :meth:`ServiceComponent.undeclared_dependencies`.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import pulumi
import pulumi_docker as docker

from homelab.core.errors import HomelabError, MissingInputError
from homelab.core.logger import get_logger
from homelab.core.storage import VOLUME_DRIVER, SftpStorage, remote_path
from homelab.models.settings import setting_keys

logger = get_logger(__name__)

RESTART_POLICY = "unless-stopped"
ASSETS_DIR = Path(__file__).resolve().parent.parent / "docker_services" / "assets"

DockerImage = Union[docker.RemoteImage, docker.Image]


@dataclass
class ServiceArgs:
    """Inputs shared by every service declaration."""
    network: Optional[docker.Network] = None
    platform: Optional[str] = None
    storage: Optional[SftpStorage] = None
    sftp_base_path: Optional[str] = None
    hostname: Optional[str] = None
    timezone: str = "Europe/Paris"
    settings: Any = None


@dataclass
class VolumeMount:
    """Mount a declared volume, or a directory inside its mountpoint."""
    volume: docker.Volume
    container_path: str
    subpath: Optional[str] = None
    read_only: bool = False


@dataclass
class HostMount:
    host_path: pulumi.Input[str]
    container_path: str
    read_only: bool = False


@dataclass
class Port:
    internal: int
    external: Optional[int] = None
    protocol: str = "tcp"
    ip: Optional[str] = None


@dataclass
class ContainerSpec:
    """Desired state of one container.

    ``links`` lists containers whose hostname is interpolated into ``env``;
    ``after`` adds ordering-only dependencies.
    """
    image: DockerImage
    hostname: pulumi.Input[str]
    env: List[pulumi.Input[str]] = field(default_factory=list)
    networks: List[docker.Network] = field(default_factory=list)
    network_names: List[str] = field(default_factory=list)
    mounts: List[Union[VolumeMount, HostMount]] = field(default_factory=list)
    ports: List[Port] = field(default_factory=list)
    links: List[docker.Container] = field(default_factory=list)
    after: List[pulumi.Resource] = field(default_factory=list)
    command: Optional[List[str]] = None
    entrypoints: Optional[List[str]] = None
    privileged: bool = False
    user: Optional[str] = None
    memory: Optional[int] = None
    memory_swap: Optional[int] = None
    group_adds: Optional[List[pulumi.Input[str]]] = None
    healthcheck: Optional[docker.ContainerHealthcheckArgs] = None

    def references(self) -> List[pulumi.Resource]:
        """Resources the container arguments point at."""
        refs: List[pulumi.Resource] = [*self.networks, self.image]
        refs.extend(m.volume for m in self.mounts if isinstance(m, VolumeMount))
        refs.extend(self.links)
        return unique(refs)

    def outputs(self) -> List[pulumi.Output]:
        """Output-valued inputs, whose resources must also be dependencies."""
        values: List[Any] = [self.hostname, *self.env]
        values.extend(m.host_path for m in self.mounts if isinstance(m, HostMount))
        values.extend(self.command or [])
        values.extend(self.group_adds or [])
        if self.healthcheck is not None:
            values.extend(self.healthcheck.tests or [])
        return [value for value in values if isinstance(value, pulumi.Output)]


def unique(resources: Sequence[pulumi.Resource]) -> List[pulumi.Resource]:
    """Drop repeated resources, keeping first-seen order."""
    seen: List[pulumi.Resource] = []
    for resource in resources:
        if not any(resource is other for other in seen):
            seen.append(resource)
    return seen


def is_missing(value: Any) -> bool:
    """True for absent inputs and empty strings or collections.

    Pulumi outputs count as present; their value is only known later.
    """
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set)):
        return not value
    return False


def image_ref(image: DockerImage) -> pulumi.Output[str]:
    """Reference a container should run for a pulled or locally built image."""
    if isinstance(image, docker.Image):
        return image.image_name
    return image.image_id


def _subpath(volume: docker.Volume, subpath: str) -> pulumi.Output[str]:
    return volume.mountpoint.apply(lambda mountpoint: f"{mountpoint.rstrip('/')}/{subpath}")


def _volume_args(mount: Union[VolumeMount, HostMount]) -> docker.ContainerVolumeArgs:
    if isinstance(mount, HostMount):
        return docker.ContainerVolumeArgs(
            host_path=mount.host_path,
            container_path=mount.container_path,
            read_only=mount.read_only or None,
        )
    if mount.subpath:
        return docker.ContainerVolumeArgs(
            host_path=_subpath(mount.volume, mount.subpath),
            container_path=mount.container_path,
            read_only=mount.read_only or None,
        )
    return docker.ContainerVolumeArgs(
        volume_name=mount.volume.name,
        container_path=mount.container_path,
        read_only=mount.read_only or None,
    )


def container_args(spec: ContainerSpec) -> Dict[str, Any]:
    """Translate a container spec into ``docker.Container`` keyword arguments."""
    networks = [docker.ContainerNetworksAdvancedArgs(name=network.id) for network in spec.networks]
    networks += [docker.ContainerNetworksAdvancedArgs(name=name) for name in spec.network_names]
    ports = [
        docker.ContainerPortArgs(
            internal=port.internal,
            external=port.external if port.external is not None else port.internal,
            protocol=port.protocol,
            ip=port.ip,
        )
        for port in spec.ports
    ]
    volumes = [_volume_args(mount) for mount in spec.mounts]

    return {
        "image": image_ref(spec.image),
        "restart": RESTART_POLICY,
        "hostname": spec.hostname,
        "envs": spec.env or None,
        "networks_advanced": networks or None,
        "volumes": volumes or None,
        "ports": ports or None,
        "command": spec.command,
        "entrypoints": spec.entrypoints,
        "privileged": spec.privileged or None,
        "user": spec.user,
        "memory": spec.memory,
        "memory_swap": spec.memory_swap,
        "group_adds": spec.group_adds,
        "healthcheck": spec.healthcheck,
    }


class ServiceComponent(pulumi.ComponentResource):
    """Base of every service declaration.

    Subclasses set ``TYPE``, ``CONFIG_NAMESPACE``, optionally ``SETTINGS``,
    ``IMAGES`` (logical name -> registry reference) and ``BUILDS`` (logical
    name -> asset directory), and implement :meth:`declare`.
    """

    TYPE = "homelab:docker:Service"
    CONFIG_NAMESPACE: Optional[str] = None
    SETTINGS: Optional[type] = None
    REQUIRED: Sequence[str] = ("network", "storage", "sftp_base_path", "platform")
    IMAGES: Dict[str, str] = {}
    BUILDS: Dict[str, str] = {}

    def __init__(
        self,
        name: str,
        args: Optional[ServiceArgs] = None,
        opts: Optional[pulumi.ResourceOptions] = None,
    ):
        declaration = f"{self.TYPE} '{name}'"
        self.validate(declaration, args)
        if args.settings is None and self.SETTINGS is not None:
            args = dataclasses.replace(args, settings=self.SETTINGS())

        super().__init__(self.TYPE, name, None, opts)
        self._args = args
        self.resources: Dict[str, pulumi.Resource] = {}
        self.references: Dict[str, List[pulumi.Resource]] = {}
        self.dependencies: Dict[str, List[pulumi.Resource]] = {}
        self.inputs: Dict[str, List[pulumi.Output]] = {}

        self.declare(args)
        self.register_outputs({"hostnames": self.hostnames()})
        logger.debug(f"Declared {declaration} with {len(self.resources)} resources")

    @classmethod
    def required_inputs(cls) -> List[str]:
        """Input fields checked before anything is declared, in check order."""
        inputs = [f"args.{name}" for name in cls.REQUIRED]
        inputs += [f"args.settings.{key.name}" for key in setting_keys(cls.SETTINGS) if key.required]
        return inputs

    @classmethod
    def validate(cls, declaration: str, args: Optional[ServiceArgs]) -> None:
        """Fail fast on the first missing required input.

        Raises:
            MissingInputError: naming the field and the declaration
        """
        if args is None:
            raise MissingInputError(declaration, "args")

        for name in cls.REQUIRED:
            if is_missing(getattr(args, name, None)):
                raise MissingInputError(declaration, f"args.{name}")

        required_settings = [key for key in setting_keys(cls.SETTINGS) if key.required]
        if required_settings and args.settings is None:
            raise MissingInputError(declaration, "args.settings")
        for key in required_settings:
            if is_missing(getattr(args.settings, key.name, None)):
                raise MissingInputError(declaration, f"args.settings.{key.name}")

    def declare(self, args: ServiceArgs) -> None:
        raise NotImplementedError

    @property
    def containers(self) -> Dict[str, docker.Container]:
        return {name: r for name, r in self.resources.items() if isinstance(r, docker.Container)}

    def hostnames(self) -> Dict[str, pulumi.Output[str]]:
        return {name: container.hostname for name, container in self.containers.items()}

    def hostname(self, default: str) -> str:
        """Main container hostname, honouring the ``hostname`` override."""
        return self._args.hostname or default

    def _declare(
        self,
        name: str,
        factory: Callable[[pulumi.ResourceOptions], pulumi.Resource],
        references: Sequence[pulumi.Resource] = (),
        after: Sequence[pulumi.Resource] = (),
        provider: Optional[pulumi.ProviderResource] = None,
    ) -> Any:
        if name in self.resources:
            raise HomelabError(f"{self.TYPE}: resource '{name}' declared twice")

        depends_on = unique([*references, *after])
        opts = pulumi.ResourceOptions(
            parent=self,
            depends_on=depends_on or None,
            provider=provider,
        )
        resource = factory(opts)

        self.resources[name] = resource
        self.references[name] = list(references)
        self.dependencies[name] = depends_on
        logger.debug(f"  {type(resource).__name__} {name} <- {len(depends_on)} dependencies")
        return resource

    def registry_image(self, name: str) -> docker.RemoteImage:
        """Pull ``IMAGES[name]`` for the target platform, declared as ``<name>-image``."""
        reference = self.IMAGES[name]
        resource_name = f"{name}-image"
        return self._declare(
            resource_name,
            lambda opts: docker.RemoteImage(
                resource_name,
                name=reference,
                platform=self._args.platform,
                keep_locally=True,
                opts=opts,
            ),
        )

    def build_image(self, name: str) -> docker.Image:
        """Build the asset directory ``BUILDS[name]`` for the target platform.

        Declared as ``<name>-image``; the local image is tagged ``name``.
        """
        context = ASSETS_DIR / self.BUILDS[name]
        resource_name = f"{name}-image"
        return self._declare(
            resource_name,
            lambda opts: docker.Image(
                resource_name,
                image_name=name,
                build=docker.DockerBuildArgs(
                    context=str(context),
                    platform=self._args.platform,
                ),
                skip_push=True,
                opts=opts,
            ),
        )

    def sftp_volume(self, name: str, subpath: str) -> docker.Volume:
        """Volume backed by ``<sftp_base_path>/<subpath>`` on the SFTP endpoint."""
        path = remote_path(self._args.sftp_base_path, subpath)
        return self._declare(
            name,
            lambda opts: docker.Volume(
                name,
                driver=VOLUME_DRIVER,
                driver_opts=self._args.storage.driver_opts(path),
                opts=opts,
            ),
        )

    def local_volume(self, name: str) -> docker.Volume:
        return self._declare(name, lambda opts: docker.Volume(name, opts=opts))

    def internal_network(self, name: str) -> docker.Network:
        return self._declare(name, lambda opts: docker.Network(name, opts=opts))

    def container(self, name: str, spec: ContainerSpec) -> docker.Container:
        resource = self._declare(
            name,
            lambda opts: docker.Container(name, opts=opts, **container_args(spec)),
            references=spec.references(),
            after=spec.after,
        )
        self.inputs[name] = spec.outputs()
        return resource

    async def undeclared_dependencies(self) -> Dict[str, List[pulumi.Resource]]:
        """Resources behind each container's outputs that it does not depend on.

        Empty when every interpolated hostname or path has a matching link.
        """
        undeclared: Dict[str, List[pulumi.Resource]] = {}
        for name, outputs in self.inputs.items():
            behind: List[pulumi.Resource] = []
            for output in outputs:
                behind.extend(await output.resources())
            missing = [
                resource for resource in unique(behind)
                if resource is not self.resources[name]
                and not any(resource is other for other in self.dependencies[name])
            ]
            if missing:
                undeclared[name] = missing
        return undeclared
