"""Pulumi stack configuration loader."""
import re
from typing import Any, Dict, List, Optional, Type

import pulumi
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from homelab.core.component import ServiceArgs, ServiceComponent
from homelab.core.errors import ConfigValidationError
from homelab.core.kube import KubeServiceArgs, KubeServiceComponent
from homelab.core.logger import get_logger
from homelab.core.storage import SftpStorage
from homelab.docker_services import DOCKER_SERVICES
from homelab.kube_services import KUBE_SERVICES
from homelab.models.settings import setting_keys

logger = get_logger(__name__)

DEFAULT_TIMEZONE = "Europe/Paris"
DEFAULT_DOCKER_SERVICES = ["caddy"]

PLATFORM_KEY = "docker.platform"
# Secret keys of the SFTP descriptor, needed once any enabled service stores data.
STORAGE_KEYS = ("sftp.host", "sftp.port", "sftp.user", "sftp.password")


def _check_names(names: List[str], known: Dict[str, Any], kind: str) -> List[str]:
    unknown = [name for name in names if name not in known]
    if unknown:
        raise ValueError(
            f"Unknown {kind} service(s): {', '.join(unknown)}. "
            f"Available: {', '.join(sorted(known))}"
        )
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(f"{kind} service(s) listed twice: {', '.join(duplicates)}")
    return names


class StackOptions(BaseModel):
    """Scalar options and service lists of a stack."""

    model_config = ConfigDict(extra='forbid')

    platform: str = Field(..., description="Docker platform images are pulled and built for")
    sftp_base_path: str = "/"
    timezone: str = DEFAULT_TIMEZONE
    docker_services: List[str] = Field(default_factory=lambda: list(DEFAULT_DOCKER_SERVICES))
    kube_services: List[str] = Field(default_factory=list)
    kubeconfig: Optional[str] = None
    kube_context: Optional[str] = None

    @field_validator('platform')
    @classmethod
    def validate_platform(cls, v):
        """Validate platform looks like ``linux/amd64`` or ``linux/arm/v7``."""
        if not re.match(r'^[a-z0-9]+/[a-z0-9_]+(/[a-z0-9]+)?$', v):
            raise ValueError(f"Platform must look like 'linux/amd64'. Got: {v}")
        return v

    @field_validator('sftp_base_path')
    @classmethod
    def validate_base_path(cls, v):
        if not v.startswith('/'):
            raise ValueError(f"SFTP base path must be absolute (start with /). Got: {v}")
        return v

    @field_validator('docker_services')
    @classmethod
    def validate_docker_services(cls, v):
        return _check_names(v, DOCKER_SERVICES, "docker")

    @field_validator('kube_services')
    @classmethod
    def validate_kube_services(cls, v):
        return _check_names(v, KUBE_SERVICES, "kube")


class StackConfigLoader:
    """Reads stack configuration into declaration inputs.

    All keys live in the project namespace with dotted names, e.g.
    ``homelab:sftp.host`` or ``homelab:coder.postgres_password``.
    """

    def __init__(self, config: Optional[pulumi.Config] = None):
        self.config = config if config is not None else pulumi.Config()
        self._options: Optional[StackOptions] = None

    def options(self) -> StackOptions:
        """Load and validate scalar options and service lists.

        Raises:
            ConfigValidationError: If a value is malformed or a service is unknown
        """
        if self._options is not None:
            return self._options

        raw: Dict[str, Any] = {"platform": self.config.require(PLATFORM_KEY)}
        optional = {
            "sftp_base_path": self.config.get("sftp.base_path"),
            "timezone": self.config.get("timezone"),
            "docker_services": self.config.get_object("docker.services"),
            "kube_services": self.config.get_object("kube.services"),
            "kubeconfig": self.config.get("kube.kubeconfig"),
            "kube_context": self.config.get("kube.context"),
        }
        raw.update({key: value for key, value in optional.items() if value is not None})

        try:
            self._options = StackOptions(**raw)
        except ValidationError as exc:
            raise ConfigValidationError(f"Stack configuration is invalid:\n{exc}") from exc

        logger.debug(
            f"Stack options: platform={self._options.platform}, "
            f"docker={self._options.docker_services}, kube={self._options.kube_services}"
        )
        return self._options

    def storage(self) -> SftpStorage:
        """SFTP descriptor; every field is read as a secret."""
        host, port, user, password = (self.config.require_secret(key) for key in STORAGE_KEYS)
        return SftpStorage(host=host, port=port, user=user, password=password)

    def settings(self, service: Type[ServiceComponent]) -> Any:
        """Build the settings record of ``service`` from ``<namespace>.<field>`` keys."""
        if service.SETTINGS is None:
            return None

        values: Dict[str, Any] = {}
        for key in setting_keys(service.SETTINGS):
            config_key = key.config_key(service.CONFIG_NAMESPACE)
            if key.required:
                read = self.config.require_secret if key.secret else self.config.require
                values[key.name] = read(config_key)
                continue

            read = self.config.get_secret if key.secret else self.config.get
            value = read(config_key)
            if value is not None:
                values[key.name] = value
        return service.SETTINGS(**values)

    def service_args(self, service: Type[ServiceComponent], **inputs) -> ServiceArgs:
        """Declaration inputs for a docker service.

        The SFTP descriptor is only read for services that store data.
        """
        options = self.options()
        stores_data = "storage" in service.REQUIRED
        return ServiceArgs(
            platform=options.platform,
            storage=self.storage() if stores_data else None,
            sftp_base_path=options.sftp_base_path if stores_data else None,
            timezone=options.timezone,
            settings=self.settings(service),
            **inputs,
        )

    def kube_args(self, service: Type[KubeServiceComponent], **inputs) -> KubeServiceArgs:
        """Declaration inputs for a kube service; the route domain comes from its settings."""
        options = self.options()
        settings = self.settings(service)
        return KubeServiceArgs(
            platform=options.platform,
            timezone=options.timezone,
            settings=settings,
            domain=getattr(settings, "domain", None),
            **inputs,
        )
