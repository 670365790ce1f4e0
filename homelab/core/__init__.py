"""Core declaration machinery."""
from homelab.core.component import (
    ContainerSpec,
    HostMount,
    Port,
    ServiceArgs,
    ServiceComponent,
    VolumeMount,
)
from homelab.core.errors import ConfigValidationError, HomelabError, MissingInputError
from homelab.core.storage import SftpStorage

__all__ = [
    'ConfigValidationError',
    'ContainerSpec',
    'HomelabError',
    'HostMount',
    'MissingInputError',
    'Port',
    'ServiceArgs',
    'ServiceComponent',
    'SftpStorage',
    'VolumeMount',
]
