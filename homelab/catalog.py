"""Lookup of every service the program can declare."""
from typing import Dict, List, Optional, Type

from homelab.core.component import ServiceComponent
from homelab.docker_services import DOCKER_SERVICES
from homelab.kube_services import KUBE_SERVICES
from homelab.models.settings import SettingKey, setting_keys

KINDS = ("docker", "kube")


def services(kind: Optional[str] = None) -> Dict[str, Type[ServiceComponent]]:
    """Return the catalog for ``kind``, or both kinds keyed ``<kind>.<name>``."""
    if kind == "docker":
        return dict(DOCKER_SERVICES)
    if kind == "kube":
        return dict(KUBE_SERVICES)
    if kind is not None:
        raise ValueError(f"Unknown service kind '{kind}' (expected one of {', '.join(KINDS)})")

    combined: Dict[str, Type[ServiceComponent]] = {}
    for name, service in DOCKER_SERVICES.items():
        combined[f"docker.{name}"] = service
    for name, service in KUBE_SERVICES.items():
        combined[f"kube.{name}"] = service
    return combined


def find_service(name: str) -> Type[ServiceComponent]:
    """Resolve ``name``, ``docker.<name>`` or ``kube.<name>`` to a service class.

    Bare names resolve to the docker service first.
    """
    if name in DOCKER_SERVICES:
        return DOCKER_SERVICES[name]
    catalog = services()
    if name in catalog:
        return catalog[name]
    raise KeyError(name)


def config_keys(service: Type[ServiceComponent]) -> List[SettingKey]:
    return setting_keys(service.SETTINGS)
