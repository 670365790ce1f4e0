"""Kubernetes service declarations, keyed by the name used in ``kube.services``."""
from typing import Dict, Type

from homelab.core.kube import KubeServiceComponent
from homelab.kube_services.registry import RegistryKubeService
from homelab.kube_services.rss_bridge import RssBridgeKubeService

KUBE_SERVICES: Dict[str, Type[KubeServiceComponent]] = {
    "registry": RegistryKubeService,
    "rss_bridge": RssBridgeKubeService,
}

__all__ = ['KUBE_SERVICES', 'RegistryKubeService', 'RssBridgeKubeService']
