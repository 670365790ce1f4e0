"""Docker service declarations, keyed by the name used in ``docker.services``."""
from typing import Dict, Type

from homelab.core.component import ServiceComponent
from homelab.docker_services.caddy import CaddyDockerService
from homelab.docker_services.coder import CoderDockerService
from homelab.docker_services.concourse import ConcourseDockerService
from homelab.docker_services.filestash import FilestashDockerService
from homelab.docker_services.forgejo import ForgejoDockerService
from homelab.docker_services.grafana import GrafanaDockerService
from homelab.docker_services.homepage import HomepageDockerService
from homelab.docker_services.ipfs import IpfsDockerService
from homelab.docker_services.kellnr import KellnrDockerService
from homelab.docker_services.ollama import OllamaDockerService
from homelab.docker_services.polr import PolrDockerService
from homelab.docker_services.rss_bridge import RssBridgeDockerService
from homelab.docker_services.rss_forwarder import RssForwarderDockerService
from homelab.docker_services.rss_miniflux import RssMinifluxDockerService
from homelab.docker_services.seedbox import SeedboxDockerService
from homelab.docker_services.shaarli import ShaarliDockerService
from homelab.docker_services.syncthing import SyncthingDockerService
from homelab.docker_services.tailscale import TailscaleDockerService
from homelab.docker_services.umami import UmamiDockerService

DOCKER_SERVICES: Dict[str, Type[ServiceComponent]] = {
    service.CONFIG_NAMESPACE: service
    for service in (
        CaddyDockerService,
        CoderDockerService,
        ConcourseDockerService,
        FilestashDockerService,
        ForgejoDockerService,
        GrafanaDockerService,
        HomepageDockerService,
        IpfsDockerService,
        KellnrDockerService,
        OllamaDockerService,
        PolrDockerService,
        RssBridgeDockerService,
        RssForwarderDockerService,
        RssMinifluxDockerService,
        SeedboxDockerService,
        ShaarliDockerService,
        SyncthingDockerService,
        TailscaleDockerService,
        UmamiDockerService,
    )
}

__all__ = [
    'DOCKER_SERVICES',
    'CaddyDockerService',
    'CoderDockerService',
    'ConcourseDockerService',
    'FilestashDockerService',
    'ForgejoDockerService',
    'GrafanaDockerService',
    'HomepageDockerService',
    'IpfsDockerService',
    'KellnrDockerService',
    'OllamaDockerService',
    'PolrDockerService',
    'RssBridgeDockerService',
    'RssForwarderDockerService',
    'RssMinifluxDockerService',
    'SeedboxDockerService',
    'ShaarliDockerService',
    'SyncthingDockerService',
    'TailscaleDockerService',
    'UmamiDockerService',
]
