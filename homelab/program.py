"""Declares the whole homelab from stack configuration."""
from typing import Dict, Optional

import pulumi
import pulumi_docker as docker
import pulumi_kubernetes as k8s

from homelab.config.loader import StackConfigLoader
from homelab.core.component import ServiceComponent
from homelab.core.logger import get_logger
from homelab.docker_services import DOCKER_SERVICES
from homelab.kube_services import KUBE_SERVICES

logger = get_logger(__name__)

PROXY_NETWORK = "proxy"
KUBE_PROVIDER = "kube"


def declare_stack(loader: Optional[StackConfigLoader] = None) -> Dict[str, ServiceComponent]:
    """Declare the proxy network and every enabled service.

    Returns the declared components keyed by service name; kube services are
    keyed ``kube.<name>``.
    """
    loader = loader or StackConfigLoader()
    options = loader.options()

    network = docker.Network(PROXY_NETWORK)
    declared: Dict[str, ServiceComponent] = {}

    for name in options.docker_services:
        service = DOCKER_SERVICES[name]
        declared[name] = service(name, loader.service_args(service, network=network))

    if options.kube_services:
        provider = k8s.Provider(
            KUBE_PROVIDER,
            kubeconfig=options.kubeconfig,
            context=options.kube_context,
        )
        for name in options.kube_services:
            service = KUBE_SERVICES[name]
            declared[f"kube.{name}"] = service(
                name,
                loader.kube_args(service, network=network, provider=provider),
            )

    logger.info(f"Declared {len(declared)} services: {', '.join(declared) or 'none'}")

    pulumi.export("services", list(declared))
    pulumi.export("hostnames", {name: component.hostnames() for name, component in declared.items()})
    return declared
