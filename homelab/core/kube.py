"""Kubernetes flavour of the service declaration template.

Each kube service runs one deployment behind a ClusterIP service, scaled to
zero by a KEDA ``HTTPScaledObject`` and exposed through a Traefik
``IngressRoute`` pointing at the KEDA HTTP interceptor.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pulumi
import pulumi_kubernetes as k8s

from homelab.core.component import ServiceArgs, ServiceComponent

KEDA_NAMESPACE = "keda"
KEDA_INTERCEPTOR = "keda-add-ons-http-interceptor-proxy"
KEDA_INTERCEPTOR_PORT = 8080


@dataclass
class KubeServiceArgs(ServiceArgs):
    provider: Optional[k8s.Provider] = None
    domain: Optional[str] = None


@dataclass
class Workload:
    """Pod content of a kube service."""
    container: k8s.core.v1.ContainerArgs
    volumes: List[k8s.core.v1.VolumeArgs] = field(default_factory=list)
    references: List[pulumi.Resource] = field(default_factory=list)


class KubeServiceComponent(ServiceComponent):
    """Base of every kube service; subclasses implement :meth:`workload`."""

    TYPE = "homelab:kube:Service"
    REQUIRED = ("network", "platform", "provider", "domain")
    APP = ""
    PORT = 80
    MIN_REPLICAS = 0
    MAX_REPLICAS = 2

    @property
    def labels(self) -> Dict[str, str]:
        return {"app": self.APP}

    def workload(self, args: KubeServiceArgs, namespace: k8s.core.v1.Namespace) -> Workload:
        raise NotImplementedError

    def declare(self, args: KubeServiceArgs) -> None:
        namespace = self.namespace(f"{self.APP}-namespace")
        workload = self.workload(args, namespace)
        deployment = self.deployment(self.APP, namespace, workload)
        service = self.service(f"{self.APP}-service", namespace, deployment)
        scaled_object = self.scaled_object(f"{self.APP}-autoscale", namespace, deployment, service)
        self.ingress_route(f"{self.APP}-proxy", scaled_object)

    def _kube(self, name: str, factory, references=(), after=()) -> Any:
        return self._declare(name, factory, references, after, provider=self._args.provider)

    def namespace(self, name: str) -> k8s.core.v1.Namespace:
        return self._kube(name, lambda opts: k8s.core.v1.Namespace(name, opts=opts))

    def config_map(
        self,
        name: str,
        namespace: k8s.core.v1.Namespace,
        data: Dict[str, str],
    ) -> k8s.core.v1.ConfigMap:
        return self._kube(
            name,
            lambda opts: k8s.core.v1.ConfigMap(
                name,
                metadata=k8s.meta.v1.ObjectMetaArgs(
                    name=name,
                    namespace=namespace.metadata.name,
                ),
                data=data,
                opts=opts,
            ),
            references=[namespace],
        )

    def deployment(
        self,
        name: str,
        namespace: k8s.core.v1.Namespace,
        workload: Workload,
    ) -> k8s.apps.v1.Deployment:
        return self._kube(
            name,
            lambda opts: k8s.apps.v1.Deployment(
                name,
                metadata=k8s.meta.v1.ObjectMetaArgs(
                    namespace=namespace.metadata.name,
                    labels=self.labels,
                ),
                spec=k8s.apps.v1.DeploymentSpecArgs(
                    selector=k8s.meta.v1.LabelSelectorArgs(match_labels=self.labels),
                    replicas=1,
                    template=k8s.core.v1.PodTemplateSpecArgs(
                        metadata=k8s.meta.v1.ObjectMetaArgs(labels=self.labels),
                        spec=k8s.core.v1.PodSpecArgs(
                            containers=[workload.container],
                            volumes=workload.volumes or None,
                        ),
                    ),
                ),
                opts=opts,
            ),
            references=[namespace, *workload.references],
        )

    def service(
        self,
        name: str,
        namespace: k8s.core.v1.Namespace,
        deployment: k8s.apps.v1.Deployment,
    ) -> k8s.core.v1.Service:
        return self._kube(
            name,
            lambda opts: k8s.core.v1.Service(
                name,
                metadata=k8s.meta.v1.ObjectMetaArgs(
                    namespace=namespace.metadata.name,
                    labels=self.labels,
                ),
                spec=k8s.core.v1.ServiceSpecArgs(
                    type="ClusterIP",
                    ports=[
                        k8s.core.v1.ServicePortArgs(
                            port=self.PORT,
                            target_port=self.PORT,
                            protocol="TCP",
                        )
                    ],
                    selector=self.labels,
                ),
                opts=opts,
            ),
            references=[namespace],
            after=[deployment],
        )

    def scaled_object(
        self,
        name: str,
        namespace: k8s.core.v1.Namespace,
        deployment: k8s.apps.v1.Deployment,
        service: k8s.core.v1.Service,
    ) -> k8s.apiextensions.CustomResource:
        return self._kube(
            name,
            lambda opts: k8s.apiextensions.CustomResource(
                name,
                api_version="http.keda.sh/v1alpha1",
                kind="HTTPScaledObject",
                metadata=k8s.meta.v1.ObjectMetaArgs(
                    name=self.APP,
                    namespace=namespace.metadata.name,
                ),
                spec={
                    "hosts": [self._args.domain],
                    "scaleTargetRef": {
                        "name": deployment.metadata.name,
                        "kind": "Deployment",
                        "service": service.metadata.name,
                        "port": self.PORT,
                    },
                    "replicas": {
                        "min": self.MIN_REPLICAS,
                        "max": self.MAX_REPLICAS,
                    },
                },
                opts=opts,
            ),
            references=[namespace, deployment, service],
        )

    def ingress_route(
        self,
        name: str,
        scaled_object: k8s.apiextensions.CustomResource,
    ) -> k8s.apiextensions.CustomResource:
        # Traffic goes through the KEDA interceptor so scale-from-zero works.
        return self._kube(
            name,
            lambda opts: k8s.apiextensions.CustomResource(
                name,
                api_version="traefik.io/v1alpha1",
                kind="IngressRoute",
                metadata=k8s.meta.v1.ObjectMetaArgs(
                    name=name,
                    namespace=KEDA_NAMESPACE,
                ),
                spec={
                    "entryPoints": ["web", "websecure"],
                    "routes": [
                        {
                            "match": f"Host(`{self._args.domain}`)",
                            "kind": "Rule",
                            "services": [
                                {
                                    "name": KEDA_INTERCEPTOR,
                                    "port": KEDA_INTERCEPTOR_PORT,
                                }
                            ],
                        }
                    ],
                },
                opts=opts,
            ),
            after=[scaled_object],
        )

    @property
    def workloads(self) -> Dict[str, k8s.apps.v1.Deployment]:
        return {name: r for name, r in self.resources.items() if isinstance(r, k8s.apps.v1.Deployment)}
