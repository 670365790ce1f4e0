"""Docker registry on the cluster, scaled to zero when idle."""
import pulumi_kubernetes as k8s

from homelab.core.kube import KubeServiceArgs, KubeServiceComponent, Workload
from homelab.models.settings import KubeRouteSettings


class RegistryKubeService(KubeServiceComponent):
    TYPE = "homelab:kube:Registry"
    CONFIG_NAMESPACE = "kube.registry"
    SETTINGS = KubeRouteSettings
    APP = "registry"
    PORT = 5000
    IMAGES = {"registry": "registry:2"}

    def workload(self, args: KubeServiceArgs, namespace: k8s.core.v1.Namespace) -> Workload:
        return Workload(
            container=k8s.core.v1.ContainerArgs(
                name=self.APP,
                image=self.IMAGES["registry"],
                env=[
                    k8s.core.v1.EnvVarArgs(
                        name="REGISTRY_HTTP_ADDR",
                        value=f"0.0.0.0:{self.PORT}",
                    )
                ],
                ports=[k8s.core.v1.ContainerPortArgs(container_port=self.PORT)],
            ),
        )
