"""RSS-Bridge on the cluster.

The image is built on the node itself and never pushed, hence the ``Never``
pull policy. The whitelist ships as a ConfigMap mounted over the single file.
"""
import pulumi_kubernetes as k8s

from homelab.core.kube import KubeServiceArgs, KubeServiceComponent, Workload
from homelab.docker_services.rss_bridge import WHITELIST
from homelab.models.settings import KubeRouteSettings


class RssBridgeKubeService(KubeServiceComponent):
    TYPE = "homelab:kube:RssBridge"
    CONFIG_NAMESPACE = "kube.rss_bridge"
    SETTINGS = KubeRouteSettings
    APP = "rss-bridge"
    PORT = 80
    BUILDS = {"rss-bridge": "rss_bridge"}

    def workload(self, args: KubeServiceArgs, namespace: k8s.core.v1.Namespace) -> Workload:
        image = self.build_image("rss-bridge")
        config = self.config_map(
            "rss-bridge-config",
            namespace,
            {"whitelist.txt": WHITELIST.read_text()},
        )

        return Workload(
            container=k8s.core.v1.ContainerArgs(
                name=self.APP,
                image=image.image_name,
                image_pull_policy="Never",
                ports=[k8s.core.v1.ContainerPortArgs(container_port=self.PORT)],
                volume_mounts=[
                    k8s.core.v1.VolumeMountArgs(
                        name="whitelist",
                        mount_path="/app/whitelist.txt",
                        sub_path="whitelist.txt",
                    )
                ],
            ),
            volumes=[
                k8s.core.v1.VolumeArgs(
                    name="whitelist",
                    config_map=k8s.core.v1.ConfigMapVolumeSourceArgs(name=config.metadata.name),
                )
            ],
            references=[image, config],
        )
