"""Grafana dashboards."""
import pulumi

from homelab.core.component import ContainerSpec, ServiceArgs, ServiceComponent, VolumeMount
from homelab.models.settings import GrafanaSettings


class GrafanaDockerService(ServiceComponent):
    TYPE = "homelab:docker:Grafana"
    CONFIG_NAMESPACE = "grafana"
    SETTINGS = GrafanaSettings
    IMAGES = {"grafana": "grafana/grafana-oss:latest"}

    def declare(self, args: ServiceArgs) -> None:
        settings: GrafanaSettings = args.settings

        image = self.registry_image("grafana")
        data = self.sftp_volume("grafana-data", "grafana/data")

        self.container(
            "grafana",
            ContainerSpec(
                image=image,
                hostname=self.hostname("grafana"),
                env=[pulumi.Output.concat("GF_INSTALL_PLUGINS=", settings.plugins)],
                networks=[args.network],
                mounts=[VolumeMount(data, "/var/lib/grafana")],
            ),
        )
