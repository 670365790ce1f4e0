"""Kellnr private cargo registry."""
import pulumi

from homelab.core.component import ContainerSpec, ServiceArgs, ServiceComponent, VolumeMount
from homelab.models.settings import KellnrSettings


class KellnrDockerService(ServiceComponent):
    TYPE = "homelab:docker:Kellnr"
    CONFIG_NAMESPACE = "kellnr"
    SETTINGS = KellnrSettings
    IMAGES = {"kellnr": "ghcr.io/kellnr/kellnr:5.1.2"}

    def declare(self, args: ServiceArgs) -> None:
        settings: KellnrSettings = args.settings

        image = self.registry_image("kellnr")
        data = self.sftp_volume("kellnr-data", "kellnr/data")

        self.container(
            "kellnr",
            ContainerSpec(
                image=image,
                hostname=self.hostname("kellnr"),
                env=[
                    pulumi.Output.concat("KELLNR_ORIGIN__HOSTNAME=", settings.origin_hostname),
                    pulumi.Output.concat("KELLNR_ORIGIN__PORT=", settings.origin_port),
                    pulumi.Output.concat("KELLNR_ORIGIN__PROTOCOL=", settings.origin_protocol),
                    "KELLNR_DOCS__ENABLED=true",
                ],
                networks=[args.network],
                mounts=[VolumeMount(data, "/opt/kdata")],
            ),
        )
