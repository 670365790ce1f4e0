"""Filestash web file manager with an OnlyOffice document server."""
import pulumi

from homelab.core.component import ContainerSpec, ServiceArgs, ServiceComponent, VolumeMount
from homelab.models.settings import FilestashSettings


class FilestashDockerService(ServiceComponent):
    TYPE = "homelab:docker:Filestash"
    CONFIG_NAMESPACE = "filestash"
    SETTINGS = FilestashSettings
    IMAGES = {
        "filestash": "machines/filestash:latest",
        "filestash-onlyoffice": "onlyoffice/documentserver:latest",
    }

    def declare(self, args: ServiceArgs) -> None:
        settings: FilestashSettings = args.settings

        filestash_image = self.registry_image("filestash")
        onlyoffice_image = self.registry_image("filestash-onlyoffice")

        config = self.sftp_volume("filestash-config", "filestash/config")

        internal = self.internal_network("filestash-internal")

        onlyoffice = self.container(
            "filestash-onlyoffice",
            ContainerSpec(
                image=onlyoffice_image,
                hostname="onlyoffice",
                networks=[internal],
            ),
        )
        self.container(
            "filestash",
            ContainerSpec(
                image=filestash_image,
                hostname=self.hostname("filestash"),
                env=[
                    pulumi.Output.concat("APPLICATION_URL=", settings.application_url),
                    pulumi.Output.concat("ONLYOFFICE_URL=http://", onlyoffice.hostname),
                    pulumi.Output.concat("CONFIG_SECRET=", settings.config_secret),
                ],
                networks=[args.network, internal],
                mounts=[VolumeMount(config, "/app/data/state")],
                links=[onlyoffice],
            ),
        )
