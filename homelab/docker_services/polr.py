"""Polr URL shortener backed by MySQL."""
import pulumi

from homelab.core.component import ContainerSpec, ServiceArgs, ServiceComponent, VolumeMount
from homelab.models.settings import PolrSettings

MYSQL_DATABASE = "polr"
MYSQL_USER = "polr"


class PolrDockerService(ServiceComponent):
    TYPE = "homelab:docker:Polr"
    CONFIG_NAMESPACE = "polr"
    SETTINGS = PolrSettings
    IMAGES = {
        "polr": "ajanvier/polr:latest",
        "polr-mysql": "mysql:8",
    }

    def declare(self, args: ServiceArgs) -> None:
        settings: PolrSettings = args.settings

        polr_image = self.registry_image("polr")
        mysql_image = self.registry_image("polr-mysql")

        data = self.sftp_volume("polr-data", "polr/data")

        internal = self.internal_network("polr-internal")

        database = self.container(
            "polr-database",
            ContainerSpec(
                image=mysql_image,
                hostname="polr-database",
                env=[
                    f"MYSQL_DATABASE={MYSQL_DATABASE}",
                    f"MYSQL_USER={MYSQL_USER}",
                    pulumi.Output.concat("MYSQL_PASSWORD=", settings.mysql_password),
                    "MYSQL_RANDOM_ROOT_PASSWORD=yes",
                ],
                networks=[internal],
                mounts=[VolumeMount(data, "/var/lib/mysql")],
            ),
        )
        self.container(
            "polr",
            ContainerSpec(
                image=polr_image,
                hostname=self.hostname("polr"),
                env=[
                    pulumi.Output.concat("DB_HOST=", database.hostname),
                    f"DB_DATABASE={MYSQL_DATABASE}",
                    f"DB_USERNAME={MYSQL_USER}",
                    pulumi.Output.concat("DB_PASSWORD=", settings.mysql_password),
                    pulumi.Output.concat("APP_NAME=", settings.app_name),
                    pulumi.Output.concat("APP_ADDRESS=", settings.app_address),
                    pulumi.Output.concat("ADMIN_USERNAME=", settings.admin_username),
                    pulumi.Output.concat("ADMIN_PASSWORD=", settings.admin_password),
                    "SETTING_SHORTEN_PERMISSION=true",
                ],
                networks=[args.network, internal],
                links=[database],
            ),
        )
