"""Umami web analytics with its postgres."""
import pulumi

from homelab.core.component import ContainerSpec, ServiceArgs, ServiceComponent
from homelab.docker_services.postgres import connection_url, declare_postgres
from homelab.models.settings import UmamiSettings

POSTGRES_PORT = 5432


class UmamiDockerService(ServiceComponent):
    TYPE = "homelab:docker:Umami"
    CONFIG_NAMESPACE = "umami"
    SETTINGS = UmamiSettings
    IMAGES = {
        "umami": "ghcr.io/umami-software/umami:postgresql-latest",
        "umami-postgres": "postgres:15-alpine",
    }

    def declare(self, args: ServiceArgs) -> None:
        settings: UmamiSettings = args.settings

        umami_image = self.registry_image("umami")
        postgres_image = self.registry_image("umami-postgres")

        data = self.sftp_volume("umami-data", "umami/data")

        internal = self.internal_network("umami-internal")

        database = declare_postgres(
            self,
            "umami-database",
            image=postgres_image,
            hostname="umami-database",
            network=internal,
            volume=data,
            user="umami",
            password=settings.postgres_password,
            database="umami",
        )
        self.container(
            "umami",
            ContainerSpec(
                image=umami_image,
                hostname=self.hostname("umami"),
                env=[
                    pulumi.Output.concat(
                        "DATABASE_URL=",
                        connection_url(
                            "postgresql",
                            "umami",
                            settings.postgres_password,
                            database.hostname,
                            "umami",
                            port=POSTGRES_PORT,
                        ),
                    ),
                    "DATABASE_TYPE=postgresql",
                    pulumi.Output.concat("APP_SECRET=", settings.app_secret),
                ],
                networks=[args.network, internal],
                links=[database],
            ),
        )
