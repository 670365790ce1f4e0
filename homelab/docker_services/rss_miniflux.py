"""Miniflux feed reader with its postgres."""
import pulumi

from homelab.core.component import ContainerSpec, ServiceArgs, ServiceComponent
from homelab.docker_services.postgres import connection_url, declare_postgres
from homelab.models.settings import MinifluxSettings


class RssMinifluxDockerService(ServiceComponent):
    TYPE = "homelab:docker:RssMiniflux"
    CONFIG_NAMESPACE = "rss_miniflux"
    SETTINGS = MinifluxSettings
    IMAGES = {
        "miniflux": "miniflux/miniflux:2.0.50",
        "miniflux-postgres": "postgres:14",
    }

    def declare(self, args: ServiceArgs) -> None:
        settings: MinifluxSettings = args.settings

        miniflux_image = self.registry_image("miniflux")
        postgres_image = self.registry_image("miniflux-postgres")

        data = self.sftp_volume("miniflux-data", "rss_miniflux/data")

        internal = self.internal_network("miniflux-internal")

        database = declare_postgres(
            self,
            "miniflux-database",
            image=postgres_image,
            hostname="miniflux-database",
            network=internal,
            volume=data,
            user="miniflux",
            password=settings.postgres_password,
            database="miniflux",
        )
        self.container(
            "miniflux",
            ContainerSpec(
                image=miniflux_image,
                hostname=self.hostname("miniflux"),
                env=[
                    pulumi.Output.concat(
                        "DATABASE_URL=",
                        connection_url(
                            "postgres",
                            "miniflux",
                            settings.postgres_password,
                            database.hostname,
                            "miniflux",
                            query="?sslmode=disable",
                        ),
                    ),
                    "RUN_MIGRATIONS=1",
                ],
                networks=[args.network, internal],
                links=[database],
            ),
        )
