"""Coder remote development environments."""
import pulumi

from homelab.core.component import ContainerSpec, HostMount, ServiceArgs, ServiceComponent
from homelab.docker_services.postgres import connection_url, declare_postgres, pg_isready
from homelab.models.settings import CoderSettings


class CoderDockerService(ServiceComponent):
    """Coder server with its postgres, driving workspaces on the host docker."""

    TYPE = "homelab:docker:Coder"
    CONFIG_NAMESPACE = "coder"
    SETTINGS = CoderSettings
    IMAGES = {
        "coder": "ghcr.io/coder/coder:v2.9.0",
        "postgres_14": "postgres:14",
    }

    def declare(self, args: ServiceArgs) -> None:
        settings: CoderSettings = args.settings

        coder_image = self.registry_image("coder")
        postgres_image = self.registry_image("postgres_14")

        data = self.sftp_volume("coder-data", "coder/data")

        internal = self.internal_network("internal-coder")

        postgres = declare_postgres(
            self,
            "coder-postgres",
            image=postgres_image,
            hostname="coder-postgres",
            network=internal,
            volume=data,
            user="coder",
            password=settings.postgres_password,
            database="coder",
            healthcheck=pg_isready("coder", "coder", interval="5s", start_period=None),
        )
        self.container(
            "coder",
            ContainerSpec(
                image=coder_image,
                hostname=self.hostname("coder"),
                env=[
                    pulumi.Output.concat(
                        "CODER_PG_CONNECTION_URL=",
                        connection_url(
                            "postgresql",
                            "coder",
                            settings.postgres_password,
                            postgres.hostname,
                            "coder",
                            query="?sslmode=disable",
                        ),
                    ),
                    "CODER_HTTP_ADDRESS=0.0.0.0:7080",
                    pulumi.Output.concat("CODER_ACCESS_URL=", settings.access_url),
                    pulumi.Output.concat("CODER_WILDCARD_ACCESS_URL=", settings.wildcard_url),
                ],
                networks=[args.network, internal],
                # Workspaces are started on the default bridge.
                network_names=["bridge"],
                mounts=[HostMount("/var/run/docker.sock", "/var/run/docker.sock")],
                links=[postgres],
                group_adds=[settings.docker_group_id],
            ),
        )
