"""Caddy reverse proxy in front of every service on the proxy network."""
from homelab.core.component import ContainerSpec, Port, ServiceArgs, ServiceComponent, VolumeMount


class CaddyDockerService(ServiceComponent):
    """Caddy built from ``assets/caddy`` with the homelab Caddyfile baked in.

    Certificates and ACME state live on the SFTP storage.
    """

    TYPE = "homelab:docker:Caddy"
    CONFIG_NAMESPACE = "caddy"
    BUILDS = {"caddy": "caddy"}

    def declare(self, args: ServiceArgs) -> None:
        image = self.build_image("caddy")

        data = self.sftp_volume("caddy-data", "caddy/data")
        config = self.sftp_volume("caddy-config", "caddy/config")

        self.container(
            "caddy",
            ContainerSpec(
                image=image,
                hostname=self.hostname("caddy"),
                entrypoints=[
                    "caddy",
                    "run",
                    "--config",
                    "/etc/caddy/Caddyfile",
                    "--adapter",
                    "caddyfile",
                ],
                ports=[
                    Port(80),
                    Port(443),
                    # HTTP/3
                    Port(443, protocol="udp"),
                ],
                networks=[args.network],
                mounts=[VolumeMount(data, "/data"), VolumeMount(config, "/config")],
            ),
        )
