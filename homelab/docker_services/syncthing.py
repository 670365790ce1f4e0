"""Syncthing file synchronisation."""
from homelab.core.component import ContainerSpec, Port, ServiceArgs, ServiceComponent, VolumeMount


class SyncthingDockerService(ServiceComponent):
    TYPE = "homelab:docker:Syncthing"
    CONFIG_NAMESPACE = "syncthing"
    IMAGES = {"syncthing": "lscr.io/linuxserver/syncthing:1.27.4"}

    def declare(self, args: ServiceArgs) -> None:
        image = self.registry_image("syncthing")

        config = self.sftp_volume("syncthing-config", "syncthing/config")
        data = self.sftp_volume("syncthing-data", "syncthing/data")

        self.container(
            "syncthing",
            ContainerSpec(
                image=image,
                hostname=self.hostname("syncthing"),
                env=["PUID=1000", "PGID=1000", f"TZ={args.timezone}"],
                ports=[
                    # sync protocol
                    Port(22000, protocol="tcp"),
                    Port(22000, protocol="udp"),
                    # local discovery
                    Port(21027, protocol="udp"),
                ],
                networks=[args.network],
                mounts=[VolumeMount(config, "/config"), VolumeMount(data, "/data")],
            ),
        )
