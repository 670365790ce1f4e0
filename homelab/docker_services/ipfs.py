"""IPFS node (kubo) with its swarm port published on the host."""
from homelab.core.component import ContainerSpec, Port, ServiceArgs, ServiceComponent, VolumeMount

SWARM_PORT = 4001


class IpfsDockerService(ServiceComponent):
    TYPE = "homelab:docker:Ipfs"
    CONFIG_NAMESPACE = "ipfs"
    IMAGES = {"ipfs": "ipfs/kubo:latest"}

    def declare(self, args: ServiceArgs) -> None:
        image = self.registry_image("ipfs")
        data = self.sftp_volume("ipfs-data", "ipfs/data")

        self.container(
            "ipfs",
            ContainerSpec(
                image=image,
                hostname=self.hostname("ipfs"),
                env=["IPFS_PROFILE=server"],
                ports=[
                    Port(SWARM_PORT, ip="0.0.0.0", protocol="tcp"),
                    Port(SWARM_PORT, ip="0.0.0.0", protocol="udp"),
                ],
                networks=[args.network],
                mounts=[VolumeMount(data, "/data/ipfs")],
            ),
        )
