"""Homepage dashboard."""
from homelab.core.component import ContainerSpec, ServiceArgs, ServiceComponent, VolumeMount


class HomepageDockerService(ServiceComponent):
    TYPE = "homelab:docker:Homepage"
    CONFIG_NAMESPACE = "homepage"
    IMAGES = {"homepage": "ghcr.io/gethomepage/homepage:v0.8.9"}

    def declare(self, args: ServiceArgs) -> None:
        image = self.registry_image("homepage")
        config = self.sftp_volume("homepage-config", "homepage/config")

        self.container(
            "homepage",
            ContainerSpec(
                image=image,
                hostname=self.hostname("homepage"),
                env=["PUID=1000", "PGID=1000"],
                networks=[args.network],
                mounts=[VolumeMount(config, "/app/config")],
            ),
        )
