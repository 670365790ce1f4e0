"""rss-forwarder: pushes feed entries to chat webhooks."""
from homelab.core.component import ContainerSpec, ServiceArgs, ServiceComponent, VolumeMount


class RssForwarderDockerService(ServiceComponent):
    TYPE = "homelab:docker:RssForwarder"
    CONFIG_NAMESPACE = "rss_forwarder"
    BUILDS = {"rss-forwarder": "rss_forwarder"}

    def declare(self, args: ServiceArgs) -> None:
        image = self.build_image("rss-forwarder")
        data = self.sftp_volume("rss-forwarder-data", "rss_forwarder/data")

        self.container(
            "rss-forwarder",
            ContainerSpec(
                image=image,
                hostname=self.hostname("rss-forwarder"),
                command=["rss-forwarder", "--debug", "/data/config.toml"],
                networks=[args.network],
                mounts=[VolumeMount(data, "/data")],
            ),
        )
