"""RSS-Bridge built locally with a host-mounted whitelist."""
from homelab.core.component import ASSETS_DIR, ContainerSpec, HostMount, ServiceArgs, ServiceComponent

WHITELIST = ASSETS_DIR / "rss_bridge" / "whitelist.txt"


class RssBridgeDockerService(ServiceComponent):
    """RSS-Bridge keeps no state, so it needs no SFTP descriptor."""

    TYPE = "homelab:docker:RssBridge"
    CONFIG_NAMESPACE = "rss_bridge"
    REQUIRED = ("network", "platform")
    BUILDS = {"rss-bridge": "rss_bridge"}

    def declare(self, args: ServiceArgs) -> None:
        image = self.build_image("rss-bridge")

        self.container(
            "rss-bridge",
            ContainerSpec(
                image=image,
                hostname=self.hostname("rss-bridge"),
                networks=[args.network],
                mounts=[HostMount(str(WHITELIST), "/app/whitelist.txt", read_only=True)],
            ),
        )
