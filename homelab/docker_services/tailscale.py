"""Tailscale node joining the proxy network to the tailnet."""
import pulumi

from homelab.core.component import ContainerSpec, ServiceArgs, ServiceComponent, VolumeMount
from homelab.models.settings import TailscaleSettings

STATE_DIR = "/var/lib/tailscale"


class TailscaleDockerService(ServiceComponent):
    """Node state lives in a local volume.

    Neither ``storage`` nor ``sftp_base_path`` is required: a missing base path
    is accepted here, unlike for the SFTP-backed services.
    """

    TYPE = "homelab:docker:Tailscale"
    CONFIG_NAMESPACE = "tailscale"
    SETTINGS = TailscaleSettings
    REQUIRED = ("network", "platform")
    IMAGES = {"tailscale": "ghcr.io/tailscale/tailscale:latest"}

    def declare(self, args: ServiceArgs) -> None:
        settings: TailscaleSettings = args.settings

        image = self.registry_image("tailscale")
        state = self.local_volume("tailscale-data")

        self.container(
            "tailscale",
            ContainerSpec(
                image=image,
                hostname=self.hostname("tailscale"),
                env=[
                    pulumi.Output.concat("TS_EXTRA_ARGS=", settings.extra_args),
                    f"TS_STATE_DIR={STATE_DIR}",
                    pulumi.Output.concat("TS_AUTHKEY=", settings.auth_key),
                ],
                networks=[args.network],
                mounts=[VolumeMount(state, STATE_DIR)],
            ),
        )
