"""Shaarli bookmarks with the stack theme and local plugins."""
from pathlib import Path
from typing import List

from homelab.core.component import (
    ASSETS_DIR,
    ContainerSpec,
    HostMount,
    ServiceArgs,
    ServiceComponent,
    VolumeMount,
)

SHAARLI_ROOT = "/var/www/shaarli"
THEME_DIR = ASSETS_DIR / "shaarli" / "themes" / "stack" / "stack"
PLUGINS_DIR = ASSETS_DIR / "shaarli" / "plugins"


def plugin_mounts(plugins_dir: Path) -> List[HostMount]:
    """One mount per plugin directory shipped next to the service."""
    if not plugins_dir.is_dir():
        return []
    return [
        HostMount(str(plugin), f"{SHAARLI_ROOT}/plugins/{plugin.name}")
        for plugin in sorted(plugins_dir.iterdir())
        if not plugin.name.startswith(".")
    ]


class ShaarliDockerService(ServiceComponent):
    TYPE = "homelab:docker:Shaarli"
    CONFIG_NAMESPACE = "shaarli"
    IMAGES = {"shaarli": "ghcr.io/shaarli/shaarli:v0.13.0"}

    def declare(self, args: ServiceArgs) -> None:
        image = self.registry_image("shaarli")
        data = self.sftp_volume("shaarli-data", "shaarli/data")

        self.container(
            "shaarli",
            ContainerSpec(
                image=image,
                hostname=self.hostname("shaarli"),
                networks=[args.network],
                mounts=[
                    VolumeMount(data, f"{SHAARLI_ROOT}/data"),
                    HostMount(str(THEME_DIR), f"{SHAARLI_ROOT}/tpl/stack"),
                    *plugin_mounts(PLUGINS_DIR),
                ],
            ),
        )
