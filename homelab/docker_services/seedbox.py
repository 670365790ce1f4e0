"""Seedbox media stack.

rtorrent downloads into the shared data volume; flood is its web UI; radarr,
sonarr and prowlarr (with flaresolverr) automate downloads; jellyfin serves
the library and jfa-go handles jellyfin invitations.
"""
from homelab.core.component import (
    ContainerSpec,
    HostMount,
    Port,
    ServiceArgs,
    ServiceComponent,
    VolumeMount,
)

PUID = "1000"
PGID = "1001"
RTORRENT_SESSION = ".local/share/rtorrent"
TORRENT_PORT = 6881


class SeedboxDockerService(ServiceComponent):
    """Container hostnames are ``<hostname>-<app>``, ``hostname`` defaulting to ``seedbox``."""

    TYPE = "homelab:docker:Seedbox"
    CONFIG_NAMESPACE = "seedbox"
    IMAGES = {
        "jellyfin": "lscr.io/linuxserver/jellyfin:latest",
        "flood": "jesec/flood:master",
        "jfa-go": "hrfee/jfa-go:latest",
        "radarr": "lscr.io/linuxserver/radarr:latest",
        "sonarr": "lscr.io/linuxserver/sonarr:latest",
        "prowlarr": "lscr.io/linuxserver/prowlarr:latest",
        "flaresolverr": "ghcr.io/flaresolverr/flaresolverr:latest",
    }
    # Built locally until https://github.com/jesec/rtorrent/issues/53 is fixed upstream.
    BUILDS = {"rtorrent": "rtorrent"}

    def declare(self, args: ServiceArgs) -> None:
        prefix = self.hostname("seedbox")
        linuxserver_env = [f"PUID={PUID}", f"PGID={PGID}", f"TZ={args.timezone}"]

        jellyfin_image = self.registry_image("jellyfin")
        flood_image = self.registry_image("flood")
        rtorrent_image = self.build_image("rtorrent")
        jfa_go_image = self.registry_image("jfa-go")
        radarr_image = self.registry_image("radarr")
        sonarr_image = self.registry_image("sonarr")
        prowlarr_image = self.registry_image("prowlarr")
        flaresolverr_image = self.registry_image("flaresolverr")

        data = self.sftp_volume("seedbox-data", "seedbox/data")
        config = self.sftp_volume("seedbox-config", "seedbox/config")
        radarr_config = self.sftp_volume("seedbox-radarr-config", "seedbox/radarr_config")
        sonarr_config = self.sftp_volume("seedbox-sonarr-config", "seedbox/sonarr_config")
        prowlarr_config = self.sftp_volume("seedbox-prowlarr-config", "seedbox/prowlarr_config")
        jellyfin_config = self.sftp_volume("seedbox-jellyfin-config", "seedbox/jellyfin_config")
        jfa_go_data = self.sftp_volume("seedbox-jfa-go-data", "seedbox/jfa_go_data")

        internal = self.internal_network("internal-seedbox")

        self.container(
            "flood",
            ContainerSpec(
                image=flood_image,
                hostname=f"{prefix}-flood",
                user=f"{PUID}:{PGID}",
                env=["HOME=/config"],
                networks=[args.network],
                mounts=[VolumeMount(data, "/data"), VolumeMount(config, "/config")],
            ),
        )
        for name, image, app_config in (
            ("radarr", radarr_image, radarr_config),
            ("sonarr", sonarr_image, sonarr_config),
        ):
            self.container(
                name,
                ContainerSpec(
                    image=image,
                    hostname=f"{prefix}-{name}",
                    env=linuxserver_env,
                    networks=[args.network],
                    mounts=[
                        VolumeMount(data, "/data"),
                        # rtorrent session files, read from the shared config volume
                        VolumeMount(config, f"/config/{RTORRENT_SESSION}", subpath=RTORRENT_SESSION),
                        VolumeMount(app_config, "/config"),
                    ],
                ),
            )
        self.container(
            "prowlarr",
            ContainerSpec(
                image=prowlarr_image,
                hostname=f"{prefix}-prowlarr",
                env=linuxserver_env,
                networks=[args.network, internal],
                mounts=[VolumeMount(prowlarr_config, "/config")],
            ),
        )
        self.container(
            "flaresolverr",
            ContainerSpec(
                image=flaresolverr_image,
                hostname=f"{prefix}-flaresolverr",
                env=[
                    "LOG_LEVEL=info",
                    "LOG_HTML=false",
                    "CAPTCHA_SOLVER=none",
                    f"TZ={args.timezone}",
                ],
                networks=[args.network, internal],
            ),
        )
        # rtorrent stays on the default bridge and only publishes its peer port.
        self.container(
            "rtorrent",
            ContainerSpec(
                image=rtorrent_image,
                hostname=f"{prefix}-rtorrent",
                user=f"{PUID}:{PGID}",
                env=["HOME=/config"],
                command=["-o", "system.daemon.set=true"],
                memory=2048,
                memory_swap=2048,
                ports=[
                    Port(TORRENT_PORT, protocol="tcp"),
                    Port(TORRENT_PORT, protocol="udp"),
                ],
                mounts=[VolumeMount(config, "/config"), VolumeMount(data, "/data")],
            ),
        )
        jellyfin = self.container(
            "jellyfin",
            ContainerSpec(
                image=jellyfin_image,
                hostname=f"{prefix}-jellyfin",
                env=linuxserver_env,
                networks=[args.network],
                mounts=[VolumeMount(jellyfin_config, "/config"), VolumeMount(data, "/home")],
            ),
        )
        self.container(
            "jfa-go",
            ContainerSpec(
                image=jfa_go_image,
                hostname=f"{prefix}-jfa-go",
                networks=[args.network],
                mounts=[
                    VolumeMount(jellyfin_config, "/jf"),
                    HostMount("/etc/localtime", "/etc/localtime", read_only=True),
                    VolumeMount(jfa_go_data, "/data"),
                ],
                after=[jellyfin],
            ),
        )
