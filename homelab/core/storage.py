"""Remote storage descriptor for rclone-backed docker volumes."""
import posixpath
from dataclasses import dataclass
from typing import Dict

import pulumi

# SOURCE: https://rclone.org/docker/
VOLUME_DRIVER = "rclone:latest"


@dataclass
class SftpStorage:
    """SFTP endpoint mounted by the rclone docker volume plugin."""
    host: pulumi.Input[str]
    port: pulumi.Input[str]
    user: pulumi.Input[str]
    password: pulumi.Input[str]

    def driver_opts(self, path: str) -> Dict[str, pulumi.Input[str]]:
        """Return rclone driver options mounting ``path`` on the endpoint."""
        return {
            "type": "sftp",
            "sftp-host": self.host,
            "sftp-port": self.port,
            "sftp-user": self.user,
            "sftp-pass": self.password,
            "allow-other": "true",
            "path": path,
        }


def remote_path(base_path: str, subpath: str) -> str:
    """Join a service sub-path under the SFTP base path."""
    return posixpath.join(base_path, subpath)
