"""Forgejo git forge with an actions runner backed by docker-in-docker."""
import pulumi

from homelab.core.component import (
    ContainerSpec,
    HostMount,
    Port,
    ServiceArgs,
    ServiceComponent,
    VolumeMount,
)


class ForgejoDockerService(ServiceComponent):
    """Forgejo, its runner, and the dind daemon the runner schedules jobs on.

    The runner must be registered once by hand:
    ``forgejo-runner register --no-interactive --token TOKEN --name runner
    --instance http://forgejo:3000``
    """

    TYPE = "homelab:docker:Forgejo"
    CONFIG_NAMESPACE = "forgejo"
    IMAGES = {
        "forgejo": "codeberg.org/forgejo/forgejo:1.21.5-0",
        "forgejo-runner": "code.forgejo.org/forgejo/runner:3.3.0",
        "forgejo-dind": "docker:dind",
    }

    def declare(self, args: ServiceArgs) -> None:
        forgejo_image = self.registry_image("forgejo")
        runner_image = self.registry_image("forgejo-runner")
        dind_image = self.registry_image("forgejo-dind")

        data = self.sftp_volume("forgejo-data", "forgejo/data")
        runner_data = self.sftp_volume("forgejo-runner-data", "forgejo/runner")

        internal = self.internal_network("forgejo-internal")

        dind = self.container(
            "forgejo-dind",
            ContainerSpec(
                image=dind_image,
                hostname="forgejo-dind",
                command=["dockerd", "-H", "tcp://0.0.0.0:2375", "--tls=false"],
                privileged=True,
                networks=[internal],
            ),
        )
        self.container(
            "forgejo-runner",
            ContainerSpec(
                image=runner_image,
                hostname="forgejo-runner",
                env=[pulumi.Output.concat("DOCKER_HOST=tcp://", dind.hostname, ":2375")],
                command=["forgejo-runner", "--config", "config.yml", "daemon"],
                networks=[internal],
                mounts=[VolumeMount(runner_data, "/data")],
                links=[dind],
            ),
        )
        self.container(
            "forgejo",
            ContainerSpec(
                image=forgejo_image,
                hostname=self.hostname("forgejo"),
                env=["USER_UID=1000", "USER_GID=1000"],
                ports=[Port(22)],
                networks=[args.network, internal],
                mounts=[
                    VolumeMount(data, "/data"),
                    HostMount("/etc/timezone", "/etc/timezone", read_only=True),
                    HostMount("/etc/localtime", "/etc/localtime", read_only=True),
                ],
            ),
        )
