"""Concourse CI: web node, containerd worker and postgres."""
import pulumi

from homelab.core.component import ContainerSpec, ServiceArgs, ServiceComponent, VolumeMount
from homelab.docker_services.postgres import declare_postgres
from homelab.models.settings import ConcourseSettings

POSTGRES_USER = "concourse_user"
POSTGRES_DB = "concourse"
KEYS_DIR = "/concourse-keys"


class ConcourseDockerService(ServiceComponent):
    TYPE = "homelab:docker:Concourse"
    CONFIG_NAMESPACE = "concourse"
    SETTINGS = ConcourseSettings
    IMAGES = {
        "concourse": "concourse/concourse:7.11.1",
        "concourse-postgres": "postgres:15-alpine",
    }

    def declare(self, args: ServiceArgs) -> None:
        settings: ConcourseSettings = args.settings

        concourse_image = self.registry_image("concourse")
        postgres_image = self.registry_image("concourse-postgres")

        data = self.sftp_volume("concourse-data", "concourse/data")
        keys = self.sftp_volume("concourse-keys", "concourse/keys")

        internal = self.internal_network("concourse-internal")

        postgres = declare_postgres(
            self,
            "concourse-postgres",
            image=postgres_image,
            hostname="concourse-db",
            network=internal,
            volume=data,
            user=POSTGRES_USER,
            password=settings.postgres_password,
            database=POSTGRES_DB,
            data_dir="/database",
            extra_env=["PGDATA=/database"],
        )
        web = self.container(
            "concourse",
            ContainerSpec(
                image=concourse_image,
                hostname=self.hostname("concourse"),
                command=["web"],
                env=[
                    f"CONCOURSE_SESSION_SIGNING_KEY={KEYS_DIR}/session_signing_key",
                    f"CONCOURSE_TSA_AUTHORIZED_KEYS={KEYS_DIR}/authorized_worker_keys",
                    f"CONCOURSE_TSA_HOST_KEY={KEYS_DIR}/tsa_host_key",
                    pulumi.Output.concat("CONCOURSE_POSTGRES_HOST=", postgres.hostname),
                    f"CONCOURSE_POSTGRES_USER={POSTGRES_USER}",
                    pulumi.Output.concat("CONCOURSE_POSTGRES_PASSWORD=", settings.postgres_password),
                    f"CONCOURSE_POSTGRES_DATABASE={POSTGRES_DB}",
                    pulumi.Output.concat("CONCOURSE_EXTERNAL_URL=", settings.external_url),
                    pulumi.Output.concat("CONCOURSE_ADD_LOCAL_USER=", settings.add_local_user),
                    pulumi.Output.concat("CONCOURSE_MAIN_TEAM_LOCAL_USER=", settings.main_team_local_user),
                    pulumi.Output.concat("CONCOURSE_CLUSTER_NAME=", settings.cluster_name),
                ],
                networks=[args.network, internal],
                mounts=[VolumeMount(keys, KEYS_DIR)],
                links=[postgres],
            ),
        )
        self.container(
            "concourse-worker",
            ContainerSpec(
                image=concourse_image,
                hostname="concourse-worker",
                command=["worker"],
                privileged=True,
                env=[
                    "CONCOURSE_RUNTIME=containerd",
                    f"CONCOURSE_TSA_PUBLIC_KEY={KEYS_DIR}/tsa_host_key.pub",
                    f"CONCOURSE_TSA_WORKER_PRIVATE_KEY={KEYS_DIR}/worker_key",
                    pulumi.Output.concat("CONCOURSE_TSA_HOST=", web.hostname, ":2222"),
                    "CONCOURSE_BIND_IP=0.0.0.0",
                    "CONCOURSE_BAGGAGECLAIM_BIND_IP=0.0.0.0",
                    "CONCOURSE_BAGGAGECLAIM_DRIVER=overlay",
                    "CONCOURSE_CONTAINERD_DNS_PROXY_ENABLE=true",
                ],
                networks=[internal],
                mounts=[VolumeMount(keys, KEYS_DIR)],
                links=[web],
            ),
        )
