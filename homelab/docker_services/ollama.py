"""Ollama model runner behind the Ollama web UI."""
import pulumi

from homelab.core.component import ContainerSpec, ServiceArgs, ServiceComponent, VolumeMount

OLLAMA_API_PORT = 11434


class OllamaDockerService(ServiceComponent):
    TYPE = "homelab:docker:Ollama"
    CONFIG_NAMESPACE = "ollama"
    IMAGES = {
        "ollama": "ghcr.io/ollama-webui/ollama-webui:main",
        "ollama-runner": "ollama/ollama:latest",
    }

    def declare(self, args: ServiceArgs) -> None:
        webui_image = self.registry_image("ollama")
        runner_image = self.registry_image("ollama-runner")

        data = self.sftp_volume("ollama-data", "ollama/data")

        internal = self.internal_network("ollama-internal")

        runner = self.container(
            "ollama-runner",
            ContainerSpec(
                image=runner_image,
                hostname="ollama-runner",
                networks=[internal],
            ),
        )
        self.container(
            "ollama",
            ContainerSpec(
                image=webui_image,
                hostname=self.hostname("ollama"),
                env=[
                    pulumi.Output.concat(
                        "OLLAMA_API_BASE_URL=http://", runner.hostname, f":{OLLAMA_API_PORT}/api"
                    )
                ],
                networks=[args.network, internal],
                mounts=[VolumeMount(data, "/app/backend/data")],
                links=[runner],
            ),
        )
