"""Tests for kube service declarations."""
import pulumi
import pulumi_docker as docker
import pytest

from homelab.core.kube import KEDA_INTERCEPTOR, KEDA_NAMESPACE
from homelab.docker_services.rss_bridge import WHITELIST
from homelab.kube_services import KUBE_SERVICES
from homelab.kube_services.registry import RegistryKubeService
from homelab.kube_services.rss_bridge import RssBridgeKubeService


def _contains(resources, resource):
    return any(resource is other for other in resources)


class TestRegistry:
    """Test the registry deployment quartet."""

    def test_bundle_names(self, kube_args):
        component = RegistryKubeService("registry", kube_args(RegistryKubeService))
        assert list(component.resources) == [
            "registry-namespace",
            "registry",
            "registry-service",
            "registry-autoscale",
            "registry-proxy",
        ]
        assert list(component.workloads) == ["registry"]

    def test_route_waits_for_autoscaler(self, kube_args):
        component = RegistryKubeService("registry", kube_args(RegistryKubeService))
        assert _contains(component.dependencies["registry-proxy"], component.resources["registry-autoscale"])
        assert _contains(component.dependencies["registry-service"], component.resources["registry"])

    @pulumi.runtime.test
    def test_container_listens_on_registry_port(self, kube_args):
        component = RegistryKubeService("registry", kube_args(RegistryKubeService))

        def check(spec):
            container = spec.template.spec.containers[0]
            assert container.image == "registry:2"
            assert container.env[0].name == "REGISTRY_HTTP_ADDR"
            assert container.env[0].value == "0.0.0.0:5000"
            assert container.ports[0].container_port == 5000
        return component.resources["registry"].spec.apply(check)

    @pulumi.runtime.test
    def test_scaled_object(self, kube_args, pulumi_mocks):
        component = RegistryKubeService("registry", kube_args(RegistryKubeService))
        scaled = component.resources["registry-autoscale"]

        def check(_):
            inputs = pulumi_mocks.inputs["registry-autoscale"]
            assert inputs["apiVersion"] == "http.keda.sh/v1alpha1"
            assert inputs["kind"] == "HTTPScaledObject"
        return scaled.id.apply(check)

    @pulumi.runtime.test
    def test_ingress_route_lives_with_interceptor(self, kube_args, pulumi_mocks):
        component = RegistryKubeService("registry", kube_args(RegistryKubeService))
        route = component.resources["registry-proxy"]

        def check(_):
            inputs = pulumi_mocks.inputs["registry-proxy"]
            assert inputs["kind"] == "IngressRoute"
            assert inputs["metadata"]["namespace"] == KEDA_NAMESPACE
        return route.id.apply(check)

    def test_interceptor_service_name(self):
        assert KEDA_INTERCEPTOR == "keda-add-ons-http-interceptor-proxy"


class TestRssBridge:
    """Test the kube RSS-Bridge with its locally built image."""

    def test_bundle_names(self, kube_args):
        component = RssBridgeKubeService("rss_bridge", kube_args(RssBridgeKubeService))
        assert list(component.resources) == [
            "rss-bridge-namespace",
            "rss-bridge-image",
            "rss-bridge-config",
            "rss-bridge",
            "rss-bridge-service",
            "rss-bridge-autoscale",
            "rss-bridge-proxy",
        ]

    def test_scaled_object_named_after_app(self, kube_args):
        component = RssBridgeKubeService("rss_bridge", kube_args(RssBridgeKubeService))
        assert "nginx-autoscale" not in component.resources

    def test_deployment_depends_on_image_and_config(self, kube_args):
        component = RssBridgeKubeService("rss_bridge", kube_args(RssBridgeKubeService))
        dependencies = component.dependencies["rss-bridge"]
        assert _contains(dependencies, component.resources["rss-bridge-image"])
        assert _contains(dependencies, component.resources["rss-bridge-config"])
        assert isinstance(component.resources["rss-bridge-image"], docker.Image)

    @pulumi.runtime.test
    def test_whitelist_config_map(self, kube_args):
        component = RssBridgeKubeService("rss_bridge", kube_args(RssBridgeKubeService))

        def check(data):
            assert data == {"whitelist.txt": WHITELIST.read_text()}
        return component.resources["rss-bridge-config"].data.apply(check)

    @pulumi.runtime.test
    def test_local_image_is_never_pulled(self, kube_args):
        component = RssBridgeKubeService("rss_bridge", kube_args(RssBridgeKubeService))

        def check(spec):
            container = spec.template.spec.containers[0]
            assert container.image_pull_policy == "Never"
            assert container.image == "rss-bridge"
            assert container.volume_mounts[0].sub_path == "whitelist.txt"
        return component.resources["rss-bridge"].spec.apply(check)


@pytest.mark.parametrize("name", sorted(KUBE_SERVICES))
def test_dependencies_cover_references(name, kube_args):
    service = KUBE_SERVICES[name]
    component = service(name, kube_args(service))
    for logical_name, references in component.references.items():
        for reference in references:
            assert _contains(component.dependencies[logical_name], reference)
