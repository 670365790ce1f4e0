"""Per-service settings records.

Each field carries its config metadata: whether the key is required, whether
it is read as a secret, and its default. The stack config loader, the input
validation of every service and the ``homelab keys`` command all read the
same metadata through :func:`setting_keys`.
"""
from dataclasses import dataclass, field, fields
from typing import Any, List, Optional

import pulumi


def secret(required: bool = True, default: Any = None):
    """Settings field read with ``require_secret``/``get_secret``."""
    return field(default=default, metadata={"secret": True, "required": required})


def option(required: bool = False, default: Any = None):
    """Plain settings field read with ``require``/``get``."""
    return field(default=default, metadata={"secret": False, "required": required})


@dataclass(frozen=True)
class SettingKey:
    """Config metadata for one settings field."""
    name: str
    secret: bool
    required: bool
    default: Any = None

    def config_key(self, namespace: str) -> str:
        return f"{namespace}.{self.name}"


def setting_keys(settings_type: Optional[type]) -> List[SettingKey]:
    """Return the config metadata of a settings dataclass."""
    if settings_type is None:
        return []
    return [
        SettingKey(
            name=f.name,
            secret=f.metadata.get("secret", False),
            required=f.metadata.get("required", False),
            default=f.default,
        )
        for f in fields(settings_type)
    ]


@dataclass
class CoderSettings:
    docker_group_id: pulumi.Input[str] = option(required=True)
    postgres_password: pulumi.Input[str] = secret()
    access_url: pulumi.Input[str] = option(required=True)
    wildcard_url: pulumi.Input[str] = option(required=True)


@dataclass
class ConcourseSettings:
    postgres_password: pulumi.Input[str] = secret()
    add_local_user: pulumi.Input[str] = secret()
    main_team_local_user: pulumi.Input[str] = option(required=True)
    external_url: pulumi.Input[str] = option(required=True)
    cluster_name: pulumi.Input[str] = option(default="dev")


@dataclass
class FilestashSettings:
    config_secret: pulumi.Input[str] = secret()
    application_url: pulumi.Input[str] = option(default="")


@dataclass
class GrafanaSettings:
    plugins: pulumi.Input[str] = option(default="")


@dataclass
class KellnrSettings:
    origin_hostname: pulumi.Input[str] = option(required=True)
    origin_port: pulumi.Input[str] = option(default="443")
    origin_protocol: pulumi.Input[str] = option(default="https")


@dataclass
class MinifluxSettings:
    postgres_password: pulumi.Input[str] = secret()


@dataclass
class PolrSettings:
    mysql_password: pulumi.Input[str] = secret()
    app_name: pulumi.Input[str] = option(required=True)
    app_address: pulumi.Input[str] = option(required=True)
    admin_username: pulumi.Input[str] = secret()
    admin_password: pulumi.Input[str] = secret()


@dataclass
class TailscaleSettings:
    auth_key: pulumi.Input[str] = secret()
    extra_args: pulumi.Input[str] = option(default="--advertise-tags=tag:container")


@dataclass
class UmamiSettings:
    postgres_password: pulumi.Input[str] = secret()
    app_secret: pulumi.Input[str] = secret()


@dataclass
class KubeRouteSettings:
    domain: pulumi.Input[str] = option(required=True)
