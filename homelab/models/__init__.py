"""Data models for homelab."""
from homelab.models.settings import (
    CoderSettings,
    ConcourseSettings,
    FilestashSettings,
    GrafanaSettings,
    KellnrSettings,
    KubeRouteSettings,
    MinifluxSettings,
    PolrSettings,
    SettingKey,
    TailscaleSettings,
    UmamiSettings,
    setting_keys,
)

__all__ = [
    'CoderSettings',
    'ConcourseSettings',
    'FilestashSettings',
    'GrafanaSettings',
    'KellnrSettings',
    'KubeRouteSettings',
    'MinifluxSettings',
    'PolrSettings',
    'SettingKey',
    'TailscaleSettings',
    'UmamiSettings',
    'setting_keys',
]
