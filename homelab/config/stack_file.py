"""Offline check of ``Pulumi.<stack>.yaml`` files.

Reports, per enabled service, the required config keys a stack file does not
set, without running the engine.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from homelab.config.loader import (
    DEFAULT_DOCKER_SERVICES,
    PLATFORM_KEY,
    STORAGE_KEYS,
    _check_names,
)
from homelab.core.component import is_missing
from homelab.core.errors import ConfigValidationError
from homelab.docker_services import DOCKER_SERVICES
from homelab.kube_services import KUBE_SERVICES
from homelab.models.settings import setting_keys

DEFAULT_PROJECT = "homelab"


class StackFile(BaseModel):
    """Parsed stack file; only ``config`` is inspected."""

    model_config = ConfigDict(extra='allow')

    config: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('config')
    @classmethod
    def validate_config(cls, v):
        """Validate keys are namespaced and secure values are ciphertext strings."""
        for key, value in v.items():
            if ':' not in key:
                raise ValueError(f"Config key '{key}' must be namespaced as 'project:key'")
            if isinstance(value, dict) and 'secure' in value:
                if not isinstance(value['secure'], str) or len(value) != 1:
                    raise ValueError(f"Config key '{key}' has a malformed secure value")
        return v

    def project_values(self, project: str) -> Dict[str, Any]:
        """Config values of ``project`` keyed without the namespace prefix."""
        prefix = f"{project}:"
        return {
            key[len(prefix):]: value
            for key, value in self.config.items()
            if key.startswith(prefix)
        }


@dataclass
class StackReport:
    path: Path
    docker_services: List[str]
    kube_services: List[str]
    missing: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not any(self.missing.values())


def load_stack_file(path: Union[str, Path]) -> StackFile:
    """Parse and validate a stack file.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not a valid stack file
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Stack file not found: {path}")

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"{path} is not valid YAML: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigValidationError(f"{path} must contain a mapping")

    try:
        return StackFile.model_validate(raw)
    except ValidationError as exc:
        raise ConfigValidationError(f"{path} is not a valid stack file:\n{exc}") from exc


def _service_list(values: Dict[str, Any], key: str, default: List[str], known, kind: str) -> List[str]:
    names = values.get(key, default)
    if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
        raise ConfigValidationError(f"{key} must be a list of service names")
    try:
        return _check_names(names, known, kind)
    except ValueError as exc:
        raise ConfigValidationError(str(exc)) from exc


def check_stack_file(path: Union[str, Path], project: str = DEFAULT_PROJECT) -> StackReport:
    """Report required keys the stack file leaves unset or empty.

    Missing keys are grouped under ``stack`` for shared keys and under the
    service name otherwise.
    """
    stack = load_stack_file(path)
    values = stack.project_values(project)

    docker_services = _service_list(values, "docker.services", DEFAULT_DOCKER_SERVICES, DOCKER_SERVICES, "docker")
    kube_services = _service_list(values, "kube.services", [], KUBE_SERVICES, "kube")
    report = StackReport(Path(path), docker_services, kube_services)

    stack_keys = [PLATFORM_KEY]
    if any("storage" in DOCKER_SERVICES[name].REQUIRED for name in docker_services):
        stack_keys.extend(STORAGE_KEYS)
    report.missing["stack"] = [key for key in stack_keys if is_missing(values.get(key))]

    enabled = [(name, DOCKER_SERVICES[name]) for name in docker_services]
    enabled += [(f"kube.{name}", KUBE_SERVICES[name]) for name in kube_services]
    for name, service in enabled:
        required = [
            key.config_key(service.CONFIG_NAMESPACE)
            for key in setting_keys(service.SETTINGS)
            if key.required
        ]
        report.missing[name] = [key for key in required if is_missing(values.get(key))]

    return report
