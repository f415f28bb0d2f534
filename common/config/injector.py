"""Injector settings loaded from ``config/injector.yaml``.

Every key is optional; missing values fall back to the built-in defaults so
the injector stays usable without a config file.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from common.errors import ConfigurationError
from common.paths import get_config_dir
from common.schema import DependencyDescriptor, InjectionDirective

DEFAULT_CONFIG_NAME = "injector.yaml"


@dataclass(frozen=True)
class DependencySpec:
    """A dependency plus the auxiliary fragment file that declares it."""

    name: str
    group: str
    version: Optional[str] = None
    fragment_file: Optional[str] = None

    @property
    def descriptor(self) -> DependencyDescriptor:
        return DependencyDescriptor(name=self.name, group=self.group, version=self.version)

    @classmethod
    def from_raw(cls, raw: Optional[Mapping[str, Any]], base: "DependencySpec") -> "DependencySpec":
        raw = raw or {}
        if not isinstance(raw, Mapping):
            raise ConfigurationError(f"Dependency section must be a mapping, got {type(raw).__name__}")
        return cls(
            name=str(raw.get("name") or base.name),
            group=str(raw.get("group") or base.group),
            version=_optional_str(raw.get("version"), base.version),
            fragment_file=_optional_str(raw.get("fragment_file"), base.fragment_file),
        )


@dataclass(frozen=True)
class AddonFileSettings:
    """Settings of the add-on configuration file written by the step."""

    file_name: str = "bitrise-addons-configuration.json"
    version: str = "1.0.0"
    token_env: str = "APM_COLLECTOR_TOKEN"


@dataclass(frozen=True)
class InjectorConfig:
    sdk: DependencySpec = DependencySpec(
        name="trace-sdk",
        group="io.bitrise.trace",
        fragment_file="traceSdk.gradle",
    )
    plugin: DependencySpec = DependencySpec(
        name="trace-gradle-plugin",
        group="io.bitrise.trace.plugin",
        version="0.0.3",
        fragment_file="tracePlugin.gradle",
    )
    plugin_id: str = "io.bitrise.trace.plugin"
    application_plugin: str = "com.android.application"
    step_source_env: str = "BITRISE_STEP_SOURCE_DIR"
    source_dir_env: str = "BITRISE_SOURCE_DIR"
    buildscript_block: str = "buildscript"
    repositories: Tuple[str, ...] = ("jcenter", "google")
    classpath_markers: Tuple[str, ...] = ("compileclasspath", "runtimeclasspath")
    verify_task: str = "verifyTrace"
    addon_file: AddonFileSettings = field(default_factory=AddonFileSettings)

    def plugin_directive(self) -> InjectionDirective:
        return InjectionDirective(
            dependency=self.plugin.descriptor,
            block=self.buildscript_block,
            configuration="classpath",
        )

    @classmethod
    def from_raw(cls, raw: Optional[Mapping[str, Any]]) -> "InjectorConfig":
        raw = raw or {}
        if not isinstance(raw, Mapping):
            raise ConfigurationError("Injector config must contain a mapping")
        base = cls()
        repositories = _str_tuple(raw.get("repositories"), base.repositories)
        if len(repositories) < 2:
            raise ConfigurationError("At least two default repositories are required")
        addon_raw = raw.get("addon_file") or {}
        if not isinstance(addon_raw, Mapping):
            raise ConfigurationError("addon_file must be a mapping")
        addon = AddonFileSettings(
            file_name=str(addon_raw.get("file_name") or base.addon_file.file_name),
            version=str(addon_raw.get("version") or base.addon_file.version),
            token_env=str(addon_raw.get("token_env") or base.addon_file.token_env),
        )
        return replace(
            base,
            sdk=DependencySpec.from_raw(raw.get("sdk"), base.sdk),
            plugin=DependencySpec.from_raw(raw.get("plugin"), base.plugin),
            plugin_id=str(raw.get("plugin_id") or base.plugin_id),
            application_plugin=str(raw.get("application_plugin") or base.application_plugin),
            step_source_env=str(raw.get("step_source_env") or base.step_source_env),
            source_dir_env=str(raw.get("source_dir_env") or base.source_dir_env),
            buildscript_block=str(raw.get("buildscript_block") or base.buildscript_block),
            repositories=repositories,
            classpath_markers=tuple(
                marker.lower() for marker in _str_tuple(raw.get("classpath_markers"), base.classpath_markers)
            ),
            verify_task=str(raw.get("verify_task") or base.verify_task),
            addon_file=addon,
        )


def _optional_str(value: Any, default: Optional[str]) -> Optional[str]:
    if value is None:
        return default
    text = str(value).strip()
    return text or None


def _str_tuple(value: Any, default: Tuple[str, ...]) -> Tuple[str, ...]:
    if value is None:
        return default
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"Expected a list of strings, got {value!r}")
    items = tuple(str(item).strip() for item in value if str(item).strip())
    return items or default


def default_config_path() -> Path:
    return get_config_dir() / DEFAULT_CONFIG_NAME


def load_injector_config(path: Optional[Path] = None) -> InjectorConfig:
    """Load the injector config, using defaults when no file exists."""

    target = path or default_config_path()
    if not target.exists():
        if path is not None:
            raise ConfigurationError(f"Config file not found: {target}")
        return InjectorConfig()
    try:
        data: Dict[str, Any] = yaml.safe_load(target.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Config file {target} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {target} must contain a mapping")
    return InjectorConfig.from_raw(data)


__all__ = [
    "AddonFileSettings",
    "DependencySpec",
    "InjectorConfig",
    "default_config_path",
    "load_injector_config",
]
