"""Read-only module model consumed by the injector.

The build tool is the source of truth for configurations, dependencies and
applied plugins. It exports them as a project model (YAML or JSON) that this
module turns into :class:`ModuleSnapshot` objects::

    modules:
      - name: app
        project_dir: app
        build_file: app/build.gradle
        plugins: [com.android.application]
        configurations:
          debugRuntimeClasspath:
            - io.bitrise.trace:trace-sdk:0.0.4
        buildscript_configurations:
          classpath:
            - {group: com.android.tools.build, name: gradle, version: 4.0.2}
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple

import yaml

from common.errors import ConfigurationError
from common.schema import DependencyDescriptor, DescriptorValidationError


class ModuleQuery(Protocol):
    """Capability queries the injector needs from a build module."""

    name: str
    project_dir: Path
    build_file: Path

    def list_configurations(self) -> Sequence[str]:
        ...

    def list_dependencies(self, configuration: str) -> Sequence[DependencyDescriptor]:
        ...

    def list_buildscript_configurations(self) -> Sequence[str]:
        ...

    def list_buildscript_dependencies(self, configuration: str) -> Sequence[DependencyDescriptor]:
        ...

    def list_applied_plugins(self) -> Sequence[str]:
        ...


Configurations = Dict[str, Tuple[DependencyDescriptor, ...]]


@dataclass(frozen=True)
class ModuleSnapshot:
    name: str
    project_dir: Path
    build_file: Path
    plugins: Tuple[str, ...] = ()
    configurations: Configurations = field(default_factory=dict)
    buildscript_configurations: Configurations = field(default_factory=dict)

    def list_configurations(self) -> Sequence[str]:
        return list(self.configurations)

    def list_dependencies(self, configuration: str) -> Sequence[DependencyDescriptor]:
        return list(self.configurations.get(configuration, ()))

    def list_buildscript_configurations(self) -> Sequence[str]:
        return list(self.buildscript_configurations)

    def list_buildscript_dependencies(self, configuration: str) -> Sequence[DependencyDescriptor]:
        return list(self.buildscript_configurations.get(configuration, ()))

    def list_applied_plugins(self) -> Sequence[str]:
        return list(self.plugins)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any], *, base_dir: Optional[Path] = None) -> "ModuleSnapshot":
        name = str(raw.get("name") or "").strip()
        if not name:
            raise ConfigurationError(f"Module entry without name: {dict(raw)!r}")
        base = base_dir or Path.cwd()
        project_dir = _resolve(base, raw.get("project_dir") or name)
        build_file_raw = raw.get("build_file")
        if build_file_raw:
            build_file = _resolve(base, build_file_raw)
        else:
            build_file = project_dir / "build.gradle"
        plugins = raw.get("plugins") or []
        if not isinstance(plugins, list):
            raise ConfigurationError(f"Module {name}: plugins must be a list")
        return cls(
            name=name,
            project_dir=project_dir,
            build_file=build_file,
            plugins=tuple(str(plugin) for plugin in plugins),
            configurations=_parse_configurations(name, raw.get("configurations")),
            buildscript_configurations=_parse_configurations(name, raw.get("buildscript_configurations")),
        )


def _resolve(base: Path, value: Any) -> Path:
    path = Path(str(value))
    return path if path.is_absolute() else base / path


def _parse_configurations(module: str, raw: Any) -> Configurations:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Module {module}: configurations must be a mapping")
    parsed: Configurations = {}
    for configuration, entries in raw.items():
        try:
            parsed[str(configuration)] = tuple(DependencyDescriptor.from_raw(entry) for entry in entries or [])
        except DescriptorValidationError as exc:
            raise ConfigurationError(f"Module {module}, configuration {configuration}: {exc}") from exc
    return parsed


def load_project_model(path: Path) -> List[ModuleSnapshot]:
    """Load module snapshots from a YAML/JSON project model.

    Relative paths inside the model are resolved against the model's directory.
    """

    if not path.exists():
        raise ConfigurationError(f"Project model not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Project model {path} is not valid YAML/JSON: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Failed to read project model {path}: {exc}") from exc
    if isinstance(data, list):
        entries = data
    elif isinstance(data, dict):
        entries = data.get("modules") or []
    else:
        raise ConfigurationError(f"Project model {path} must contain a mapping or a list")
    base_dir = path.resolve().parent
    modules: List[ModuleSnapshot] = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise ConfigurationError(f"Project model {path}: module entries must be mappings")
        modules.append(ModuleSnapshot.from_raw(entry, base_dir=base_dir))
    return modules


def find_application_module(modules: Iterable[ModuleQuery], plugin_id: str) -> ModuleQuery:
    """Return the first module that applies ``plugin_id``."""

    for module in modules:
        if plugin_id in module.list_applied_plugins():
            return module
    raise ConfigurationError(
        f'No module with "{plugin_id}" plugin found. You must have at least one application '
        "module in your project to install the SDK!"
    )


__all__ = [
    "ModuleQuery",
    "ModuleSnapshot",
    "find_application_module",
    "load_project_model",
]
