"""Injection workflow for the application module.

``TraceInjector.run`` performs three independent steps, each gated by a
presence check:

* the SDK dependency (copies ``traceSdk.gradle`` and applies it),
* the Gradle plugin as a buildscript dependency (rewrites or appends the
  ``buildscript`` block),
* the plugin apply (copies ``tracePlugin.gradle`` and applies it).

Steps are not transactional: files written by an earlier step stay on disk
when a later one fails.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from common.config import InjectorConfig
from common.errors import ConfigurationError
from common.events import InjectionContext

from injector.applier import PatchStrategy, apply_buildscript_dependency, apply_fragment_file, copy_auxiliary_file
from injector.oracle import has_buildscript_dependency, has_module_dependency, has_plugin_applied
from injector.project import ModuleQuery, find_application_module

SKIPPED = "skipped"
INJECTED = "injected"


@dataclass
class StepOutcome:
    step: str
    status: str
    strategy: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"step": self.step, "status": self.status}
        if self.strategy:
            payload["strategy"] = self.strategy
        return payload


@dataclass
class InjectionReport:
    module: str
    build_file: str
    steps: List[StepOutcome] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return any(step.status == INJECTED for step in self.steps)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "module": self.module,
            "build_file": self.build_file,
            "changed": self.changed,
            "steps": [step.to_dict() for step in self.steps],
        }


class TraceInjector:
    def __init__(
        self,
        config: InjectorConfig,
        context: Optional[InjectionContext] = None,
        *,
        source_dir: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.config = config
        self.context = context or InjectionContext()
        self._source_dir = source_dir
        self._environ = environ if environ is not None else os.environ

    def run(self, modules: Iterable[ModuleQuery]) -> InjectionReport:
        module = self.application_module(modules)
        report = InjectionReport(module=module.name, build_file=str(module.build_file))
        report.steps.append(self.ensure_sdk_dependency(module))
        report.steps.append(self.ensure_plugin_dependency(module))
        report.steps.append(self.ensure_plugin_applied(module))
        return report

    def application_module(self, modules: Iterable[ModuleQuery]) -> ModuleQuery:
        plugin_id = self.config.application_plugin
        candidates = list(modules)
        for module in candidates:
            self.context.debug(
                "module_check",
                f'Checking project "{module.name}" if it is an application',
                module=module.name,
            )
        module = find_application_module(candidates, plugin_id)
        self.context.info(
            "module_selected",
            f'Project "{module.name}" is an application! Ensuring it has all the required dependencies',
            module=module.name,
        )
        return module

    def step_source_dir(self) -> Path:
        """Directory holding the fragment files to copy."""

        if self._source_dir is not None:
            return self._source_dir
        env_name = self.config.step_source_env
        value = self._environ.get(env_name)
        if value is None:
            raise ConfigurationError(
                f"{env_name} is not set as env variable, aborting build. "
                "Please set it as env variable before running this step"
            )
        self.context.debug("env", f'Environment variable "{env_name}" is present with value "{value}".')
        return Path(value)

    def ensure_sdk_dependency(self, module: ModuleQuery) -> StepOutcome:
        sdk = self.config.sdk
        step = "sdk_dependency"
        if has_module_dependency(module, sdk.descriptor, self.context, self.config.classpath_markers):
            self.context.info(
                "skip",
                "Skipping injecting the dependency. Please make sure that in your build files the "
                "dependency is defined for all the required configurations!",
                step=step,
            )
            return StepOutcome(step=step, status=SKIPPED)
        self.context.info(
            "inject",
            f'Adding dependency on "{sdk.name}" for project "{module.name}".',
            step=step,
        )
        self._copy_and_apply(module, sdk.fragment_file)
        return StepOutcome(step=step, status=INJECTED, strategy=PatchStrategy.APPEND.value)

    def ensure_plugin_dependency(self, module: ModuleQuery) -> StepOutcome:
        plugin = self.config.plugin
        step = "plugin_dependency"
        if has_buildscript_dependency(module, plugin.descriptor, self.context):
            self.context.info(
                "skip",
                "Skipping injecting the buildscript dependency, it is already present.",
                step=step,
            )
            return StepOutcome(step=step, status=SKIPPED)
        self.context.info(
            "inject",
            f'Adding dependency on "{plugin.name}" for project "{module.name}".',
            step=step,
        )
        strategy = apply_buildscript_dependency(
            module.build_file,
            self.config.plugin_directive(),
            self.config.repositories,
            self.context,
        )
        return StepOutcome(step=step, status=INJECTED, strategy=strategy.value)

    def ensure_plugin_applied(self, module: ModuleQuery) -> StepOutcome:
        step = "plugin_apply"
        if has_plugin_applied(module, self.config.plugin_id):
            self.context.info(
                "skip",
                f'Project "{module.name}" has already applied "{self.config.plugin_id}" as a plugin, '
                "skipping injecting the plugin apply.",
                step=step,
            )
            return StepOutcome(step=step, status=SKIPPED)
        self._copy_and_apply(module, self.config.plugin.fragment_file)
        return StepOutcome(step=step, status=INJECTED, strategy=PatchStrategy.APPEND.value)

    def _copy_and_apply(self, module: ModuleQuery, fragment_file: Optional[str]) -> None:
        if not fragment_file:
            raise ConfigurationError("No fragment file configured for the dependency")
        source_dir = self.step_source_dir()
        destination = copy_auxiliary_file(source_dir, module.project_dir, fragment_file)
        self.context.debug(
            "copy",
            f'Copied "{source_dir / fragment_file}" to "{destination}".',
            source=str(source_dir / fragment_file),
            destination=str(destination),
        )
        apply_fragment_file(module.build_file, fragment_file, self.context)


__all__ = ["INJECTED", "SKIPPED", "InjectionReport", "StepOutcome", "TraceInjector"]
