"""Presence checks that gate every injection step.

Each check is side-effect free apart from the events it reports. A ``True``
answer turns the matching injection step into a no-op, which keeps repeated
runs from adding duplicate text to the descriptor.
"""
from __future__ import annotations

from typing import Iterable, Optional, Sequence

from common.events import InjectionContext
from common.schema import DependencyDescriptor

from injector.project import ModuleQuery

CLASSPATH_MARKERS = ("compileclasspath", "runtimeclasspath")


def is_classpath_configuration(name: str, markers: Sequence[str] = CLASSPATH_MARKERS) -> bool:
    lowered = name.lower()
    return any(marker in lowered for marker in markers)


def has_dependency(
    configuration: str,
    dependencies: Iterable[DependencyDescriptor],
    target: DependencyDescriptor,
    context: Optional[InjectionContext] = None,
) -> bool:
    """Return ``True`` when ``dependencies`` holds ``target`` (name and group)."""

    for dependency in dependencies:
        if target.same_as(dependency):
            if context is not None:
                context.info(
                    "dependency_found",
                    f'Configuration "{configuration}" already contains "{target.name}" as dependency '
                    f"with version {dependency.version}.",
                    configuration=configuration,
                    dependency=dependency.coordinates,
                )
            return True
    if context is not None:
        context.debug(
            "dependency_missing",
            f'Configuration "{configuration}" does not have a dependency on "{target.group}:{target.name}".',
            configuration=configuration,
            dependency=target.coordinates,
        )
    return False


def has_module_dependency(
    module: ModuleQuery,
    target: DependencyDescriptor,
    context: Optional[InjectionContext] = None,
    markers: Sequence[str] = CLASSPATH_MARKERS,
) -> bool:
    """Check the classpath-resolving configurations of ``module`` only."""

    for configuration in module.list_configurations():
        if not is_classpath_configuration(configuration, markers):
            continue
        if has_dependency(configuration, module.list_dependencies(configuration), target, context):
            return True
    return False


def has_buildscript_dependency(
    module: ModuleQuery,
    target: DependencyDescriptor,
    context: Optional[InjectionContext] = None,
) -> bool:
    for configuration in module.list_buildscript_configurations():
        if has_dependency(configuration, module.list_buildscript_dependencies(configuration), target, context):
            return True
    return False


def has_plugin_applied(module: ModuleQuery, plugin_id: str) -> bool:
    return plugin_id in module.list_applied_plugins()


__all__ = [
    "CLASSPATH_MARKERS",
    "has_buildscript_dependency",
    "has_dependency",
    "has_module_dependency",
    "has_plugin_applied",
    "is_classpath_configuration",
]
