from __future__ import annotations

from pathlib import Path

from common.events import InjectionContext
from common.schema import DependencyDescriptor
from injector.oracle import (
    has_buildscript_dependency,
    has_dependency,
    has_module_dependency,
    has_plugin_applied,
    is_classpath_configuration,
)
from injector.project import ModuleSnapshot

TARGET = DependencyDescriptor(name="dummy-dependency", group="io.bitrise.dummy")


def _module(**kwargs) -> ModuleSnapshot:
    return ModuleSnapshot(name="app", project_dir=Path("app"), build_file=Path("app/build.gradle"), **kwargs)


def test_has_dependency_matches_name_and_group_ignoring_version() -> None:
    deps = [DependencyDescriptor(name="dummy-dependency", group="io.bitrise.dummy", version="9.9.9")]
    assert has_dependency("implementation", deps, TARGET)


def test_has_dependency_rejects_other_group_or_missing_group() -> None:
    deps = [
        DependencyDescriptor(name="dummy-dependency", group="not.bitrise.group"),
        DependencyDescriptor(name="dummy-dependency", group=None),
    ]
    assert not has_dependency("implementation", deps, TARGET)


def test_has_dependency_reports_events() -> None:
    context = InjectionContext.recording()
    has_dependency("debugRuntimeClasspath", [TARGET], TARGET, context)
    has_dependency("debugRuntimeClasspath", [], TARGET, context)
    assert context.sink.kinds() == ["dependency_found", "dependency_missing"]


def test_classpath_configuration_names() -> None:
    assert is_classpath_configuration("debugCompileClasspath")
    assert is_classpath_configuration("releaseRUNTIMECLASSPATH")
    assert not is_classpath_configuration("implementation")
    assert not is_classpath_configuration("testAnnotationProcessor")


def test_module_dependency_only_inspects_classpath_configurations() -> None:
    module = _module(configurations={"implementation": (TARGET,), "debugCompileClasspath": ()})
    assert not has_module_dependency(module, TARGET)

    module = _module(configurations={"implementation": (), "debugRuntimeClasspath": (TARGET,)})
    assert has_module_dependency(module, TARGET)


def test_buildscript_dependency_inspects_all_configurations() -> None:
    module = _module(buildscript_configurations={"classpath": (TARGET,)})
    assert has_buildscript_dependency(module, TARGET)
    assert not has_buildscript_dependency(_module(), TARGET)


def test_plugin_applied_is_membership() -> None:
    module = _module(plugins=("com.android.application", "io.bitrise.trace.plugin"))
    assert has_plugin_applied(module, "io.bitrise.trace.plugin")
    assert not has_plugin_applied(module, "io.bitrise.trace")
