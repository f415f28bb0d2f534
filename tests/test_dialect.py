from __future__ import annotations

import pytest

from common.errors import ConfigurationError, UnknownDialectError
from common.schema import DependencyDescriptor
from injector.dialect import GROOVY, KOTLIN, content_to_append, detect_dialect

FRAGMENT = "dummy.gradle"


def test_groovy_apply_fragment() -> None:
    assert content_to_append("build.gradle", FRAGMENT) == '\napply from: "dummy.gradle"'


def test_kotlin_apply_fragment() -> None:
    assert content_to_append("app/build.gradle.kts", FRAGMENT) == '\napply("dummy.gradle")'


def test_unknown_suffix_raises() -> None:
    with pytest.raises(UnknownDialectError) as excinfo:
        content_to_append("README.md", FRAGMENT)
    assert isinstance(excinfo.value, ConfigurationError)
    assert "README.md" in str(excinfo.value)


def test_detect_dialect() -> None:
    assert detect_dialect("settings.gradle.kts") is KOTLIN
    assert detect_dialect("app/build.gradle") is GROOVY


def test_dependency_statements_differ_per_dialect() -> None:
    dependency = DependencyDescriptor(name="trace-gradle-plugin", group="io.bitrise.trace.plugin", version="0.0.3")
    assert KOTLIN.dependency_statement("classpath", dependency) == (
        'dependencies.add("classpath", "io.bitrise.trace.plugin:trace-gradle-plugin:0.0.3")'
    )
    assert GROOVY.dependency_statement("classpath", dependency) == (
        'dependencies.add "classpath", "io.bitrise.trace.plugin:trace-gradle-plugin:0.0.3"'
    )
