from __future__ import annotations

from pathlib import Path

import pytest

from common.config import InjectorConfig, default_config_path, load_injector_config
from common.errors import ConfigurationError


def test_defaults_without_file() -> None:
    config = InjectorConfig.from_raw(None)
    assert config.plugin.descriptor.coordinates == "io.bitrise.trace.plugin:trace-gradle-plugin:0.0.3"
    assert config.sdk.fragment_file == "traceSdk.gradle"
    assert config.repositories == ("jcenter", "google")


def test_shipped_config_matches_defaults() -> None:
    assert default_config_path().exists()
    assert load_injector_config() == InjectorConfig()


def test_partial_override(tmp_path: Path) -> None:
    path = tmp_path / "injector.yaml"
    path.write_text(
        "plugin:\n  version: '1.2.3'\nrepositories: [mavenCentral, google]\nclasspath_markers: [CompileClasspath]\n",
        encoding="utf-8",
    )

    config = load_injector_config(path)

    assert config.plugin.version == "1.2.3"
    assert config.plugin.name == "trace-gradle-plugin"
    assert config.repositories == ("mavenCentral", "google")
    assert config.classpath_markers == ("compileclasspath",)
    assert config.plugin_directive().dependency.version == "1.2.3"


def test_invalid_configs(tmp_path: Path) -> None:
    path = tmp_path / "injector.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_injector_config(path)

    path.write_text("repositories: [jcenter]\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_injector_config(path)

    with pytest.raises(ConfigurationError):
        load_injector_config(tmp_path / "absent.yaml")
