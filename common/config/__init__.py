"""Configuration helpers for the injector and the step."""

from .injector import AddonFileSettings, DependencySpec, InjectorConfig, default_config_path, load_injector_config

__all__ = [
    "AddonFileSettings",
    "DependencySpec",
    "InjectorConfig",
    "default_config_path",
    "load_injector_config",
]
