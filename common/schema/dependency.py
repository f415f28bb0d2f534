"""Dependency descriptors and injection directives."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


class DescriptorValidationError(ValueError):
    """Raised when a dependency notation or mapping cannot be parsed."""


@dataclass(frozen=True)
class DependencyDescriptor:
    """A ``group:name[:version]`` coordinate.

    Two descriptors denote the same dependency when name and group match;
    the version never takes part in identity checks.
    """

    name: str
    group: Optional[str] = None
    version: Optional[str] = None

    def same_as(self, other: "DependencyDescriptor") -> bool:
        if other.group is None or self.group is None:
            return False
        return self.name == other.name and self.group == other.group

    @property
    def coordinates(self) -> str:
        parts = [self.group or "", self.name]
        if self.version:
            parts.append(self.version)
        return ":".join(parts)

    @classmethod
    def parse(cls, notation: str) -> "DependencyDescriptor":
        cleaned = (notation or "").strip()
        parts = cleaned.split(":")
        if len(parts) < 2 or len(parts) > 3 or not all(parts[:2]):
            raise DescriptorValidationError(f"Invalid dependency notation: {notation!r}")
        version = parts[2] if len(parts) == 3 and parts[2] else None
        return cls(name=parts[1], group=parts[0], version=version)

    @classmethod
    def from_raw(cls, raw: Any) -> "DependencyDescriptor":
        if isinstance(raw, DependencyDescriptor):
            return raw
        if isinstance(raw, str):
            return cls.parse(raw)
        if isinstance(raw, Mapping):
            name = str(raw.get("name") or "").strip()
            if not name:
                raise DescriptorValidationError(f"Dependency entry without name: {dict(raw)!r}")
            group = raw.get("group")
            version = raw.get("version")
            return cls(
                name=name,
                group=str(group).strip() if group else None,
                version=str(version).strip() if version else None,
            )
        raise DescriptorValidationError(f"Unsupported dependency entry: {raw!r}")


@dataclass(frozen=True)
class InjectionDirective:
    """What to add to a named block, under which configuration."""

    dependency: DependencyDescriptor
    block: str = "buildscript"
    configuration: str = "classpath"


__all__ = ["DependencyDescriptor", "DescriptorValidationError", "InjectionDirective"]
