"""Descriptor dialects, selected by file suffix."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from common.errors import UnknownDialectError
from common.schema import DependencyDescriptor


@dataclass(frozen=True)
class Dialect:
    name: str
    suffix: str
    apply_template: str
    dependency_template: str

    def apply_statement(self, file_name: str) -> str:
        """Content appended to a descriptor to apply another file."""

        return self.apply_template.format(file=file_name)

    def dependency_statement(self, configuration: str, dependency: DependencyDescriptor) -> str:
        return self.dependency_template.format(
            configuration=configuration,
            coordinates=dependency.coordinates,
        )


KOTLIN = Dialect(
    name="kotlin",
    suffix=".kts",
    apply_template='\napply("{file}")',
    dependency_template='dependencies.add("{configuration}", "{coordinates}")',
)
GROOVY = Dialect(
    name="groovy",
    suffix=".gradle",
    apply_template='\napply from: "{file}"',
    dependency_template='dependencies.add "{configuration}", "{coordinates}"',
)
DIALECTS: Tuple[Dialect, ...] = (KOTLIN, GROOVY)


def detect_dialect(path: Path | str) -> Dialect:
    text = str(path)
    for dialect in DIALECTS:
        if text.endswith(dialect.suffix):
            return dialect
    raise UnknownDialectError(path)


def content_to_append(build_file: Path | str, fragment_file: str) -> str:
    """Return the ``apply`` line for ``fragment_file`` in the dialect of ``build_file``."""

    return detect_dialect(build_file).apply_statement(fragment_file)


__all__ = ["DIALECTS", "GROOVY", "KOTLIN", "Dialect", "content_to_append", "detect_dialect"]
