"""File mutations: append-only writes, whole-file replace and fragment copies."""
from __future__ import annotations

import enum
import shutil
from pathlib import Path
from typing import Optional, Sequence

from common.errors import PatchIOError
from common.events import InjectionContext
from common.schema import InjectionDirective

from injector.buildscript import render_new_block, rewrite_block
from injector.dialect import content_to_append, detect_dialect


class PatchStrategy(str, enum.Enum):
    APPEND = "append"
    REWRITE = "rewrite"


def append_to_file(path: Path, content: str) -> None:
    try:
        with path.open("a", encoding="utf-8") as handle:
            handle.write(content)
    except OSError as exc:
        raise PatchIOError(f"Failed to append to file: {exc}", destination=path) from exc


def replace_file(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise PatchIOError(f"Failed to rewrite file: {exc}", destination=path) from exc


def read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PatchIOError(f"Failed to read file: {exc}", source=path) from exc


def copy_auxiliary_file(source_dir: Path, destination_dir: Path, file_name: str) -> Path:
    """Copy ``file_name`` byte for byte; an existing destination is never overwritten."""

    source = source_dir / file_name
    destination = destination_dir / file_name
    if destination.exists():
        raise PatchIOError("Destination already exists", source=source, destination=destination)
    try:
        shutil.copyfile(source, destination)
    except OSError as exc:
        raise PatchIOError(f"Failed to copy file: {exc}", source=source, destination=destination) from exc
    return destination


def apply_fragment_file(build_file: Path, file_name: str, context: Optional[InjectionContext] = None) -> str:
    """Append the dialect-specific ``apply`` of ``file_name`` to ``build_file``."""

    content = content_to_append(build_file, file_name)
    if context is not None:
        context.debug("append", f'Appending to "{build_file}" content: "{content}"', path=str(build_file))
    append_to_file(build_file, content)
    return content


def apply_buildscript_dependency(
    build_file: Path,
    directive: InjectionDirective,
    repositories: Sequence[str],
    context: Optional[InjectionContext] = None,
) -> PatchStrategy:
    """Inject the directive's dependency into the build file's block.

    Rewrites the existing block when there is one, otherwise appends a new
    block to the end of the file.
    """

    dialect = detect_dialect(build_file)
    statement = dialect.dependency_statement(directive.configuration, directive.dependency)
    result = rewrite_block(read_file(build_file), directive.block, statement, repositories[0])
    if result.updated and result.content is not None:
        replace_file(build_file, result.content)
        if context is not None:
            context.info(
                "block_rewritten",
                f'Updated {directive.block} block of "{build_file}".',
                path=str(build_file),
                offset=result.offset,
            )
        return PatchStrategy.REWRITE

    if context is not None:
        context.debug(
            "block_missing",
            f'"{build_file}" does not have {directive.block} block, adding it.',
            path=str(build_file),
        )
    append_to_file(build_file, render_new_block(directive.block, statement, repositories))
    return PatchStrategy.APPEND


__all__ = [
    "PatchStrategy",
    "append_to_file",
    "apply_buildscript_dependency",
    "apply_fragment_file",
    "copy_auxiliary_file",
    "read_file",
    "replace_file",
]
