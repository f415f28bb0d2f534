"""Project directory resolution and Gradle wrapper invocation."""
from __future__ import annotations

import os
import shlex
import subprocess
from pathlib import Path
from typing import List, Mapping, Optional

from common.errors import ConfigurationError, GradleTaskError
from common.logging import get_logger

LOGGER = get_logger(__name__)

ROOT_DESCRIPTORS = ("build.gradle", "build.gradle.kts")


def project_dir(
    root: Path | str,
    source_dir_env: str = "BITRISE_SOURCE_DIR",
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Resolve ``root``; relative paths are taken from the source dir env value."""

    path = Path(root)
    if path.is_absolute():
        return path
    env = environ if environ is not None else os.environ
    base = env.get(source_dir_env)
    if not base:
        raise ConfigurationError(f"{source_dir_env} is not set, cannot resolve relative project path {root}")
    return Path(base) / path


def find_root_gradle(directory: Path) -> Path:
    """Return the root build descriptor of ``directory``.

    The step only uses it to check that ``directory`` is a Gradle project;
    nothing is written to the root descriptor.
    """

    for name in ROOT_DESCRIPTORS:
        candidate = directory / name
        if candidate.exists():
            return candidate
    raise ConfigurationError(
        f"could not find any suitable build gradle files in {directory}. Please make sure the input for "
        "project path is correctly set and there is a build.gradle or build.gradle.kts file"
    )


def gradle_command(directory: Path, task: str, options: str = "") -> List[str]:
    try:
        extra = shlex.split(options or "")
    except ValueError as exc:
        raise ConfigurationError(
            f'cannot parse Gradle task options, please make sure it is set correctly. Value: "{options}". '
            f"Error: {exc}"
        ) from exc
    return [str(directory / "gradlew"), task, "-p", str(directory), *extra]


def run_gradle_task(directory: Path, task: str, options: str = "") -> subprocess.CompletedProcess:
    cmd = gradle_command(directory, task, options)
    LOGGER.info("==> Executing: %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, cwd=directory, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise GradleTaskError(f"{task} could not be started: {exc}") from exc
    if proc.returncode != 0:
        raise GradleTaskError(
            f"{task} failed ({proc.returncode})\nConsole output: {proc.stdout}\nError output: {proc.stderr}",
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )
    return proc


__all__ = ["ROOT_DESCRIPTORS", "find_root_gradle", "gradle_command", "project_dir", "run_gradle_task"]
