"""Error taxonomy shared by the injector and the step orchestrator."""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class InjectorError(RuntimeError):
    """Base class for every failure surfaced to the caller."""


class ConfigurationError(InjectorError):
    """Raised when the run cannot start: missing module, env value or file."""


class UnknownDialectError(ConfigurationError):
    """Raised when a descriptor suffix maps to no supported dialect."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Could not determine language for {path}")
        self.path = str(path)


class PatchIOError(InjectorError):
    """Wraps copy/write failures with the paths involved.

    The underlying exception is chained via ``raise ... from``.
    """

    def __init__(
        self,
        message: str,
        *,
        source: Optional[Path | str] = None,
        destination: Optional[Path | str] = None,
    ) -> None:
        details = []
        if source is not None:
            details.append(f"source={source}")
        if destination is not None:
            details.append(f"destination={destination}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)
        self.source = str(source) if source is not None else None
        self.destination = str(destination) if destination is not None else None


class GradleTaskError(InjectorError):
    def __init__(self, message: str, returncode: int | None = None, stdout: str = "", stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


__all__ = [
    "ConfigurationError",
    "GradleTaskError",
    "InjectorError",
    "PatchIOError",
    "UnknownDialectError",
]
