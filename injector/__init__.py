"""Idempotent dependency/plugin injection for Gradle build descriptors."""

from .comments import CommentMask, find_smallest_non_negative, mask_lines, strip_comments
from .project import ModuleQuery, ModuleSnapshot, find_application_module, load_project_model
from .service import InjectionReport, StepOutcome, TraceInjector

__all__ = [
    "CommentMask",
    "InjectionReport",
    "ModuleQuery",
    "ModuleSnapshot",
    "StepOutcome",
    "TraceInjector",
    "find_application_module",
    "find_smallest_non_negative",
    "load_project_model",
    "mask_lines",
    "strip_comments",
]
