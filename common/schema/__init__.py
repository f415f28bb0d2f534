"""Value types shared by the injector components."""
from .dependency import DependencyDescriptor, DescriptorValidationError, InjectionDirective

__all__ = [
    "DependencyDescriptor",
    "DescriptorValidationError",
    "InjectionDirective",
]
