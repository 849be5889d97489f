"""
Domain layer - Core models and contracts.

This layer contains the fundamental rules and models for dependency injection.
It has no dependencies on other layers.
"""

from .enums import Lifetime
from .exceptions import (
    CircularDependencyError,
    DIException,
    DisposedError,
    DuplicateRegistrationError,
    NotRegisteredError,
    ReleaseError,
    ScopeError,
    UnresolvableError,
    WrongLifetimeError,
    identity_name,
)
from .interfaces import IDisposable, IResolver, IServiceProvider
from .models import ContainerOptions, ServiceDescriptor

# Rebuild Pydantic models to resolve forward references
ServiceDescriptor.model_rebuild()

__all__ = [
    # Enums
    "Lifetime",
    # Exceptions
    "DIException",
    "NotRegisteredError",
    "DuplicateRegistrationError",
    "WrongLifetimeError",
    "ReleaseError",
    "CircularDependencyError",
    "UnresolvableError",
    "ScopeError",
    "DisposedError",
    "identity_name",
    # Interfaces
    "IServiceProvider",
    "IResolver",
    "IDisposable",
    # Models
    "ServiceDescriptor",
    "ContainerOptions",
]
