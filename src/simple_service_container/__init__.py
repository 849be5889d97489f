"""
simple-service-container: Minimal dependency injection container with
transient, singleton and scoped lifetimes.

Public API exports for the simple_service_container package.
"""

# Application exports
from simple_service_container.application.container import ServiceContainer
from simple_service_container.application.scope import ServiceScope

# Domain exports
from simple_service_container.domain.enums import Lifetime
from simple_service_container.domain.exceptions import (
    CircularDependencyError,
    DIException,
    DisposedError,
    DuplicateRegistrationError,
    NotRegisteredError,
    ReleaseError,
    ScopeError,
    UnresolvableError,
    WrongLifetimeError,
)
from simple_service_container.domain.interfaces import IDisposable, IServiceProvider
from simple_service_container.domain.models import ContainerOptions, ServiceDescriptor

__version__ = "0.1.0"

__all__ = [
    # Container
    "ServiceContainer",
    "ServiceScope",
    "ContainerOptions",
    "ServiceDescriptor",
    # Enums
    "Lifetime",
    # Interfaces
    "IServiceProvider",
    "IDisposable",
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
]
