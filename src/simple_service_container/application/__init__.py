"""
Application layer - Use cases and orchestration.

This layer contains the use cases that orchestrate domain objects.
It depends only on the Domain layer.
"""

from .circular_detector import CircularDependencyDetector
from .container import ServiceContainer
from .lifetime_store import LifetimeStore
from .registry import ServiceRegistry
from .resolver import ConstructorResolver
from .scope import ServiceScope

__all__ = [
    "ServiceContainer",
    "ServiceScope",
    "ServiceRegistry",
    "ConstructorResolver",
    "LifetimeStore",
    "CircularDependencyDetector",
]
