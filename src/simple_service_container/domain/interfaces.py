from abc import ABC, abstractmethod
from typing import Any, Hashable, TypeVar

T = TypeVar("T")


class IServiceProvider(ABC):
    """Abstract interface for anything services can be resolved from."""

    @abstractmethod
    def resolve(self, identity: Hashable) -> Any:
        """Resolve and return an instance for the requested identity.

        Args:
            identity: The service identity to resolve.
        """

    @abstractmethod
    def is_registered(self, identity: Hashable) -> bool:
        """Return whether the identity has a registration."""

    def get(self, identity: Hashable) -> Any:
        """Alias of resolve()."""
        return self.resolve(identity)


class IResolver(ABC):
    """Abstract interface for building implementation types."""

    @abstractmethod
    def construct(self, implementation: type, provider: IServiceProvider) -> Any:
        """Resolve constructor dependencies and create an instance.

        Args:
            implementation: The class to instantiate.
            provider: The provider to resolve constructor parameters from.

        Returns:
            Instance with all dependencies injected.

        Raises:
            UnresolvableError: If a parameter cannot be satisfied.
        """


class IDisposable(ABC):
    """Optional capability for instances that hold resources.

    Containers and scopes call dispose() on cached instances that implement
    this interface when they close. Classes opt in by subclassing or with
    ``IDisposable.register(cls)``.
    """

    @abstractmethod
    def dispose(self) -> None:
        """Release resources held by the instance."""
