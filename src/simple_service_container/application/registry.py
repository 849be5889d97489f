"""Application layer - Service descriptor registry."""

import threading
from typing import Dict, Hashable, List, Optional

from simple_service_container.domain import DuplicateRegistrationError, NotRegisteredError, ServiceDescriptor


class ServiceRegistry:
    """Maps service identities to their descriptors.

    All reads and writes go through the lock handed in by the owning
    container, so registration and lookup are mutually exclusive with
    singleton construction.

    Attributes:
        _descriptors: Dictionary mapping identities to descriptors.
        _lock: Exclusive lock shared with the owning container.
    """

    def __init__(self, lock: Optional[threading.RLock] = None) -> None:
        self._descriptors: Dict[Hashable, ServiceDescriptor] = {}
        self._lock = lock if lock is not None else threading.RLock()

    def add(self, descriptor: ServiceDescriptor, replace: bool = False) -> None:
        """Store a descriptor under its identity.

        Args:
            descriptor: The descriptor to store.
            replace: Overwrite an existing registration instead of failing.

        Raises:
            DuplicateRegistrationError: If the identity is taken and replace is False.
        """
        with self._lock:
            if not replace and descriptor.identity in self._descriptors:
                raise DuplicateRegistrationError(descriptor.identity)
            self._descriptors[descriptor.identity] = descriptor

    def get(self, identity: Hashable) -> ServiceDescriptor:
        """Return the descriptor for an identity.

        Raises:
            NotRegisteredError: If the identity was never registered.
        """
        with self._lock:
            try:
                return self._descriptors[identity]
            except KeyError:
                raise NotRegisteredError(identity) from None

    def contains(self, identity: Hashable) -> bool:
        with self._lock:
            return identity in self._descriptors

    def identities(self) -> List[Hashable]:
        with self._lock:
            return list(self._descriptors)

    def snapshot(self) -> Dict[Hashable, ServiceDescriptor]:
        """Return a shallow copy of the registrations.

        Descriptors are immutable, so the copy can be loaded into another registry.
        """
        with self._lock:
            return self._descriptors.copy()

    def load(self, descriptors: Dict[Hashable, ServiceDescriptor]) -> None:
        """Replace every registration with the given ones."""
        with self._lock:
            self._descriptors = dict(descriptors)

    def __len__(self) -> int:
        with self._lock:
            return len(self._descriptors)
