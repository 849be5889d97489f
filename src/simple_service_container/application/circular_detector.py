"""Application layer - Circular dependency detection."""

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator, List

from simple_service_container.domain import CircularDependencyError


class CircularDependencyDetector:
    """Tracks the identities under construction on the current thread.

    Re-entering an identity that is still being built means the graph has a
    cycle; the detector raises instead of letting the recursion run away.

    Attributes:
        _local: Thread-local storage for resolution stacks.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _get_stack(self) -> List[Hashable]:
        if not hasattr(self._local, "stack"):
            self._local.stack = []
        return self._local.stack

    def push(self, identity: Hashable) -> None:
        """Mark an identity as under construction.

        Raises:
            CircularDependencyError: If the identity is already on the stack.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> detector.push(IA)
            >>> detector.push(IB)
            >>> detector.push(IA)  # Raises CircularDependencyError
        """
        stack = self._get_stack()
        if identity in stack:
            cycle = stack[stack.index(identity) :] + [identity]
            raise CircularDependencyError(cycle)
        stack.append(identity)

    def pop(self) -> None:
        stack = self._get_stack()
        if stack:
            stack.pop()

    @contextmanager
    def track(self, identity: Hashable) -> Iterator[None]:
        """Push the identity for the duration of the block."""
        self.push(identity)
        try:
            yield
        finally:
            self.pop()

    def clear(self) -> None:
        """Clear the current thread's stack."""
        if hasattr(self._local, "stack"):
            self._local.stack.clear()
