from typing import Any, Hashable, List, Optional, Sequence, Tuple


def identity_name(identity: Hashable) -> str:
    """Return a readable name for a service identity."""
    name = getattr(identity, "__name__", None)
    if isinstance(name, str):
        return name
    return repr(identity)


class DIException(Exception):
    """Base exception for DI-related errors."""


class NotRegisteredError(DIException):
    """Raised when an identity has no registration in the container.

    Attributes:
        identity: The service identity that was requested.
    """

    def __init__(self, identity: Hashable) -> None:
        self.identity = identity
        super().__init__(f"No service registered for: {identity_name(identity)}")


class DuplicateRegistrationError(DIException):
    """Raised when registering an identity that is already registered.

    Attributes:
        identity: The service identity that was registered twice.
    """

    def __init__(self, identity: Hashable) -> None:
        self.identity = identity
        super().__init__(
            f"Service {identity_name(identity)} is already registered. Pass replace=True to overwrite."
        )


class WrongLifetimeError(DIException):
    """Raised when an operation expects a different lifetime than the registered one.

    This occurs when:
    - Building a scoped instance for an identity that is not registered as scoped.
    - Registering a pre-built instance with a lifetime other than singleton.

    Attributes:
        identity: The service identity involved.
        expected: The lifetime the operation required.
        actual: The lifetime that was found or requested.
    """

    def __init__(self, identity: Hashable, expected: Any, actual: Any) -> None:
        self.identity = identity
        self.expected = expected
        self.actual = actual
        super().__init__(f"Service {identity_name(identity)} has lifetime {actual}, expected {expected}")


class ReleaseError(DIException):
    """Raised after closing a container or scope when some instances failed to dispose.

    Every instance is attempted before this is raised.

    Attributes:
        failures: List of (identity, exception) pairs, one per failed dispose().
    """

    def __init__(self, failures: Sequence[Tuple[Hashable, BaseException]]) -> None:
        self.failures: List[Tuple[Hashable, BaseException]] = list(failures)
        details = ", ".join(f"{identity_name(identity)}: {exc!r}" for identity, exc in self.failures)
        super().__init__(f"Failed to release {len(self.failures)} instance(s): {details}")


class CircularDependencyError(DIException):
    """Raised when a circular dependency is detected.

    Attributes:
        dependency_chain: List of identities involved in the circular dependency.
    """

    def __init__(self, dependency_chain: List[Hashable]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join(identity_name(i) for i in dependency_chain)}"
        super().__init__(message)


class UnresolvableError(DIException):
    """Raised when a registered service cannot be constructed.

    This occurs when:
    - A required constructor parameter lacks a type hint.
    - A type hint cannot be evaluated.
    - The factory or constructor itself raised.

    Attributes:
        identity: The identity (or implementation type) that could not be built.
        reason: Optional reason for the failure.
    """

    def __init__(self, identity: Hashable, reason: Optional[str] = None) -> None:
        self.identity = identity
        self.reason = reason
        message = f"Cannot resolve dependency for: {identity_name(identity)}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class ScopeError(DIException):
    """Raised for invalid scope operations.

    This occurs when:
    - Attempting to resolve a scoped service from the root container.
    """


class DisposedError(DIException):
    """Raised when resolving from a container or scope that has been closed."""
