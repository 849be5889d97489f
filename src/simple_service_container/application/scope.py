import logging
import threading
import weakref
from typing import TYPE_CHECKING, Any, Hashable, Optional

from simple_service_container.application.lifetime_store import LifetimeStore
from simple_service_container.domain import DisposedError, IServiceProvider, ReleaseError

if TYPE_CHECKING:
    from simple_service_container.application.container import ServiceContainer

logger = logging.getLogger(__name__)


class ServiceScope(IServiceProvider):
    """Bounded resolution context with its own cache for scoped services.

    A scope reads registrations through its container but never keeps the
    container alive. Singletons still come from the container's cache and
    transients are built fresh; only scoped instances are cached here and
    disposed when the scope closes.

    Example:
        >>> with container.create_scope() as scope:
        ...     ctx1 = scope.resolve(RequestContext)
        ...     ctx2 = scope.resolve(RequestContext)
        ...     assert ctx1 is ctx2
    """

    def __init__(self, container: "ServiceContainer") -> None:
        self._container_ref = weakref.ref(container)
        self._lock = threading.RLock()
        self._store = LifetimeStore("scoped", lock=self._lock)
        self._closed = False

    @property
    def store(self) -> LifetimeStore:
        """The cache holding this scope's scoped instances."""
        return self._store

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def container(self) -> Optional["ServiceContainer"]:
        return self._container_ref()

    def resolve(self, identity: Hashable) -> Any:
        """Resolve an identity within this scope.

        Raises:
            DisposedError: If the scope is closed or its container is gone.
            NotRegisteredError: If the identity has no registration.
        """
        if self._closed:
            raise DisposedError("Cannot resolve from a closed scope.")
        container = self._container_ref()
        if container is None:
            raise DisposedError("The container that created this scope no longer exists.")
        return container.resolve_for_scope(identity, self)

    def is_registered(self, identity: Hashable) -> bool:
        container = self._container_ref()
        return container is not None and container.is_registered(identity)

    def close(self) -> None:
        """Dispose this scope's instances and empty its cache.

        Calling close() more than once has no further effect.

        Raises:
            ReleaseError: If any dispose() failed. All instances are attempted first.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            failures = self._store.release_all()
        logger.debug("Closed scope %#x", id(self))
        if failures:
            raise ReleaseError(failures)

    def __enter__(self) -> "ServiceScope":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.close()
        return False
