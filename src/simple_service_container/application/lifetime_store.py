import logging
import threading
from typing import Any, Callable, Dict, Hashable, List, Optional, Set, Tuple

from simple_service_container.domain import DisposedError, IDisposable, identity_name

logger = logging.getLogger(__name__)


class LifetimeStore:
    """Instance cache for one lifetime boundary.

    A container owns one store for its singletons and every scope owns one
    for its scoped instances. Create-or-fetch runs under the store's lock so
    that concurrent first resolutions build an identity exactly once. Once
    released, the store refuses to build anything new.

    Attributes:
        name: Label used in log messages ("singleton", "scope").
        _instances: Cached instances in creation order.
        _borrowed: Identities whose instances are owned elsewhere and never disposed here.
        _lock: Re-entrant lock guarding the cache.
    """

    def __init__(self, name: str, lock: Optional[threading.RLock] = None) -> None:
        """Initialize an empty store.

        Args:
            name: Label used in log messages.
            lock: Lock to guard the cache with. A new RLock is created when omitted.
        """
        self.name = name
        self._instances: Dict[Hashable, Any] = {}
        self._lock = lock if lock is not None else threading.RLock()
        self._borrowed: Set[Hashable] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def get_or_create(self, identity: Hashable, factory: Callable[[], Any], owned: bool = True) -> Any:
        """Return the cached instance or build, cache and return a new one.

        Args:
            identity: Cache key.
            factory: Builds the instance on a cache miss.
            owned: Whether release_all() should dispose the instance.

        Returns:
            The single instance cached for the identity in this store.

        Raises:
            DisposedError: If the store was released before the instance was built.

        Example:
            >>> store = LifetimeStore("singleton")
            >>> first = store.get_or_create(Database, Database)
            >>> assert store.get_or_create(Database, Database) is first
        """
        if identity in self._instances:
            return self._instances[identity]

        with self._lock:
            # Another thread may have built it while we waited
            if identity in self._instances:
                return self._instances[identity]
            if self._closed:
                raise DisposedError(
                    f"Cannot create {self.name} instance of {identity_name(identity)}: already released."
                )
            instance = factory()
            self._instances[identity] = instance
            if not owned:
                self._borrowed.add(identity)
            logger.debug("Created %s instance of %s", self.name, identity_name(identity))
            return instance

    def peek(self, identity: Hashable) -> Optional[Any]:
        """Return the cached instance without creating one."""
        return self._instances.get(identity)

    def discard(self, identity: Hashable) -> Optional[Any]:
        """Remove and return a cached instance without disposing it."""
        with self._lock:
            self._borrowed.discard(identity)
            return self._instances.pop(identity, None)

    def release_all(self) -> List[Tuple[Hashable, BaseException]]:
        """Dispose every cached instance and empty the store.

        Instances are disposed newest first, skipping those created with
        owned=False. A failing dispose() is logged and collected; the remaining
        instances are still disposed. Later get_or_create() misses raise
        DisposedError.

        Returns:
            List of (identity, exception) pairs for each failed dispose().
        """
        failures: List[Tuple[Hashable, BaseException]] = []
        with self._lock:
            self._closed = True
            for identity, instance in reversed(list(self._instances.items())):
                if identity in self._borrowed or not isinstance(instance, IDisposable):
                    continue
                try:
                    instance.dispose()
                except Exception as exc:
                    logger.warning(
                        "Failed to dispose %s instance of %s",
                        self.name,
                        identity_name(identity),
                        exc_info=True,
                    )
                    failures.append((identity, exc))
            self._instances.clear()
            self._borrowed.clear()
        return failures

    def __contains__(self, identity: Hashable) -> bool:
        return identity in self._instances

    def __len__(self) -> int:
        return len(self._instances)
