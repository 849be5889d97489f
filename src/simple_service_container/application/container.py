import functools
import inspect
import logging
import threading
from contextlib import nullcontext
from typing import Any, Callable, ContextManager, Dict, Hashable, Optional, Type, TypeVar

from simple_service_container.application.circular_detector import CircularDependencyDetector
from simple_service_container.application.lifetime_store import LifetimeStore
from simple_service_container.application.registry import ServiceRegistry
from simple_service_container.application.resolver import ConstructorResolver
from simple_service_container.application.scope import ServiceScope
from simple_service_container.domain import (
    ContainerOptions,
    DIException,
    DisposedError,
    IResolver,
    IServiceProvider,
    Lifetime,
    ReleaseError,
    ScopeError,
    ServiceDescriptor,
    UnresolvableError,
    WrongLifetimeError,
    identity_name,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ServiceContainer(IServiceProvider):
    """Main dependency injection container.

    Owns the registry and the singleton cache, resolves services at the root
    level and creates scopes. Supports transient, singleton and scoped
    lifetimes. Registration, lookup and singleton construction share one
    re-entrant lock.

    Attributes:
        options: Container configuration.
        _lock: Exclusive lock for the registry and singleton cache.
        _registry: Identity to descriptor mapping.
        _singletons: Cache of singleton instances.
        _resolver: Canonical-constructor strategy for implementation types.
        _circular_detector: Cycle detection, None when disabled.
    """

    def __init__(self, options: Optional[ContainerOptions] = None) -> None:
        self.options = options if options is not None else ContainerOptions()
        self._lock = threading.RLock()
        self._registry = ServiceRegistry(self._lock)
        self._singletons = LifetimeStore("singleton", lock=self._lock)
        self._resolver: IResolver = ConstructorResolver()
        self._circular_detector: Optional[CircularDependencyDetector] = (
            CircularDependencyDetector() if self.options.detect_cycles else None
        )
        self._closed = False

    def register(
        self,
        identity: Hashable,
        implementation: Optional[type] = None,
        *,
        lifetime: Lifetime = Lifetime.TRANSIENT,
        factory: Optional[Callable[..., Any]] = None,
        instance: Any = None,
        replace: Optional[bool] = None,
    ) -> None:
        """Register a service under an identity.

        At most one of ``implementation``, ``factory`` and ``instance`` may be
        given. With none of them the identity must be a class and is used as
        its own implementation.

        Args:
            identity: The key the service is requested under.
            implementation: Class built through its constructor, with each
                parameter resolved from the container.
            lifetime: How long built instances live.
            factory: Callable returning an instance. It is called with no
                arguments, or with the resolving provider when it requires one.
            instance: Pre-built object, only valid for singletons.
            replace: Overwrite an existing registration. Defaults to
                ``options.allow_replace``.

        Raises:
            DuplicateRegistrationError: If the identity is taken and replace is off.
            WrongLifetimeError: If an instance is given for a non-singleton lifetime.
            TypeError: If the implementation or instance does not fit the identity.
            ValueError: If the arguments do not describe exactly one recipe.

        Example:
            >>> container.register(IB, B, lifetime=Lifetime.TRANSIENT)
            >>> container.register(Settings, factory=Settings.load, lifetime=Lifetime.SINGLETON)
        """
        given = sum(value is not None for value in (implementation, factory, instance))
        if given > 1:
            raise ValueError("Provide only one of `implementation`, `factory` or `instance`.")

        lifetime = Lifetime(lifetime)
        if instance is not None:
            if lifetime != Lifetime.SINGLETON:
                raise WrongLifetimeError(identity, Lifetime.SINGLETON, lifetime)
            self._validate_instance(identity, instance)
            descriptor = ServiceDescriptor(
                identity=identity,
                lifetime=lifetime,
                factory=lambda provider: instance,
                prebuilt=True,
            )
        elif factory is not None:
            if not callable(factory):
                raise ValueError("`factory` must be callable.")
            descriptor = ServiceDescriptor(identity=identity, lifetime=lifetime, factory=self._adapt_factory(factory))
        else:
            if implementation is None:
                if not inspect.isclass(identity):
                    raise ValueError(f"{identity_name(identity)} is not a class; provide an implementation or factory.")
                implementation = identity
            self._validate_implementation(identity, implementation)
            descriptor = ServiceDescriptor(
                identity=identity,
                lifetime=lifetime,
                factory=functools.partial(self._resolver.construct, implementation),
                implementation=implementation,
            )

        self._registry.add(descriptor, replace=self.options.allow_replace if replace is None else replace)
        logger.debug("Registered %s as %s", identity_name(identity), lifetime)

    def register_singleton(
        self,
        identity: Hashable,
        implementation: Optional[type] = None,
        *,
        factory: Optional[Callable[..., Any]] = None,
        instance: Any = None,
        replace: Optional[bool] = None,
    ) -> None:
        """Register a service created once and shared by the whole container.

        Example:
            >>> container.register_singleton(E)
            >>> container.register_singleton(Clock, instance=FrozenClock())
        """
        self.register(
            identity,
            implementation,
            lifetime=Lifetime.SINGLETON,
            factory=factory,
            instance=instance,
            replace=replace,
        )

    def register_transient(
        self,
        identity: Hashable,
        implementation: Optional[type] = None,
        *,
        factory: Optional[Callable[..., Any]] = None,
        replace: Optional[bool] = None,
    ) -> None:
        """Register a service created fresh on every resolution.

        Example:
            >>> container.register_transient(IA, A)
        """
        self.register(identity, implementation, lifetime=Lifetime.TRANSIENT, factory=factory, replace=replace)

    def register_scoped(
        self,
        identity: Hashable,
        implementation: Optional[type] = None,
        *,
        factory: Optional[Callable[..., Any]] = None,
        replace: Optional[bool] = None,
    ) -> None:
        """Register a service created once per scope.

        Example:
            >>> container.register_scoped(F)
        """
        self.register(identity, implementation, lifetime=Lifetime.SCOPED, factory=factory, replace=replace)

    def get_descriptor(self, identity: Hashable) -> ServiceDescriptor:
        """Return the registration for an identity.

        Raises:
            NotRegisteredError: If the identity has no registration.
        """
        return self._registry.get(identity)

    def is_registered(self, identity: Hashable) -> bool:
        return self._registry.contains(identity)

    def resolve(self, identity: Type[T]) -> T:
        """Resolve an identity at the root level.

        Args:
            identity: The service identity to resolve.

        Returns:
            The cached singleton, or a new instance for transients and for
            scoped services, which have no cache outside a scope.

        Raises:
            NotRegisteredError: If the identity (or a dependency) has no registration.
            ScopeError: If the identity is scoped and ``options.validate_scopes`` is on.
            CircularDependencyError: If the dependency graph has a cycle.
            UnresolvableError: If construction failed.
            DisposedError: If the container is closed.

        Example:
            >>> a = container.resolve(IA)
            >>> assert isinstance(a.b, IB)
        """
        return self._resolve(identity, None)

    def resolve_for_scope(self, identity: Hashable, scope: ServiceScope) -> Any:
        """Resolve an identity on behalf of a scope.

        Singletons come from the container cache, scoped services from the
        scope's cache and transients are built with the scope as provider.
        """
        return self._resolve(identity, scope)

    def _resolve(self, identity: Hashable, scope: Optional[ServiceScope]) -> Any:
        self._ensure_open()
        descriptor = self._registry.get(identity)

        with self._track(identity):
            if descriptor.lifetime == Lifetime.SINGLETON:
                return self._singletons.get_or_create(
                    identity,
                    lambda: self._build(descriptor, self),
                    owned=descriptor.owned,
                )

            if descriptor.lifetime == Lifetime.SCOPED:
                if scope is None:
                    if self.options.validate_scopes:
                        raise ScopeError(
                            f"Scoped service {identity_name(identity)} cannot be resolved from the root container. "
                            "Resolve it from a scope created with create_scope()."
                        )
                    # Outside a scope there is no cache to hold it
                    return self._build(descriptor, self)
                return scope.store.get_or_create(identity, lambda: self.create_scoped_instance(identity, scope))

            return self._build(descriptor, scope if scope is not None else self)

    def create_scoped_instance(self, identity: Hashable, scope: ServiceScope) -> Any:
        """Build a new instance of a scoped service for the given scope without caching it.

        Raises:
            WrongLifetimeError: If the identity is not registered as scoped.
        """
        descriptor = self._registry.get(identity)
        if descriptor.lifetime != Lifetime.SCOPED:
            raise WrongLifetimeError(identity, Lifetime.SCOPED, descriptor.lifetime)
        return self._build(descriptor, scope)

    def create_instance(self, implementation: Type[T]) -> T:
        """Build any class through its constructor without registering it.

        Constructor parameters are resolved from this container.
        """
        self._ensure_open()
        return self._resolver.construct(implementation, self)

    def create_scope(self) -> ServiceScope:
        """Create a scope with its own cache for scoped services.

        Example:
            >>> with container.create_scope() as scope:
            ...     f1 = scope.resolve(F)
            ...     assert scope.resolve(F) is f1
        """
        self._ensure_open()
        scope = ServiceScope(self)
        logger.debug("Opened scope %#x", id(scope))
        return scope

    def get_registry_copy(self) -> Dict[Hashable, ServiceDescriptor]:
        """Get a copy of the registrations for child or test containers."""
        return self._registry.snapshot()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Dispose every singleton instance and stop serving resolutions.

        Calling close() more than once has no further effect.

        Raises:
            ReleaseError: If any dispose() failed. All instances are attempted first.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            failures = self._singletons.release_all()
        logger.debug("Closed container %#x", id(self))
        if failures:
            raise ReleaseError(failures)

    def __enter__(self) -> "ServiceContainer":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.close()
        return False

    def _build(self, descriptor: ServiceDescriptor, provider: IServiceProvider) -> Any:
        try:
            return descriptor.factory(provider)
        except (DIException, RecursionError):
            raise
        except Exception as e:
            raise UnresolvableError(descriptor.identity, f"Failed to create instance: {e}") from e

    def _track(self, identity: Hashable) -> ContextManager[None]:
        if self._circular_detector is None:
            return nullcontext()
        return self._circular_detector.track(identity)

    def _ensure_open(self) -> None:
        if self._closed:
            raise DisposedError("Cannot resolve from a closed container.")

    @staticmethod
    def _adapt_factory(factory: Callable[..., Any]) -> Callable[[IServiceProvider], Any]:
        """Wrap a factory so that it can always be called with the provider.

        Factories whose signature requires an argument receive the provider;
        anything callable without arguments, or without an inspectable
        signature, is called bare.
        """
        try:
            parameters = inspect.signature(factory).parameters.values()
        except (TypeError, ValueError):
            parameters = []
        positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        if any(p.kind in positional and p.default is inspect.Parameter.empty for p in parameters):
            return factory
        return lambda provider: factory()

    @staticmethod
    def _validate_implementation(identity: Hashable, implementation: Any) -> None:
        if not inspect.isclass(implementation):
            raise TypeError(f"Implementation {implementation!r} is not a class.")
        if inspect.isclass(identity) and not getattr(identity, "_is_protocol", False):
            if not issubclass(implementation, identity):
                raise TypeError(f"{implementation.__name__} is not a subclass of {identity.__name__}.")

    @staticmethod
    def _validate_instance(identity: Hashable, instance: Any) -> None:
        if inspect.isclass(identity) and not getattr(identity, "_is_protocol", False):
            if not isinstance(instance, identity):
                raise TypeError(f"{type(instance).__name__} instance is not an instance of {identity.__name__}.")
