from typing import TYPE_CHECKING, Any, Callable, Hashable, Optional

from pydantic import BaseModel, ConfigDict, Field

from simple_service_container.domain.enums import Lifetime

if TYPE_CHECKING:
    from simple_service_container.domain.interfaces import IServiceProvider


class ServiceDescriptor(BaseModel):
    """Value object describing how a service identity is built.

    Attributes:
        identity: The key the service is registered and requested under.
        lifetime: How long a built instance lives.
        factory: Receives the provider performing the resolution and returns an instance.
        implementation: The implementation type for type-based registrations.
        prebuilt: True when the factory hands out an object registered with instance=.
        owned: Whether the container that caches the instance also disposes it.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    identity: Hashable = Field(..., description="The service identity being registered.")
    lifetime: Lifetime = Field(..., description="The lifetime of the registered service.")
    factory: Callable[["IServiceProvider"], Any] = Field(
        ..., description="Builds an instance using the resolving provider."
    )
    implementation: Optional[type] = Field(
        default=None,
        description="Implementation type when registered by type, None for factories and instances.",
    )
    prebuilt: bool = Field(default=False, description="The factory returns a pre-built instance.")
    owned: bool = Field(default=True, description="Dispose the cached instance when its container closes.")


class ContainerOptions(BaseModel):
    """Configuration for a ServiceContainer.

    Attributes:
        detect_cycles: Raise CircularDependencyError instead of recursing forever.
        allow_replace: Let any registration overwrite an existing one.
        validate_scopes: Refuse to resolve scoped services from the root container.
    """

    model_config = ConfigDict(frozen=True)

    detect_cycles: bool = Field(default=True, description="Track the resolution stack to detect cycles.")
    allow_replace: bool = Field(default=False, description="Default for the replace flag of registrations.")
    validate_scopes: bool = Field(
        default=False,
        description="Raise ScopeError for scoped services resolved outside a scope instead of building them uncached.",
    )
