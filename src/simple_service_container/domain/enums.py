from enum import Enum


class Lifetime(str, Enum):
    """Defines how many instances of a service exist and for how long.

    Attributes:
        TRANSIENT: New instance created on each resolution, never retained.
        SCOPED: Single instance per scope, disposed when the scope closes.
        SINGLETON: Single instance per container, disposed when the container closes.
    """

    TRANSIENT = "transient"
    SCOPED = "scoped"
    SINGLETON = "singleton"

    def __str__(self) -> str:
        return self.value
