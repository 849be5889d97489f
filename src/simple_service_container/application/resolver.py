import inspect
from typing import Any, get_type_hints

from simple_service_container.domain import DIException, IResolver, IServiceProvider, UnresolvableError


class ConstructorResolver(IResolver):
    """Builds implementation types through their canonical constructor.

    The canonical constructor is the ``__init__`` found on the class MRO.
    Each parameter is resolved from the provider by its type hint.
    """

    def construct(self, implementation: type, provider: IServiceProvider) -> Any:
        """Resolve all constructor dependencies and create instance.

        Parameters with a default value are resolved only when their type is
        registered; otherwise the default is used. ``*args`` and ``**kwargs``
        are left empty.

        Args:
            implementation: The class to instantiate.
            provider: The container or scope performing the resolution.

        Returns:
            Instance with all dependencies injected.

        Raises:
            UnresolvableError: If a required parameter lacks a type hint or the
                constructor raised.

        Example:
            >>> class B:
            ...     def __init__(self, c: IC, d: ID):
            ...         self.c = c
            ...         self.d = d
            >>>
            >>> instance = ConstructorResolver().construct(B, container)
        """
        try:
            signature = inspect.signature(implementation.__init__)
            type_hints = get_type_hints(implementation.__init__)
        except RecursionError:
            raise
        except Exception as e:
            raise UnresolvableError(implementation, f"Cannot inspect constructor: {e}") from e

        kwargs = {}
        for param_name, param in signature.parameters.items():
            if param_name == "self":
                continue

            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            has_default = param.default is not inspect.Parameter.empty
            param_type = type_hints.get(param_name)

            if param_type is None:
                if has_default:
                    continue
                raise UnresolvableError(
                    implementation,
                    f"Parameter '{param_name}' lacks type hint and has no default value.",
                )

            if has_default and not provider.is_registered(param_type):
                continue

            # Nested failures keep their own type and message
            kwargs[param_name] = provider.resolve(param_type)

        try:
            if any(
                p.kind == inspect.Parameter.POSITIONAL_ONLY and name != "self"
                for name, p in signature.parameters.items()
            ):
                return self._call_positional(implementation, signature, kwargs)
            return implementation(**kwargs)
        except (DIException, RecursionError):
            raise
        except Exception as e:
            raise UnresolvableError(implementation, f"Constructor raised: {e!r}") from e

    @staticmethod
    def _call_positional(implementation: type, signature: inspect.Signature, kwargs: dict) -> Any:
        args = []
        for param_name, param in signature.parameters.items():
            if param_name == "self" or param.kind != inspect.Parameter.POSITIONAL_ONLY:
                continue
            # A skipped parameter keeps its default so later ones stay in position
            args.append(kwargs.pop(param_name) if param_name in kwargs else param.default)
        return implementation(*args, **kwargs)
