"""Unit tests for domain exceptions."""

import pytest

from simple_service_container.domain.enums import Lifetime
from simple_service_container.domain.exceptions import (
    CircularDependencyError,
    DIException,
    DisposedError,
    DuplicateRegistrationError,
    NotRegisteredError,
    ReleaseError,
    ScopeError,
    UnresolvableError,
    WrongLifetimeError,
    identity_name,
)


class ServiceA:
    pass


class ServiceB:
    pass


class TestIdentityName:
    """Test cases for identity_name."""

    def test_class_identity_uses_name(self):
        assert identity_name(ServiceA) == "ServiceA"

    def test_string_identity_uses_repr(self):
        assert identity_name("db") == "'db'"


class TestExceptionHierarchy:
    """Test that every error derives from DIException."""

    @pytest.mark.parametrize(
        "exception_type",
        [
            NotRegisteredError,
            DuplicateRegistrationError,
            WrongLifetimeError,
            ReleaseError,
            CircularDependencyError,
            UnresolvableError,
            ScopeError,
            DisposedError,
        ],
    )
    def test_inherits_from_di_exception(self, exception_type):
        assert issubclass(exception_type, DIException)

    def test_di_exception_is_exception(self):
        assert issubclass(DIException, Exception)


class TestNotRegisteredError:
    """Test cases for NotRegisteredError."""

    def test_stores_identity(self):
        error = NotRegisteredError(ServiceA)
        assert error.identity is ServiceA

    def test_message_names_identity(self):
        error = NotRegisteredError(ServiceA)
        assert str(error) == "No service registered for: ServiceA"


class TestDuplicateRegistrationError:
    """Test cases for DuplicateRegistrationError."""

    def test_stores_identity(self):
        error = DuplicateRegistrationError(ServiceA)
        assert error.identity is ServiceA

    def test_message_mentions_replace(self):
        error = DuplicateRegistrationError(ServiceA)
        assert "ServiceA is already registered" in str(error)
        assert "replace=True" in str(error)


class TestWrongLifetimeError:
    """Test cases for WrongLifetimeError."""

    def test_stores_lifetimes(self):
        error = WrongLifetimeError(ServiceA, Lifetime.SCOPED, Lifetime.SINGLETON)
        assert error.identity is ServiceA
        assert error.expected == Lifetime.SCOPED
        assert error.actual == Lifetime.SINGLETON

    def test_message(self):
        error = WrongLifetimeError(ServiceA, Lifetime.SCOPED, Lifetime.TRANSIENT)
        assert str(error) == "Service ServiceA has lifetime transient, expected scoped"


class TestReleaseError:
    """Test cases for ReleaseError."""

    def test_stores_failures(self):
        first = RuntimeError("boom")
        second = ValueError("bad")
        error = ReleaseError([(ServiceA, first), (ServiceB, second)])

        assert error.failures == [(ServiceA, first), (ServiceB, second)]

    def test_message_lists_each_failure(self):
        error = ReleaseError([(ServiceA, RuntimeError("boom"))])

        message = str(error)
        assert "Failed to release 1 instance(s)" in message
        assert "ServiceA" in message
        assert "boom" in message


class TestCircularDependencyError:
    """Test cases for CircularDependencyError."""

    def test_stores_chain(self):
        chain = [ServiceA, ServiceB, ServiceA]
        error = CircularDependencyError(chain)
        assert error.dependency_chain == chain

    def test_message_joins_chain(self):
        error = CircularDependencyError([ServiceA, ServiceB, ServiceA])
        assert str(error) == "Circular dependency detected: ServiceA -> ServiceB -> ServiceA"

    def test_string_identities_in_chain(self):
        error = CircularDependencyError(["a", "b", "a"])
        assert "'a' -> 'b' -> 'a'" in str(error)


class TestUnresolvableError:
    """Test cases for UnresolvableError."""

    def test_without_reason(self):
        error = UnresolvableError(ServiceA)
        assert error.reason is None
        assert str(error) == "Cannot resolve dependency for: ServiceA"

    def test_with_reason(self):
        error = UnresolvableError(ServiceA, "missing hint")
        assert error.identity is ServiceA
        assert str(error) == "Cannot resolve dependency for: ServiceA. Reason: missing hint"


class TestPlainErrors:
    """Test cases for message-only errors."""

    def test_scope_error_message(self):
        with pytest.raises(ScopeError, match="root container"):
            raise ScopeError("Cannot resolve scoped service from root container")

    def test_disposed_error_message(self):
        with pytest.raises(DisposedError, match="closed"):
            raise DisposedError("Cannot resolve from a closed container.")
