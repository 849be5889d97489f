"""Unit tests for the Lifetime enum."""

from simple_service_container.domain.enums import Lifetime


class TestLifetime:
    """Test cases for Lifetime."""

    def test_lifetime_values(self):
        """Test that each lifetime has its string value."""
        assert Lifetime.TRANSIENT.value == "transient"
        assert Lifetime.SCOPED.value == "scoped"
        assert Lifetime.SINGLETON.value == "singleton"

    def test_lifetime_has_three_members(self):
        """Test that only the three lifetimes exist."""
        assert set(Lifetime) == {Lifetime.TRANSIENT, Lifetime.SCOPED, Lifetime.SINGLETON}

    def test_lifetime_str(self):
        """Test that str() returns the plain value."""
        assert str(Lifetime.SCOPED) == "scoped"

    def test_lifetime_from_string(self):
        """Test that a lifetime can be built from its value."""
        assert Lifetime("singleton") is Lifetime.SINGLETON

    def test_lifetime_compares_to_string(self):
        """Test that Lifetime is a str enum."""
        assert Lifetime.TRANSIENT == "transient"
