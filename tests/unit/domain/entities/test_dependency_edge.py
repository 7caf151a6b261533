"""Unit tests for Component and DependencyEdge entities."""

import pytest

from cycle_breaker.domain.entities.component import Component
from cycle_breaker.domain.entities.dependency_edge import DependencyEdge, InjectionKind


class TestInjectionKind:
    """Test cases for InjectionKind enum."""

    def test_injection_kind_values(self):
        """Test that all expected injection kinds exist."""
        assert InjectionKind.CONSTRUCTOR.value == "constructor"
        assert InjectionKind.FIELD.value == "field"
        assert InjectionKind.SETTER.value == "setter"


class TestComponent:
    """Test cases for Component entity."""

    def test_component_defaults(self):
        component = Component(id="com.acme.OrderService")

        assert component.kind == "class"
        assert component.has_extractable_surface is False

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError, match="non-empty"):
            Component(id="")

    def test_component_is_immutable(self):
        component = Component(id="A")
        with pytest.raises(AttributeError):
            component.id = "B"


class TestDependencyEdge:
    """Test cases for DependencyEdge entity."""

    def test_key_identifies_physical_edge(self):
        field_edge = DependencyEdge("A", "B", InjectionKind.FIELD)
        setter_edge = DependencyEdge("A", "B", InjectionKind.SETTER)

        assert field_edge.key == ("A", "B", InjectionKind.FIELD)
        assert field_edge.key != setter_edge.key

    def test_raw_injection_kind_is_coerced(self):
        """Test that front-end strings are accepted case-insensitively."""
        edge = DependencyEdge("A", "B", "CONSTRUCTOR")

        assert edge.injection_kind is InjectionKind.CONSTRUCTOR

    def test_unknown_injection_kind_rejected(self):
        with pytest.raises(ValueError):
            DependencyEdge("A", "B", "autowired")

    def test_self_edge_is_legal(self):
        edge = DependencyEdge("A", "A", InjectionKind.SETTER)

        assert edge.is_self_loop

    def test_missing_endpoint_rejected(self):
        with pytest.raises(ValueError, match="non-empty"):
            DependencyEdge("", "B", InjectionKind.FIELD)

    def test_str_marks_immutable_bindings(self):
        mutable = DependencyEdge("A", "B", InjectionKind.FIELD)
        immutable = DependencyEdge("A", "B", InjectionKind.CONSTRUCTOR, mutable=False)

        assert str(mutable) == "A -> B (field)"
        assert str(immutable) == "A -> B (constructor, immutable)"
