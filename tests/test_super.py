"""Tests for detached super views of instances."""

import pytest

import kinship
import kintest


def test_vector_super_chain(registry):
    """Test vec4 steps down to vec3 then vec2 through super()."""
    vec2, vec3, vec4 = kintest.declare_vectors(registry)
    v = vec4(1, 2, 3, 4)
    assert str(v) == "(1, 2, 3, 4)"
    assert v.dims() == 4

    up = v.super()
    assert kinship.class_of(up) is vec3
    assert str(up) == str(vec3(1, 2, 3))
    assert up == vec3(1, 2, 3)
    assert up.dims() == 3

    top = up.super()
    assert kinship.class_of(top) is vec2
    assert str(top) == str(vec2(1, 2))
    assert top == vec2(1, 2)
    assert top.dims() == 2


def test_super_is_detached(registry):
    """Test changing a super view never touches the original."""
    vec2, vec3, vec4 = kintest.declare_vectors(registry)
    v = vec3(1, 2, 3)
    up = v.super()
    up.x = 100
    up.extra = True

    assert v.x == 1
    assert "extra" not in kinship.fields(v)

    v.y = 50
    assert up.y == 2


def test_sibling_super_views_independent(registry):
    """Test two super views of one instance do not share storage."""
    vec2, vec3, vec4 = kintest.declare_vectors(registry)
    v = vec3(1, 2, 3)
    first = v.super()
    second = v.super()
    assert first is not second
    first.x = 9
    assert second.x == 1


def test_super_uses_current_values(registry):
    """Test super views copy the values fields hold now."""
    vec2, vec3, vec4 = kintest.declare_vectors(registry)
    v = vec3(1, 2, 3)
    v.x = 7
    assert str(v.super()) == "(7, 2)"


def test_super_copies_only_ancestor_fields(registry):
    """Test fields set outside ancestor constructors are left behind."""
    vec2, vec3, vec4 = kintest.declare_vectors(registry)
    v = vec4(1, 2, 3, 4)
    v.label = "point"
    assert kinship.fields(v.super()) == {"x": 1, "y": 2, "z": 3}
    assert kinship.fields(v.super().super()) == {"x": 1, "y": 2}


def test_super_runs_no_constructors(registry):
    """Test building a super view does not call constructors."""
    calls = []
    base = registry.Class("base").constructor(lambda self: calls.append("base"))
    child = registry.Class("child").extends(base)
    instance = child()
    assert calls == ["base"]
    instance.super()
    assert calls == ["base"]


def test_super_without_parent(registry):
    """Test root classes have no super view."""
    instance = registry.Class("root")()
    with pytest.raises(TypeError):
        instance.super()


def test_constructed_fields(registry):
    """Test constructors record the fields they set per class."""
    vec2, vec3, vec4 = kintest.declare_vectors(registry)
    vec4(1, 2, 3, 4)
    assert vec2.constructed_fields() == {"x", "y"}
    assert vec3.constructed_fields() == {"x", "y", "z"}
    assert vec4.constructed_fields() == {"x", "y", "z", "w"}
