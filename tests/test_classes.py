"""Tests for class configuration, instantiation and member lookup."""

import pytest

import kinship


def test_constructors_run_in_order(registry):
    """Test every constructor runs in declaration order with the same arguments."""
    calls = []

    def first(self, *args, **kwargs):
        calls.append(("first", args, kwargs))
        self.order = ["first"]

    def second(self, *args, **kwargs):
        calls.append(("second", args, kwargs))
        self.order.append("second")

    thing = registry.Class("thing").constructor(first).constructor(second)
    instance = thing(1, 2, key="value")

    assert calls == [
        ("first", (1, 2), {"key": "value"}),
        ("second", (1, 2), {"key": "value"}),
    ]
    assert instance.order == ["first", "second"]


def test_constructor_must_be_callable(registry):
    """Test non-callable constructors are rejected."""
    with pytest.raises(TypeError):
        registry.Class("thing").constructor("nope")


def test_parent_constructors_run_first(registry):
    """Test instantiating a subclass runs ancestor constructors from the root."""
    calls = []
    registry.Class("base").constructor(lambda self: calls.append("base"))
    registry.Class("middle").extends("base").constructor(lambda self: calls.append("middle"))
    leaf = registry.Class("leaf").extends("middle").constructor(lambda self: calls.append("leaf"))

    leaf()
    assert calls == ["base", "middle", "leaf"]


def test_static_members_merge(registry):
    """Test static tables accumulate across calls, later values win."""
    config = registry.Class("config").static(a=1, b=2).static({"b": 3, "c": 4})
    assert config.statics == {"a": 1, "b": 3, "c": 4}
    assert config.a == 1
    assert config.b == 3
    assert config.lookup_static("c") == 4


def test_static_access_does_not_instantiate(registry):
    """Test reading statics never runs constructors."""
    calls = []
    maths = (
        registry.Class("maths")
        .constructor(lambda self: calls.append(self))
        .static(double=lambda value: value * 2)
    )
    assert maths.double(4) == 8
    assert calls == []


def test_static_shadowed_by_class_attribute(registry):
    """Test statics named like class attributes are still reachable."""
    thing = registry.Class("thing").static(name="custom")
    assert thing.name == "thing"
    assert thing.lookup_static("name") == "custom"


def test_missing_static(registry):
    """Test missing statics raise AttributeError."""
    thing = registry.Class("thing")
    with pytest.raises(AttributeError):
        thing.missing
    assert not hasattr(thing, "missing")


def test_static_inherited(registry):
    """Test static lookup continues through the parent class."""
    registry.Class("base").static(label="base", shared=1)
    child = registry.Class("child").extends("base").static(label="child")
    assert child.label == "child"
    assert child.shared == 1


def test_super_static(registry):
    """Test the super reference reaches the overridden parent static."""
    base = registry.Class("base").static(describe=lambda: "base")
    child = registry.Class("child").extends(base).static(describe=lambda: "child")
    assert child.describe() == "child"
    assert child.super is base
    assert child.super.describe() == "base"
    assert base.super is None


def test_methods_bind_instance(registry):
    """Test instance members are called with the instance."""
    counter = (
        registry.Class("counter")
        .constructor(lambda self, start=0: setattr(self, "count", start))
        .method(bump=lambda self, step=1: setattr(self, "count", self.count + step))
    )
    instance = counter(5)
    instance.bump()
    instance.bump(3)
    assert instance.count == 9


def test_method_merge_overwrites(registry):
    """Test later method tables replace same-named members."""
    thing = registry.Class("thing").method(speak=lambda self: "a").method(speak=lambda self: "b")
    assert thing().speak() == "b"


def test_fields_shadow_methods(registry):
    """Test instance fields are checked before class members."""
    thing = registry.Class("thing").method(label=lambda self: "method")
    instance = thing()
    assert instance.label() == "method"
    instance.label = "field"
    assert instance.label == "field"
    del instance.label
    assert instance.label() == "method"


def test_non_callable_members_are_defaults(registry):
    """Test plain values in the member table act as defaults."""
    thing = registry.Class("thing").method(size=3)
    instance = thing()
    assert instance.size == 3
    instance.size = 4
    assert instance.size == 4
    assert thing().size == 3


def test_inherits_without_copying(registry):
    """Test subclasses find parent methods through the parent chain."""
    base = registry.Class("base").method(greet=lambda self: "hello")
    child = registry.Class("child").extends("base")
    instance = child()

    assert instance.greet() == "hello"
    assert "greet" not in child.methods

    base.method(greet=lambda self: "changed")
    assert instance.greet() == "changed"


def test_override_parent_method(registry):
    """Test subclass methods win over parent methods."""
    registry.Class("base").method(name=lambda self: "base")
    child = registry.Class("child").extends("base").method(name=lambda self: "child")
    assert child().name() == "child"


def test_parent_lookup_ignores_parent_fields(registry):
    """Test delegation to the parent never reads fields of other instances."""
    base = registry.Class("base").constructor(lambda self: setattr(self, "tag", "base"))
    child = registry.Class("child").extends(base)
    base()
    instance = child()
    assert instance.tag == "base"
    del instance.tag
    with pytest.raises(AttributeError):
        instance.tag


def test_missing_member(registry):
    """Test missing members raise AttributeError."""
    instance = registry.Class("thing")()
    with pytest.raises(AttributeError):
        instance.missing
    assert not hasattr(instance, "missing")
    with pytest.raises(AttributeError):
        del instance.missing


def test_late_members_visible(registry):
    """Test members added after instantiation are visible on existing instances."""
    thing = registry.Class("thing")
    instance = thing()
    thing.method(late=lambda self: "late")
    assert instance.late() == "late"


def test_extends_twice(registry):
    """Test a second extends fails and keeps the first parent."""
    p1 = registry.Class("p1")
    registry.Class("p2")
    thing = registry.Class("x").extends("p1")
    with pytest.raises(kinship.MultipleInheritanceError):
        thing.extends("p2")
    assert thing.parent is p1


def test_extends_self(registry):
    """Test a class cannot extend itself."""
    thing = registry.Class("thing")
    with pytest.raises(kinship.CyclicReferenceError):
        thing.extends(thing)


def test_inheritance_cycle(registry):
    """Test inheritance loops are detected when the chain is resolved."""
    a = registry.Class("a").extends("b")
    registry.Class("b").extends("a")
    with pytest.raises(kinship.CyclicReferenceError):
        a()


def test_unresolved_parent(registry):
    """Test a missing parent name fails when the class is first used."""
    orphan = registry.Class("orphan").extends("nowhere")
    with pytest.raises(kinship.UnresolvedReferenceError):
        orphan()

    registry.Class("nowhere")
    assert orphan.parent is registry["nowhere"]
    orphan()


def test_parent_must_be_class(registry):
    """Test parent names only resolve to classes."""
    registry.Trait("shape")
    thing = registry.Class("thing").extends("shape")
    with pytest.raises(kinship.UnresolvedReferenceError):
        thing.parent
    with pytest.raises(TypeError):
        registry.Class("other").extends(registry["shape"])


def test_mro_and_subclass(registry):
    """Test ancestor introspection."""
    base = registry.Class("base")
    middle = registry.Class("middle").extends(base)
    leaf = registry.Class("leaf").extends("middle")

    assert leaf.mro() == [leaf, middle, base]
    assert leaf.ancestors() == [middle, base]
    assert leaf.is_subclass(base)
    assert leaf.is_subclass(leaf)
    assert not base.is_subclass(leaf)


def test_reserved_metamethods(registry):
    """Test member access metamethods cannot be defined."""
    thing = registry.Class("thing")
    with pytest.raises(kinship.ReservedMetamethodError):
        thing.meta(getattr=lambda self, name: None)
    with pytest.raises(kinship.ReservedMetamethodError):
        thing.meta({"setattr": lambda self, name, value: None, "add": lambda a, b: 0})
    assert thing.metas == {}


def test_member_names_must_be_strings(registry):
    """Test member tables only accept string keys."""
    with pytest.raises(TypeError):
        registry.Class("thing").method({1: lambda self: None})
