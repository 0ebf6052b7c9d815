"""Runtime instances of declared classes."""

import copy
import types

import kinship


__all__ = ["Instance", "class_of", "is_instance", "fields"]


class Instance:
    """An object created by calling a Class.

    Attribute access on an instance walks a fixed chain: the instance's
    own fields, then the instance members of its class, the class's
    traits, and each ancestor class in turn. Callables found in member
    tables come back bound to the instance. Assigning an attribute
    always writes a field on the instance.

    Python operators are wired to metamethods of the same name found
    through the class chain. An operator with no metamethod behaves as
    the Python default (identity equality, TypeError for arithmetic).
    As with Python classes, defining `eq` without `hash` makes instances
    unhashable.

    Args:
        klass: (Class) Class the instance belongs to
        fields: (dict | None) Initial field values, copied

    """

    __slots__ = ("_class", "_fields", "_building")

    def __init__(self, klass, fields=None):
        object.__setattr__(self, "_class", klass)
        object.__setattr__(self, "_fields", dict(fields or {}))
        object.__setattr__(self, "_building", None)

    def super(self):
        """Create a detached copy of this instance as its parent class.

        The copy only receives fields that the constructors of the parent
        class or its ancestors set, with their current values here. No
        constructors run. Changes to the copy are never seen by this
        instance, and the copy can call `super()` again to step further up.

        Returns:
            (Instance) New instance of the parent class

        Raises:
            TypeError: If the class has no parent
        """
        parent = self._class.parent
        if parent is None:
            raise TypeError(f"{self._class!r} has no parent class")
        keep = parent.constructed_fields()
        return Instance(parent, {k: v for k, v in self._fields.items() if k in keep})

    def _construct(self, klass, constructor, args, kwargs):
        """Run one constructor, crediting field writes to klass."""
        object.__setattr__(self, "_building", klass)
        try:
            constructor(self, *args, **kwargs)
        finally:
            object.__setattr__(self, "_building", None)

    def __copy__(self):
        return Instance(self._class, self._fields)

    def __deepcopy__(self, memo):
        return Instance(self._class, copy.deepcopy(self._fields, memo))

    def __getattr__(self, name):
        # Only reached when normal attribute lookup fails
        if name in Instance.__slots__ or (name.startswith("__") and name.endswith("__")):
            raise AttributeError(name)
        storage = self._fields
        if name in storage:
            return storage[name]
        value = self._class.lookup_method(name)
        if callable(value):
            return types.MethodType(value, self)
        return value

    def __setattr__(self, name, value):
        if name in Instance.__slots__:
            object.__setattr__(self, name, value)
            return
        building = self._building
        if building is not None:
            building._fields.add(name)
        self._fields[name] = value

    def __delattr__(self, name):
        try:
            del self._fields[name]
        except KeyError:
            raise AttributeError(f"{self!r} has no field {name!r}") from None

    def _meta(self, name, *args):
        fn = self._class.lookup_meta(name)
        if fn is None:
            return NotImplemented
        return fn(*args)

    def _require(self, name, *args):
        fn = self._class.lookup_meta(name)
        if fn is None:
            raise TypeError(f"{self._class!r} has no {name!r} metamethod")
        return fn(*args)

    def __repr__(self):
        fn = self._class.lookup_meta("repr")
        if fn is not None:
            return fn(self)
        return f"Instance<{self._class.qualified}>"

    def __str__(self):
        fn = self._class.lookup_meta("str")
        if fn is not None:
            return fn(self)
        return repr(self)

    def __hash__(self):
        fn = self._class.lookup_meta("hash")
        if fn is not None:
            return fn(self)
        if self._class.lookup_meta("eq") is not None:
            raise TypeError(f"{self._class!r} defines eq without hash, its instances are unhashable")
        return object.__hash__(self)

    def __bool__(self):
        return True

    def __eq__(self, other):
        return self._meta("eq", self, other)

    def __lt__(self, other):
        return self._meta("lt", self, other)

    def __le__(self, other):
        return self._meta("le", self, other)

    def __gt__(self, other):
        return self._meta("lt", other, self)

    def __ge__(self, other):
        return self._meta("le", other, self)

    def __add__(self, other):
        return self._meta("add", self, other)

    def __radd__(self, other):
        return self._meta("add", other, self)

    def __sub__(self, other):
        return self._meta("sub", self, other)

    def __rsub__(self, other):
        return self._meta("sub", other, self)

    def __mul__(self, other):
        return self._meta("mul", self, other)

    def __rmul__(self, other):
        return self._meta("mul", other, self)

    def __truediv__(self, other):
        return self._meta("truediv", self, other)

    def __rtruediv__(self, other):
        return self._meta("truediv", other, self)

    def __floordiv__(self, other):
        return self._meta("floordiv", self, other)

    def __rfloordiv__(self, other):
        return self._meta("floordiv", other, self)

    def __mod__(self, other):
        return self._meta("mod", self, other)

    def __rmod__(self, other):
        return self._meta("mod", other, self)

    def __pow__(self, other):
        return self._meta("pow", self, other)

    def __rpow__(self, other):
        return self._meta("pow", other, self)

    def __neg__(self):
        return self._require("neg", self)

    def __len__(self):
        return self._require("len", self)

    def __call__(self, *args, **kwargs):
        return self._require("call", self, *args, **kwargs)

    def __contains__(self, item):
        return bool(self._require("contains", self, item))

    def __getitem__(self, key):
        return self._require("getitem", self, key)

    def __setitem__(self, key, value):
        self._require("setitem", self, key, value)

    __iter__ = None


def class_of(instance):
    """(Class) Class that created an instance."""
    return instance._class


def is_instance(instance, entity):
    """Check if an instance belongs to a class or trait.

    Args:
        instance: (Instance) Instance to test
        entity: (Class | Trait) Class to match, including ancestors, or
            trait implemented anywhere in the class chain

    Returns:
        (bool) True if the instance matches
    """
    if not isinstance(instance, Instance):
        return False
    chain = instance._class.mro()
    if isinstance(entity, kinship.Trait):
        for klass in chain:
            if _has_trait(klass, entity, ()):
                return True
        return False
    return entity in chain


def _has_trait(composite, trait, visiting):
    for implemented in composite.traits:
        if implemented is trait:
            return True
        if implemented not in visiting and _has_trait(implemented, trait, visiting + (composite,)):
            return True
    return False


def fields(instance):
    """(dict) Copy of an instance's field storage."""
    return dict(instance._fields)
