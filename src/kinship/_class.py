"""Class definitions, inheritance and member lookup"""

import logging

import kinship
from kinship._trait import STATIC, METHOD, META


__all__ = ["Class"]

logger = logging.getLogger(__name__)

_missing = object()


class Class(kinship.Composite):
    """A class definition.

    Classes produce Instances when called. They carry an ordered list of
    constructors, static members, instance members and metamethods, an
    optional parent class and any number of implemented traits.

    Configuration calls return the class so they can be chained, and a
    class stays open for the life of the process. Members added later
    are visible to instances that already exist.

    Members are found by walking the class, its flattened traits, then
    the same for each ancestor. Static members are also reachable as
    attributes of the class, except for names the class itself uses
    (such as `name` or `parent`); use `lookup_static` for those.

    Args:
        name: (str) Class name
        owner: (Scope) Scope that binds the class

    Attributes:
        constructors: (list[callable]) Constructors in declaration order
    """

    __slots__ = ("constructors", "_parent", "_fields", "_final")

    kind = "class"

    def __init__(self, name, owner):
        super().__init__(name, owner)
        self.constructors = []
        self._parent = None     # Class or str name not yet resolved
        self._fields = set()    # Field names written by own constructors
        self._final = None      # Generation when the chain was last resolved

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        return self.lookup_static(name)

    def __call__(self, *args, **kwargs):
        """Create an instance, running every constructor from the root class down."""
        chain = self.mro()
        instance = kinship.Instance(self)
        for klass in reversed(chain):
            for constructor in klass.constructors:
                instance._construct(klass, constructor, args, kwargs)
        return instance

    def constructor(self, fn):
        """Append a constructor.

        Each constructor is called with the new instance followed by the
        arguments given to the class.

        Returns:
            self (for chaining)
        """
        if not callable(fn):
            raise TypeError(f"Constructor for {self!r} must be callable, got {fn!r}")
        self.constructors.append(fn)
        self._touch()
        return self

    def extends(self, parent):
        """Set the parent class.

        Args:
            parent: (Class | str) Parent class or its name

        Returns:
            self (for chaining)

        Raises:
            MultipleInheritanceError: If a parent is already set
        """
        if self._parent is not None:
            raise kinship.MultipleInheritanceError(
                f"{self!r} already extends {self._parent!r}, cannot also extend {parent!r}"
            )
        if isinstance(parent, Class):
            if parent.registry is not self.registry:
                raise TypeError(f"{parent!r} belongs to a different registry than {self!r}")
            if parent is self:
                raise kinship.CyclicReferenceError(f"{self!r} cannot extend itself")
        elif not isinstance(parent, str):
            raise TypeError(f"Expected Class or class name, got {parent!r}")

        self._parent = parent
        self._touch()
        return self

    @property
    def parent(self):
        """(Class | None) Parent class, resolved on first access."""
        self._finalize()
        return self._parent

    @property
    def super(self):
        """(Class | None) Parent class, for calling an overridden static."""
        return self.parent

    def mro(self):
        """(list[Class]) This class followed by its ancestors, nearest first."""
        self._finalize()
        chain = []
        klass = self
        while klass is not None:
            chain.append(klass)
            klass = klass._parent
        return chain

    def ancestors(self):
        """(list[Class]) Ancestors of this class, nearest first."""
        return self.mro()[1:]

    def is_subclass(self, other):
        """Check if this class is `other` or descends from it."""
        return other in self.mro()

    def constructed_fields(self):
        """Field names set by the constructors of this class and its ancestors.

        Fields are recorded as constructors run, so the set only covers
        constructors that have run at least once.

        Returns:
            (frozenset[str]) Field names
        """
        names = set()
        for klass in self.mro():
            names.update(klass._fields)
        return frozenset(names)

    def lookup_static(self, name):
        """Find a static member on this class, its traits, or its ancestors.

        Raises:
            AttributeError: If no class in the chain defines it
        """
        value = self._lookup(STATIC, name)
        if value is _missing:
            raise AttributeError(f"{self!r} has no static member {name!r}")
        return value

    def lookup_method(self, name):
        """Find an instance member on this class, its traits, or its ancestors.

        Raises:
            AttributeError: If no class in the chain defines it
        """
        value = self._lookup(METHOD, name)
        if value is _missing:
            raise AttributeError(f"{self!r} has no member {name!r}")
        return value

    def lookup_meta(self, name):
        """Find a metamethod, or None if no class in the chain defines it."""
        value = self._lookup(META, name)
        if value is _missing:
            return None
        return value

    def _lookup(self, index, name):
        for klass in self.mro():
            own = klass.tables()[index]
            if name in own:
                return own[name]
            inherited = klass.flattened()[index]
            if name in inherited:
                return inherited[name]
        return _missing

    def _finalize(self):
        """Resolve pending names up the chain and check for loops."""
        generation = self.registry.generation
        if self._final == generation:
            return

        seen = []
        klass = self
        while klass is not None:
            if klass in seen:
                chain = " -> ".join(repr(k) for k in seen + [klass])
                raise kinship.CyclicReferenceError(f"Inheritance loops: {chain}")
            seen.append(klass)
            klass._resolve_parent()
            klass = klass._parent

        for klass in seen:
            klass.flattened()
        self._final = generation

    def _resolve_parent(self):
        if not isinstance(self._parent, str):
            return
        parent = self.registry.lookup(self._parent, scope=self.owner, kind=Class)
        logger.debug("%r extends %r", self, parent)
        self._parent = parent
