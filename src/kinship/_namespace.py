"""Namespace building and lookup."""

import logging

import kinship


__all__ = ["Namespace"]

logger = logging.getLogger(__name__)


class Namespace(kinship.Entity, kinship.Scope):
    """A named scope that owns classes, traits and nested namespaces.

    Including an entity moves it out of the scope that held it (usually
    the Registry) and binds it here under its own name. Only entities
    passed to `include` move; anything else declared nearby stays where
    it was declared.

    Names resolved on behalf of an entity inside the namespace are
    searched here first, then in each enclosing namespace, then in the
    Registry. This lets a namespace hold its own trait named like a
    global one without either hiding the other.

    ## Examples

    Grouping declarations:
        >>> registry = kinship.Registry()
        >>> shape = registry.Trait("shape").method(area=lambda self: 0)
        >>> square = registry.Class("square").implements("shape")
        >>> geo = registry.Namespace("geo")(shape, square)
        >>> "square" in registry
        False
        >>> geo.square is square
        True

    Splitting a namespace across several places:
        >>> circle = registry.Class("circle").implements(shape)
        >>> geo.include(circle, version="1.0")
        Namespace<geo>
        >>> geo.version
        '1.0'

    Args:
        name: (str) Namespace name
        owner: (Scope) Scope that binds the namespace
        fallback: (bool) Continue resolution into enclosing scopes

    Attributes:
        fallback: (bool) Continue resolution into enclosing scopes
        values: (dict) Plain values included by keyword
    """

    __slots__ = ("_locals", "values", "fallback")

    kind = "namespace"

    def __init__(self, name, owner, fallback=True):
        super().__init__(name, owner)
        self._locals = {}
        self.values = {}
        self.fallback = fallback

    def __call__(self, *entities, **values):
        return self.include(*entities, **values)

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        entity = self._locals.get(name)
        if entity is not None:
            return entity
        try:
            return self.values[name]
        except KeyError:
            raise AttributeError(f"{self!r} has no member {name!r}") from None

    def include(self, *entities, **values):
        """Move entities into this namespace and store plain values.

        Args:
            *entities: Entities, or lists/tuples of entities, to include
            **values: Plain values stored on the namespace by name

        Returns:
            self (for chaining)

        Raises:
            NameCollisionError: If a different entity already has the
                name here
            CyclicReferenceError: If a namespace would end up inside itself
        """
        for entity in entities:
            if isinstance(entity, (list, tuple)):
                self.include(*entity)
            elif isinstance(entity, kinship.Entity):
                self._adopt(entity)
            else:
                raise TypeError(f"Cannot include {entity!r} in {self!r}, expected an entity")

        self.values.update(values)
        self._touch()
        return self

    def lookup(self, name, kind=None):
        """Resolve a name as seen from inside this namespace.

        Args:
            name: (str) Name to resolve
            kind: (type | None) Only accept entities of this kind

        Returns:
            (Entity) Resolved entity

        Raises:
            UnresolvedReferenceError: If nothing visible matches
        """
        return self.registry.lookup(name, scope=self, kind=kind)

    def _adopt(self, entity):
        if entity.registry is not self.registry:
            raise TypeError(f"{entity!r} belongs to a different registry than {self!r}")

        if isinstance(entity, Namespace):
            scope = self
            while isinstance(scope, Namespace):
                if scope is entity:
                    raise kinship.CyclicReferenceError(f"Cannot include {entity!r} inside itself")
                scope = scope.owner

        existing = self._locals.get(entity.name)
        if existing is entity:
            return
        if existing is not None:
            raise kinship.NameCollisionError(entity.name, self, existing)

        entity.owner._release(entity)
        self._locals[entity.name] = entity
        entity.owner = self
        logger.debug("Included %r", entity)
