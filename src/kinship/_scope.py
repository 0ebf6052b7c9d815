"""Scopes and the Registry that resolves names across them."""

import logging

import kinship


__all__ = ["Scope", "Registry"]

logger = logging.getLogger(__name__)


class Scope:
    """Table of named entities.

    The Registry is the global scope. Each Namespace is a nested scope
    whose owner is the scope that encloses it.

    Scopes declare entities in place with `Class`, `Trait` and
    `Namespace`. Declaring a class or trait under a name that already
    holds the same kind of entity reopens that entity so configuration
    can be split across several calls.
    """

    __slots__ = ()

    def declare(self, kind, name, **options):
        """Create or reopen an entity in this scope.

        Args:
            kind: (type) One of Class, Trait or Namespace
            name: (str) Name to bind
            **options: Extra arguments for the entity constructor

        Returns:
            (Entity) The new or reopened entity

        Raises:
            NameCollisionError: If the name holds a different kind of
                entity, or any entity when declaring a Namespace
            TypeError: If name is not a non-empty string
        """
        if not isinstance(name, str) or not name:
            raise TypeError(f"Entity names must be non-empty strings, got {name!r}")

        existing = self._locals.get(name)
        if existing is not None:
            if type(existing) is kind and kind is not kinship.Namespace:
                logger.debug("Reopened %s %r in %r", kind.kind, name, self)
                return existing
            raise kinship.NameCollisionError(name, self, existing)

        entity = kind(name, self, **options)
        self._locals[name] = entity
        self.registry.generation += 1
        logger.debug("Declared %s %r in %r", kind.kind, name, self)
        return entity

    def Class(self, name):
        """Declare or reopen a class in this scope."""
        return self.declare(kinship.Class, name)

    def Trait(self, name):
        """Declare or reopen a trait in this scope."""
        return self.declare(kinship.Trait, name)

    def Namespace(self, name, /, *entities, fallback=True, **values):
        """Declare a namespace in this scope and include any given children.

        Args:
            name: (str) Namespace name
            *entities: Entities to move into the new namespace
            fallback: (bool) Continue resolution into enclosing scopes
            **values: Plain values stored on the namespace

        Returns:
            (Namespace) The new namespace
        """
        namespace = self.declare(kinship.Namespace, name, fallback=fallback)
        if entities or values:
            namespace.include(*entities, **values)
        return namespace

    def names(self):
        """(list[str]) Sorted names of entities bound directly in this scope."""
        return sorted(self._locals)

    def _release(self, entity):
        """Drop the binding for entity if this scope holds it."""
        if self._locals.get(entity.name) is entity:
            del self._locals[entity.name]
            logger.debug("Detached %r from %r", entity, self)

    def __bool__(self):
        return True

    def __contains__(self, name):
        return name in self._locals

    def __getitem__(self, name):
        return self._locals[name]

    def __iter__(self):
        return iter(self.names())

    def __len__(self):
        return len(self._locals)


class Registry(Scope):
    """Global scope for one program.

    Names declared here are visible to every entity that does not shadow
    them in a namespace. Create one registry per program or per test;
    nothing is shared between registries.

    Attributes:
        registry: (Registry) Itself, so scopes can reach their registry
        generation: (int) Counter bumped on every configuration change,
            used to invalidate cached lookup tables
    """

    __slots__ = ("_locals", "registry", "generation")

    def __init__(self):
        self._locals = {}
        self.registry = self
        self.generation = 0

    def __repr__(self):
        return "Registry<global>"

    def find(self, name, scope=None, kind=None):
        """Resolve a name outward from a scope, returning None if missing.

        Resolution checks the locals of `scope`, then each enclosing
        namespace, then the global table. A namespace with fallback
        disabled ends the search at itself.

        Args:
            name: (str) Name to resolve
            scope: (Scope | None) Innermost scope, None for global only
            kind: (type | None) Only accept entities of this kind

        Returns:
            (Entity | None) Resolved entity
        """
        while scope is not None and scope is not self:
            entity = scope._locals.get(name)
            if entity is not None and (kind is None or isinstance(entity, kind)):
                return entity
            if not scope.fallback:
                return None
            scope = scope.owner

        entity = self._locals.get(name)
        if entity is not None and (kind is None or isinstance(entity, kind)):
            return entity
        return None

    def lookup(self, name, scope=None, kind=None):
        """Resolve a name outward from a scope.

        Same as `find` but a missing name is an error.

        Raises:
            UnresolvedReferenceError: If nothing visible matches
        """
        entity = self.find(name, scope, kind)
        where = f" from {scope!r}" if scope is not None else ""
        if entity is None:
            what = kind.kind if kind is not None else "entity"
            raise kinship.UnresolvedReferenceError(name, f"Cannot resolve {what} {name!r}{where}")
        logger.debug("Resolved %r%s to %r", name, where, entity)
        return entity
