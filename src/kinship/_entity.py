"""Base entity type for declared objects."""

import kinship


__all__ = ["Entity"]


class Entity:
    """Base class for everything declared through a Registry.

    Subclasses:
    - Class: Instantiable entity with constructors and a parent
    - Trait: Composable bundle of members
    - Namespace: Scope that owns other entities

    Every entity is bound in exactly one scope at a time. That is the
    Registry when first declared globally, or a Namespace after it has
    been included into one.

    Args:
        name: (str) Entity name, unique within its scope
        owner: (Scope) Registry or Namespace that binds this entity

    Attributes:
        name: (str) Entity name
        owner: (Scope) Registry or Namespace that currently binds this entity
        registry: (Registry) Registry this entity was declared through
    """

    __slots__ = ("name", "owner", "registry")

    kind = "entity"

    def __init__(self, name, owner):
        self.name = name
        self.owner = owner
        self.registry = owner.registry

    @property
    def namespace(self):
        """(Namespace | None) Owning namespace, None when bound globally."""
        owner = self.owner
        if isinstance(owner, kinship.Namespace):
            return owner
        return None

    @property
    def qualified(self):
        """(str) Dotted name including enclosing namespaces."""
        namespace = self.namespace
        if namespace is None:
            return self.name
        return f"{namespace.qualified}.{self.name}"

    def __repr__(self):
        return f"{type(self).__name__}<{self.qualified}>"

    def _touch(self):
        """Invalidate cached lookups after a configuration change."""
        self.registry.generation += 1
