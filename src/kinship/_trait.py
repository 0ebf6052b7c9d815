"""Trait definitions and member composition"""

import logging

import kinship


__all__ = ["Composite", "Trait"]

logger = logging.getLogger(__name__)

# Positions of the member tables returned by Composite.tables()
STATIC, METHOD, META = 0, 1, 2


class Composite(kinship.Entity):
    """Entity holding member tables that traits can be merged into.

    Classes and traits both carry a static table, an instance member
    table and a metamethod table, and both can implement other traits.
    Members from implemented traits are never copied into the tables
    here. They are flattened into a separate cached set of tables that
    lookup consults after the entity's own tables, so local members
    always win over trait members.

    Args:
        name: (str) Entity name
        owner: (Scope) Scope that binds the entity

    Attributes:
        statics: (dict) Static members by name
        methods: (dict) Instance members by name
        metas: (dict) Metamethods by name
    """

    __slots__ = ("statics", "methods", "metas", "_traits", "_flat")

    def __init__(self, name, owner):
        super().__init__(name, owner)
        self.statics = {}
        self.methods = {}
        self.metas = {}
        self._traits = []   # Trait or str name not yet resolved
        self._flat = None   # (generation, tables)

    def static(self, members=None, **kwargs):
        """Merge static members, later names overwrite earlier ones.

        Returns:
            self (for chaining)
        """
        kinship._meta.merge_members(self.statics, members, kwargs)
        self._touch()
        return self

    def method(self, members=None, **kwargs):
        """Merge instance members, later names overwrite earlier ones.

        Returns:
            self (for chaining)
        """
        kinship._meta.merge_members(self.methods, members, kwargs)
        self._touch()
        return self

    def meta(self, members=None, **kwargs):
        """Merge metamethods, later names overwrite earlier ones.

        Returns:
            self (for chaining)

        Raises:
            ReservedMetamethodError: If `getattr` or `setattr` is given
        """
        kinship._meta.check_metamethods(members, kwargs)
        names = kinship._meta.merge_members(self.metas, members, kwargs)
        unwired = sorted(set(names) - kinship.METAMETHODS)
        if unwired:
            logger.debug("%r metamethods %s have no operator", self, ", ".join(unwired))
        self._touch()
        return self

    def implements(self, trait):
        """Compose a trait into this entity.

        Traits given by name are resolved on first use, searching the
        entity's namespace first. Pass the Trait itself when the name
        may not be visible from here by then.

        Args:
            trait: (Trait | str) Trait or trait name

        Returns:
            self (for chaining)

        Raises:
            DuplicateImplementationError: If the same reference is
                already implemented
        """
        if isinstance(trait, kinship.Trait):
            if trait.registry is not self.registry:
                raise TypeError(f"{trait!r} belongs to a different registry than {self!r}")
            if trait is self:
                raise kinship.CyclicReferenceError(f"{self!r} cannot implement itself")
        elif not isinstance(trait, str):
            raise TypeError(f"Expected Trait or trait name, got {trait!r}")

        for existing in self._traits:
            if existing is trait or existing == trait:
                raise kinship.DuplicateImplementationError(
                    f"{self!r} already implements {trait!r}"
                )
        self._traits.append(trait)
        self._touch()
        return self

    @property
    def traits(self):
        """(tuple[Trait]) Directly implemented traits, in implementation order."""
        self._resolve_traits()
        return tuple(self._traits)

    def tables(self):
        """(tuple[dict, dict, dict]) Own static, instance and metamethod tables."""
        return (self.statics, self.methods, self.metas)

    def flattened(self):
        """Members contributed by implemented traits.

        Each trait's own members override the members of the traits it
        implements, and a later implemented trait overrides an earlier
        one. The result is cached until the registry changes.

        Returns:
            (tuple[dict, dict, dict]) Static, instance and metamethod tables
        """
        return self._flatten(())

    def _flatten(self, visiting):
        generation = self.registry.generation
        if self._flat is not None and self._flat[0] == generation:
            return self._flat[1]

        self._resolve_traits()
        visiting = visiting + (self,)
        merged = ({}, {}, {})
        for trait in self._traits:
            if trait in visiting:
                chain = " -> ".join(repr(e) for e in visiting + (trait,))
                raise kinship.CyclicReferenceError(f"Trait composition loops: {chain}")
            inherited = trait._flatten(visiting)
            for table, below, own in zip(merged, inherited, trait.tables()):
                table.update(below)
                table.update(own)

        self._flat = (generation, merged)
        return merged

    def _resolve_traits(self):
        """Replace pending trait names with the traits they refer to."""
        for index, ref in enumerate(self._traits):
            if not isinstance(ref, str):
                continue
            trait = self.registry.lookup(ref, scope=self.owner, kind=kinship.Trait)
            if trait is self:
                raise kinship.CyclicReferenceError(f"{self!r} cannot implement itself")
            if trait in self._traits:
                raise kinship.DuplicateImplementationError(
                    f"{self!r} already implements {trait!r} (named {ref!r})"
                )
            self._traits[index] = trait
            logger.debug("%r implements %r", self, trait)


class Trait(Composite):
    """A composable bundle of members.

    Traits hold static members, instance members and metamethods that
    are merged into any class or trait implementing them. Traits are
    never instantiated.
    """

    __slots__ = ()

    kind = "trait"

    def __call__(self, *args, **kwargs):
        raise TypeError(f"{self!r} is a trait and cannot be instantiated")
