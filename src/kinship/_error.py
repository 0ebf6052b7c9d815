"""Error classes and helpers"""

__all__ = [
    "KinshipError",
    "NameCollisionError",
    "MultipleInheritanceError",
    "DuplicateImplementationError",
    "ReservedMetamethodError",
    "UnresolvedReferenceError",
    "CyclicReferenceError",
]


class KinshipError(Exception):
    """Base for all errors raised while declaring or resolving entities."""


class NameCollisionError(KinshipError):
    """Name already bound to an incompatible entity in a scope.

    Args:
        name: (str) Name that was being declared
        scope: (Scope) Scope where the collision happened
        existing: (Entity) Entity already bound under the name

    Attributes:
        name: (str) Name that was being declared
        scope: (Scope) Scope where the collision happened
        existing: (Entity) Entity already bound under the name
    """

    def __init__(self, name, scope, existing):
        self.name = name
        self.scope = scope
        self.existing = existing
        super().__init__(f"Name {name!r} in {scope!r} is already bound to {existing!r}")


class MultipleInheritanceError(KinshipError):
    """Class already has a parent."""


class DuplicateImplementationError(KinshipError):
    """Same trait implemented twice on one class or trait."""


class ReservedMetamethodError(KinshipError):
    """Attempt to define a reserved member access metamethod."""


class UnresolvedReferenceError(KinshipError, LookupError):
    """Reference by name could not be found in any visible scope.

    Args:
        name: (str) Name that failed to resolve
        message: (str | None) Optional override for the error message

    Attributes:
        name: (str) Name that failed to resolve
    """

    def __init__(self, name, message=None):
        self.name = name
        super().__init__(message or f"Cannot resolve {name!r}")


class CyclicReferenceError(KinshipError):
    """Inheritance or trait composition refers back to itself."""
