"""Metamethod names and member table helpers"""

import kinship


__all__ = ["METAMETHODS", "RESERVED_METAMETHODS"]


# Operator hooks that Instance wires to Python operator syntax
METAMETHODS = frozenset((
    "add",
    "sub",
    "mul",
    "truediv",
    "floordiv",
    "mod",
    "pow",
    "neg",
    "eq",
    "lt",
    "le",
    "len",
    "call",
    "str",
    "repr",
    "hash",
    "contains",
    "getitem",
    "setitem",
))

# Member access is always the lookup chain itself
RESERVED_METAMETHODS = frozenset(("getattr", "setattr"))


def merge_members(table, members, kwargs):
    """Collect members from a mapping and keyword arguments.

    Args:
        table: (dict) Destination member table, updated in place
        members: (Mapping | None) Positional mapping of members
        kwargs: (dict) Keyword members, applied after `members`

    Returns:
        (list[str]) Names that were written
    """
    incoming = {}
    if members is not None:
        incoming.update(members)
    incoming.update(kwargs)
    for name in incoming:
        if not isinstance(name, str):
            raise TypeError(f"Member names must be strings, got {name!r}")
    table.update(incoming)
    return list(incoming)


def check_metamethods(members, kwargs):
    """Reject reserved metamethod names before anything is merged.

    Raises:
        ReservedMetamethodError: If a reserved name is present
    """
    names = set(kwargs)
    if members is not None:
        names.update(members)
    reserved = sorted(names & RESERVED_METAMETHODS)
    if reserved:
        raise kinship.ReservedMetamethodError(
            f"Metamethods {', '.join(reserved)} are reserved for member access"
        )
