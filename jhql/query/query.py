from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class Queryer:
    """
    Base of all query nodes. A tree of queryers describes what to extract from a
    target document; running it is left to the execution engine.
    """


@dataclass(frozen=True)
class TextQueryer(Queryer):
    value: str
    trim: bool = True


@dataclass(frozen=True)
class IntQueryer(Queryer):
    # a path, or a literal number
    value: str | int
    # used when the path does not yield a number
    default: int | None = None


@dataclass(frozen=True)
class ListQueryer(Queryer):
    """
    Selects every node matched by `from_` and applies `select` to each of them.
    """

    from_: str
    select: Queryer


@dataclass(frozen=True)
class ContextQueryer(Queryer):
    """
    Moves to the node matched by `from_` and applies `select` there.
    """

    from_: str
    select: Queryer


@dataclass(frozen=True)
class ObjectQueryer(Queryer):
    """
    One rule per field of the resulting object. Built directly by the compiler
    from expressions without `_type`. The rules are copied into a read-only mapping.
    """

    fields: Mapping[str, Queryer] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __hash__(self) -> int:
        return hash(frozenset(self.fields.items()))
