"""
Variant descriptors and the registry that maps a `_type` discriminator to them.

A descriptor states, for one queryer type, which JSON properties it accepts,
whether each of them is required, and whether the value is a scalar or a
nested query expression. The binder only ever looks at descriptors, never at
the queryer classes themselves.
"""

from dataclasses import dataclass
from functools import cached_property
import logging
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator

from pydantic import ConfigDict, TypeAdapter

from jhql.errors.errors import ConfigurationError
from jhql.query.query import ContextQueryer, IntQueryer, ListQueryer, Queryer, TextQueryer

logger = logging.getLogger(__name__)

TYPE_KEY = "_type"


@dataclass(frozen=True)
class Scalar:
    type: Any

    def describe(self) -> str:
        return getattr(self.type, "__name__", repr(self.type))

    @cached_property
    def adapter(self) -> TypeAdapter:
        return TypeAdapter(self.type, config=ConfigDict(strict=True))

    def validate(self, value: object) -> Any:
        """Raises pydantic.ValidationError unless value already has the declared type, nothing is coerced."""
        return self.adapter.validate_python(value)


@dataclass(frozen=True)
class Nested:
    def describe(self) -> str:
        return "query expression"


NESTED = Nested()


@dataclass(frozen=True)
class Property:
    name: str
    kind: Scalar | Nested
    required: bool = False
    # keyword passed to the factory, when the JSON name is not a valid identifier
    attr: str | None = None

    @property
    def field_name(self) -> str:
        return self.attr or self.name


@dataclass(frozen=True)
class VariantDescriptor:
    discriminator: str
    factory: Callable[..., Queryer]
    properties: tuple[Property, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "properties", tuple(self.properties))
        seen: set[str] = set()
        for prop in self.properties:
            if prop.name == TYPE_KEY:
                raise ConfigurationError(f"`{TYPE_KEY}` cannot be a property of `{self.discriminator}`")
            if prop.name in seen:
                raise ConfigurationError(f"property `{prop.name}` declared twice for `{self.discriminator}`")
            seen.add(prop.name)


class TypeRegistry:
    """
    Read-only lookup from discriminator to descriptor. Use `extend` to get a new
    registry with more variants, an existing registry is never changed.
    """

    def __init__(self, descriptors: Iterable[VariantDescriptor]):
        variants: dict[str, VariantDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.discriminator in variants:
                raise ConfigurationError(f"queryer type `{descriptor.discriminator}` is registered twice")
            variants[descriptor.discriminator] = descriptor
        self._variants = MappingProxyType(variants)
        logger.debug("built registry with types: %s", ", ".join(self.discriminators()))

    def get(self, discriminator: str) -> VariantDescriptor | None:
        return self._variants.get(discriminator)

    def discriminators(self) -> list[str]:
        return sorted(self._variants)

    def extend(self, descriptors: Iterable[VariantDescriptor]) -> "TypeRegistry":
        return TypeRegistry([*self._variants.values(), *descriptors])

    def __contains__(self, discriminator: object) -> bool:
        return discriminator in self._variants

    def __iter__(self) -> Iterator[VariantDescriptor]:
        return iter(self._variants.values())

    def __len__(self) -> int:
        return len(self._variants)


BUILTIN_VARIANTS = (
    VariantDescriptor(
        "text",
        TextQueryer,
        (
            Property("value", Scalar(str), required=True),
            Property("trim", Scalar(bool)),
        ),
    ),
    VariantDescriptor(
        "int",
        IntQueryer,
        (
            Property("value", Scalar(str | int), required=True),
            Property("default", Scalar(int)),
        ),
    ),
    VariantDescriptor(
        "list",
        ListQueryer,
        (
            Property("from", Scalar(str), required=True, attr="from_"),
            Property("select", NESTED, required=True),
        ),
    ),
    VariantDescriptor(
        "context",
        ContextQueryer,
        (
            Property("from", Scalar(str), required=True, attr="from_"),
            Property("select", NESTED, required=True),
        ),
    ),
)

DEFAULT_REGISTRY = TypeRegistry(BUILTIN_VARIANTS)
