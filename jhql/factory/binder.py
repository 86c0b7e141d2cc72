from typing import Any, Callable, Mapping

import pydantic

from jhql.errors.errors import (
    InstantiationError,
    PropertyTypeError,
    RequiredPropertyError,
    UnexpectedPropertyError,
)
from jhql.factory.registry import TYPE_KEY, Nested, VariantDescriptor
from jhql.query.query import Queryer


def bind(
    descriptor: VariantDescriptor,
    expr: Mapping[str, Any],
    compile_nested: Callable[[Any], Queryer],
) -> Queryer:
    """
    Builds the queryer described by `descriptor` from a complexed expression.

    :param expr: The expression, `_type` included.
    :param compile_nested: Used to compile the value of nested query properties.
    :return: The queryer, with every supplied property set and every other left at its default.
    """
    queryer_type = descriptor.discriminator
    remaining = {key: value for key, value in expr.items() if key != TYPE_KEY}
    bound: dict[str, Any] = {}

    for prop in descriptor.properties:
        value = remaining.get(prop.name)
        # null is the same as leaving the property out, the key is not consumed though
        if value is None:
            if prop.required:
                raise RequiredPropertyError(prop.name, queryer_type)
            continue

        if isinstance(prop.kind, Nested):
            bound[prop.field_name] = compile_nested(value)
        else:
            try:
                bound[prop.field_name] = prop.kind.validate(value)
            except pydantic.ValidationError as e:
                raise PropertyTypeError(prop.name, queryer_type, prop.kind.describe()) from e
        del remaining[prop.name]

    if remaining:
        raise UnexpectedPropertyError(list(remaining), queryer_type)

    try:
        return descriptor.factory(**bound)
    except Exception as e:
        raise InstantiationError(queryer_type) from e
