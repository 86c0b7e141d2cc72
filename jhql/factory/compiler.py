"""
Compiles JHQL query expressions into queryer trees.

An expression is one of:

- a shorthand string, `"text:/html/head/title"`, sugar for `{"_type": "text", "value": "/html/head/title"}`
- a complexed object, `{"_type": "list", "from": "//a", "select": "text:@href"}`
- an implicit object, `{"title": "text:/html/head/title", ...}` without `_type`, compiled to an ObjectQueryer
  with one rule per field
"""

from collections.abc import Mapping
from functools import partial
import importlib.resources
import sys
import time

import tatsu
import tatsu.exceptions

from jhql.errors.errors import (
    IllegalExpressionError,
    IllegalStringExpressionError,
    MissingTypeError,
    NestingTooDeepError,
    TypeFieldError,
    UnsupportedTypeError,
)
from jhql.factory.binder import bind
from jhql.factory.registry import DEFAULT_REGISTRY, TYPE_KEY, TypeRegistry
from jhql.logging import get_compile_logger
from jhql.query.query import ObjectQueryer, Queryer
from jhql.util.decoding import JSONValue, Source, decode, source_kind

with importlib.resources.files("jhql.factory").joinpath("shorthand.ebnf").open() as fp:
    grammar = fp.read()
    parser = tatsu.compile(grammar)

compile_logger = get_compile_logger()


def compile_from_source(source: Source, registry: TypeRegistry = DEFAULT_REGISTRY) -> Queryer:
    """
    Decodes `source` (JSON text, a path or a stream) and compiles the result.

    Raises DecodeError if the source is not readable JSON and GrammarError if it is not a valid expression.
    """
    bf = time.time()
    try:
        return compile(decode(source), registry)
    finally:
        af = time.time()
        compile_logger.info("", {"source": source_kind(source), "took": af - bf}, exc_info=sys.exc_info()[0])  # pyright: ignore[reportArgumentType]


def compile(value: JSONValue, registry: TypeRegistry = DEFAULT_REGISTRY) -> Queryer:
    try:
        return _compile(value, registry)
    except RecursionError as e:
        raise NestingTooDeepError() from e


def _compile(value: JSONValue, registry: TypeRegistry) -> Queryer:
    match value:
        case str():
            return _compile_shorthand(value, registry)
        case Mapping() if TYPE_KEY in value:
            return _compile_complexed(value, registry)
        case Mapping():
            return _compile_object(value, registry)
        case _:
            raise IllegalExpressionError(value)


def expand_shorthand(expr: str) -> dict[str, str]:
    """
    Returns the complexed form of a shorthand expression. There must be exactly
    one colon, so values containing colons can only be written in complexed form.
    """
    try:
        ast = parser.parse(expr)
    except tatsu.exceptions.FailedParse as e:
        raise IllegalStringExpressionError(expr) from e
    return {TYPE_KEY: ast.discriminator or "", "value": ast.arg or ""}


def _compile_shorthand(expr: str, registry: TypeRegistry) -> Queryer:
    return _compile_complexed(expand_shorthand(expr), registry)


def _compile_complexed(expr: Mapping[str, JSONValue], registry: TypeRegistry) -> Queryer:
    queryer_type = expr.get(TYPE_KEY)
    if queryer_type is None:
        raise MissingTypeError()
    if not isinstance(queryer_type, str):
        raise TypeFieldError(queryer_type)

    descriptor = registry.get(queryer_type)
    if descriptor is None:
        raise UnsupportedTypeError(queryer_type)

    return bind(descriptor, expr, partial(_compile, registry=registry))


def _compile_object(expr: Mapping[str, JSONValue], registry: TypeRegistry) -> ObjectQueryer:
    return ObjectQueryer({field: _compile(field_expr, registry) for field, field_expr in expr.items()})
