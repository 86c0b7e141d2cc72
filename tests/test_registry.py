from dataclasses import dataclass

import pytest

from jhql.errors.errors import ConfigurationError
from jhql.factory.compiler import compile
from jhql.factory.registry import (
    BUILTIN_VARIANTS,
    DEFAULT_REGISTRY,
    NESTED,
    Property,
    Scalar,
    TypeRegistry,
    VariantDescriptor,
)
from jhql.query.query import Queryer, TextQueryer


@dataclass(frozen=True)
class FloatQueryer(Queryer):
    value: str
    scale: float = 1.0


@dataclass(frozen=True)
class FirstQueryer(Queryer):
    of: Queryer


float_variant = VariantDescriptor(
    "float",
    FloatQueryer,
    (Property("value", Scalar(str), required=True), Property("scale", Scalar(float))),
)
first_variant = VariantDescriptor("first", FirstQueryer, (Property("of", NESTED, required=True),))


def test_builtins():
    assert DEFAULT_REGISTRY.discriminators() == ["context", "int", "list", "text"]
    assert len(DEFAULT_REGISTRY) == 4
    assert "text" in DEFAULT_REGISTRY
    assert "object" not in DEFAULT_REGISTRY
    assert DEFAULT_REGISTRY.get("nope") is None


def test_builtin_schemas():
    schemas = {
        descriptor.discriminator: [(p.name, p.required, p.kind) for p in descriptor.properties]
        for descriptor in BUILTIN_VARIANTS
    }
    assert schemas["text"] == [("value", True, Scalar(str)), ("trim", False, Scalar(bool))]
    assert schemas["int"] == [("value", True, Scalar(str | int)), ("default", False, Scalar(int))]
    assert schemas["list"] == [("from", True, Scalar(str)), ("select", True, NESTED)]
    assert schemas["context"] == schemas["list"]


def test_duplicate_discriminator():
    with pytest.raises(ConfigurationError, match="`float` is registered twice"):
        TypeRegistry([float_variant, float_variant])


def test_extend_with_builtin_name():
    with pytest.raises(ConfigurationError, match="`text`"):
        DEFAULT_REGISTRY.extend([VariantDescriptor("text", TextQueryer)])


def test_extend_returns_new_registry():
    registry = DEFAULT_REGISTRY.extend([float_variant, first_variant])
    assert "float" in registry
    assert "float" not in DEFAULT_REGISTRY
    assert registry.discriminators() == ["context", "first", "float", "int", "list", "text"]


def test_compile_custom_variant():
    registry = DEFAULT_REGISTRY.extend([float_variant, first_variant])
    assert compile("float://price", registry) == FloatQueryer(value="//price")
    assert compile({"_type": "float", "value": "//price", "scale": 0.5}, registry) == FloatQueryer("//price", 0.5)
    # nested expressions are compiled against the same registry
    assert compile({"_type": "first", "of": "float:@v"}, registry) == FirstQueryer(of=FloatQueryer(value="@v"))


def test_property_named_type():
    with pytest.raises(ConfigurationError, match="`_type`"):
        VariantDescriptor("bad", TextQueryer, (Property("_type", Scalar(str)),))


def test_property_declared_twice():
    with pytest.raises(ConfigurationError, match="`value` declared twice"):
        VariantDescriptor("bad", TextQueryer, (Property("value", Scalar(str)), Property("value", Scalar(str))))


def test_field_name():
    assert Property("from", Scalar(str), attr="from_").field_name == "from_"
    assert Property("value", Scalar(str)).field_name == "value"
