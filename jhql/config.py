from dataclasses import dataclass
import importlib
import logging

import environs
from pydantic import BaseModel, ConfigDict, ValidationError
import yaml

from jhql.errors.errors import ConfigurationError
from jhql.factory.registry import DEFAULT_REGISTRY, TypeRegistry, VariantDescriptor
from jhql.logging import setup_compile_logger

logger = logging.getLogger(__name__)


@dataclass
class Env:
    config_path: str = ""
    logging_dir: str = ""
    compile_logging: bool = False


def get_env() -> Env:
    env = environs.Env()
    env.read_env()

    return Env(
        config_path=env.str("JHQL_CONFIG", ""),
        logging_dir=env.str("JHQL_LOGGING_DIR", ""),
        compile_logging=env.bool("JHQL_COMPILE_LOGGING", False),
    )


class RegistryConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # references on the form "package.module:attribute"
    variants: list[str] = []


def load_config(path: str) -> RegistryConfig:
    try:
        with open(path) as fp:
            data = yaml.safe_load(fp)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"cannot read config {path}: {e}") from e
    try:
        return RegistryConfig(**(data or {}))
    except (TypeError, ValidationError) as e:
        raise ConfigurationError(f"invalid config {path}: {e}") from e


def resolve_variant(ref: str) -> VariantDescriptor:
    module_name, sep, attr = ref.partition(":")
    if not (module_name and sep and attr):
        raise ConfigurationError(f'variant reference "{ref}" must look like "module:attribute"')
    try:
        descriptor = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f'cannot load variant "{ref}": {e}') from e
    if not isinstance(descriptor, VariantDescriptor):
        raise ConfigurationError(f'"{ref}" is not a VariantDescriptor')
    logger.debug("resolved %s to queryer type %s", ref, descriptor.discriminator)
    return descriptor


def load_registry(env: Env) -> TypeRegistry:
    """
    The built-in queryer types plus the ones listed in the config file, if there is one.
    """
    if not env.config_path:
        return DEFAULT_REGISTRY
    config = load_config(env.config_path)
    return DEFAULT_REGISTRY.extend(resolve_variant(ref) for ref in config.variants)


def setup(env: Env) -> TypeRegistry:
    """
    To be called once at startup, before anything is compiled.
    """
    if env.compile_logging:
        if not env.logging_dir:
            raise ConfigurationError("JHQL_LOGGING_DIR must be set when JHQL_COMPILE_LOGGING is enabled")
        setup_compile_logger(env.logging_dir)
    return load_registry(env)
