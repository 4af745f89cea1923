"""confbridge - YAML adapter for format-independent configuration values."""

from confbridge.adapters.base import (
    ConfigDecoder,
    Context,
    ContextDecoder,
    Decoder,
    Iterator,
    Kind,
    Loader,
    Value,
)
from confbridge.errors import (
    CoercionError,
    ConfigError,
    DecodeError,
    ParseError,
    PathNotFoundError,
)
from confbridge.yaml import YAMLLoader, YAMLValue, parse

__version__ = "0.1.0"

__all__ = [
    "CoercionError",
    "ConfigDecoder",
    "ConfigError",
    "Context",
    "ContextDecoder",
    "DecodeError",
    "Decoder",
    "Iterator",
    "Kind",
    "Loader",
    "ParseError",
    "PathNotFoundError",
    "Value",
    "YAMLLoader",
    "YAMLValue",
    "parse",
]
