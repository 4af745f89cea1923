"""Confbridge adapters - the format-independent value contract."""

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

__all__ = [
    "ConfigDecoder",
    "Context",
    "ContextDecoder",
    "Decoder",
    "Iterator",
    "Kind",
    "Loader",
    "Value",
]
