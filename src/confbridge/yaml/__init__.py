"""YAML format adapter: loader, values and iterators."""

from confbridge.yaml.loader import YAMLLoader
from confbridge.yaml.value import (
    ListIterator,
    StructIterator,
    YAMLValue,
    new_value,
    parse,
)

__all__ = [
    "ListIterator",
    "StructIterator",
    "YAMLLoader",
    "YAMLValue",
    "new_value",
    "parse",
]
