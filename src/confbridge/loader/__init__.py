"""Confbridge YAML parsing and serialization."""

from confbridge.loader.yaml_parser import dump_yaml, parse_yaml

__all__ = [
    "dump_yaml",
    "parse_yaml",
]
