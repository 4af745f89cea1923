"""Confbridge configuration models."""

from confbridge.models.config import LoaderConfig, load_loader_config

__all__ = [
    "LoaderConfig",
    "load_loader_config",
]
