"""Loader configuration model.

Captures the options a host may set for the YAML adapter, usually from
the `yaml` section of its own settings.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel


class LoaderConfig(BaseModel):
    """Options controlling how YAML documents are parsed and iterated.

    struct_order selects the key order of struct iterators: the order keys
    appear in the document, or sorted by key.

    stringify_keys renders every mapping key as text (`1` -> "1", `true` ->
    "true", `~` -> "null"). Keys that render the same collapse into one
    entry holding the later value, and a warning is logged.
    """

    model_config = {"extra": "forbid", "frozen": True}

    struct_order: Literal["document", "sorted"] = "document"
    stringify_keys: bool = True


def load_loader_config(raw: dict[str, Any] | None = None) -> LoaderConfig:
    """Validate a raw settings mapping into a LoaderConfig.

    Args:
        raw: Mapping of option names to values, or None for defaults.

    Returns:
        Validated LoaderConfig instance.
    """
    if raw is None:
        return LoaderConfig()
    return LoaderConfig.model_validate(raw)
