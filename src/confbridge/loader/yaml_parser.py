"""YAML parsing and serialization for the configuration document tree.

Parses YAML into plain Python data (None, bool, int, float, str, bytes,
list, dict) and serializes such data back to YAML. Timestamps are not
resolved implicitly, so unquoted dates stay strings, and mapping keys
are normalized to strings so every struct label is text.
"""

from __future__ import annotations

import logging
from typing import Any

import yaml

from confbridge.errors import ParseError

logger = logging.getLogger(__name__)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader that leaves implicit timestamps as plain strings."""


# Resolvers are stored per class; copy them so SafeLoader is left untouched.
DocumentLoader.yaml_implicit_resolvers = {
    first_char: [
        (tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG
    ]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _key_to_str(key: Any) -> str:
    """Render a mapping key the way it would read in YAML."""
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def normalize_keys(data: Any, _seen: dict[int, Any] | None = None) -> Any:
    """Return a copy of data with every mapping key converted to str.

    Aliased subtrees stay shared in the copy, so anchors that refer
    back to themselves do not recurse forever. Distinct keys that render
    the same (`1` and `'1'`) collapse into one entry; the later one wins
    and a warning is logged.
    """
    if not isinstance(data, (dict, list)):
        return data
    if _seen is None:
        _seen = {}
    if id(data) in _seen:
        return _seen[id(data)]

    if isinstance(data, dict):
        result: dict[str, Any] = {}
        _seen[id(data)] = result
        for key, item in data.items():
            text = _key_to_str(key)
            if text in result:
                logger.warning("mapping key %r collides with an earlier key %r", key, text)
            result[text] = normalize_keys(item, _seen)
        return result

    items: list[Any] = []
    _seen[id(data)] = items
    items.extend(normalize_keys(item, _seen) for item in data)
    return items


def parse_yaml(
    content: bytes | str,
    path: str = "<bytes>",
    stringify_keys: bool = True,
) -> Any:
    """Parse the first YAML document in content into plain Python data.

    Documents after the first are ignored.

    Args:
        content: YAML source as bytes (any encoding PyYAML detects) or text.
        path: Path used to annotate errors.
        stringify_keys: Convert non-string mapping keys to strings.

    Returns:
        The parsed document, or None for empty or comment-only input.

    Raises:
        ParseError: If the first document is malformed.
    """
    try:
        loader = DocumentLoader(content)
        try:
            data = loader.get_data() if loader.check_data() else None
        finally:
            loader.dispose()
    except yaml.YAMLError as e:
        line = None
        column = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = mark.line + 1
            column = mark.column + 1
        logger.debug("failed to parse %s: %s", path, e)
        raise ParseError(
            message=str(e),
            path=path,
            line=line,
            column=column,
        ) from e

    if stringify_keys:
        return normalize_keys(data)
    return data


def dump_yaml(data: Any) -> bytes:
    """Serialize plain Python data to UTF-8 encoded YAML.

    Mapping keys keep their document order.

    Raises:
        yaml.YAMLError: If data holds objects YAML cannot represent.
    """
    text = yaml.dump(
        data,
        Dumper=yaml.SafeDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return text.encode("utf-8")
