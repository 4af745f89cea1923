"""Value and iterator implementations over a parsed YAML document.

A YAMLValue wraps one node of the tree produced by parse_yaml() and
exposes it through the format-independent Value contract. Nodes are
never mutated after parsing, so values and iterators can alias the
same tree freely.
"""

from __future__ import annotations

import dataclasses
import logging
import typing
from collections.abc import Sequence
from typing import Any

import yaml
from pydantic import BaseModel, PydanticUserError, TypeAdapter, ValidationError

from confbridge import coercion
from confbridge.adapters.base import (
    ConfigDecoder,
    Context,
    ContextDecoder,
    Decoder,
    Iterator,
    Kind,
    Value,
)
from confbridge.errors import CoercionError, ConfigError, DecodeError, DecodeErrorDetail
from confbridge.loader.yaml_parser import dump_yaml, parse_yaml
from confbridge.models.config import LoaderConfig

logger = logging.getLogger(__name__)

UNSUPPORTED_REF = "unsupported operation"
PLACEHOLDER_FILE = "/tmp"
WILDCARD = "*"

_DEFAULT_CONFIG = LoaderConfig()


class ListIterator(Iterator):
    """Cursor over a snapshot of a sequence node's children."""

    def __init__(self, items: Sequence[Any], config: LoaderConfig) -> None:
        self._offset = -1
        self._items = list(items)
        self._config = config

    def next(self) -> bool:
        if self._offset >= len(self._items) - 1:
            return False
        self._offset += 1
        return True

    def _current(self) -> int:
        if self._offset < 0:
            raise IndexError("iterator is not positioned; call next() first")
        return self._offset

    def value(self) -> YAMLValue:
        return YAMLValue(self._items[self._current()], self._config)

    def label(self) -> str:
        return str(self._current())


class StructIterator(Iterator):
    """Cursor over a snapshot of a mapping node's keys and children."""

    def __init__(self, data: dict[Any, Any], config: LoaderConfig) -> None:
        self._offset = -1
        self._data = dict(data)
        self._keys = list(self._data)
        if config.struct_order == "sorted":
            self._keys.sort(key=str)
        self._config = config

    def next(self) -> bool:
        if self._offset >= len(self._keys) - 1:
            return False
        self._offset += 1
        return True

    def _current_key(self) -> Any:
        if self._offset < 0:
            raise IndexError("iterator is not positioned; call next() first")
        return self._keys[self._offset]

    def value(self) -> YAMLValue:
        return YAMLValue(self._data[self._current_key()], self._config)

    def label(self) -> str:
        return str(self._current_key())


def _as_index(segment: str | int) -> int | None:
    """Interpret a path segment as a non-negative list index."""
    if isinstance(segment, bool):
        return None
    if isinstance(segment, int):
        return segment if segment >= 0 else None
    if isinstance(segment, str) and segment.isascii() and segment.isdigit():
        return int(segment)
    return None


def _search(data: Any, path: Sequence[str | int]) -> tuple[bool, Any]:
    """Follow path through data. Returns (found, node)."""
    if not path:
        return True, data
    segment, rest = path[0], path[1:]

    if isinstance(data, dict):
        if segment in data:
            return _search(data[segment], rest)
        if not isinstance(segment, str) and str(segment) in data:
            return _search(data[str(segment)], rest)
        return False, None

    if isinstance(data, (list, tuple)):
        if segment == WILDCARD:
            matches = []
            for item in data:
                found, node = _search(item, rest)
                if found:
                    matches.append(node)
            if not matches:
                return False, None
            return True, matches
        index = _as_index(segment)
        if index is None or index >= len(data):
            return False, None
        return _search(data[index], rest)

    return False, None


def _is_type_target(target: Any) -> bool:
    """True for classes and type expressions such as list[int] or int | None."""
    return isinstance(target, type) or typing.get_origin(target) is not None


def _validation_details(error: ValidationError) -> list[DecodeErrorDetail]:
    """Convert a pydantic ValidationError into per-field details."""
    details = []
    for err in error.errors():
        loc = err.get("loc", ())
        details.append(
            DecodeErrorDetail(
                field=".".join(str(part) for part in loc),
                message=err.get("msg", "Validation error"),
                type=err.get("type", "unknown"),
                input_value=err.get("input"),
            )
        )
    return details


class YAMLValue(Value):
    """Read-only view over one node of a parsed YAML document.

    Args:
        data: The node's data (None, bool, int, float, str, bytes, list, dict).
        config: Loader options inherited by values derived from this one.
    """

    def __init__(self, data: Any, config: LoaderConfig | None = None) -> None:
        self._data = data
        self._config = config or _DEFAULT_CONFIG

    def __repr__(self) -> str:
        return f"YAMLValue({self._data!r})"

    # --- navigation ---

    def lookup(self, *path: str | int) -> YAMLValue | None:
        """Descend by keys (mappings) or indices (sequences).

        The segment '*' on a sequence applies the rest of the path to every
        element and yields a list of the elements where it was found.

        Returns:
            The Value at path, or None if any segment is absent.
        """
        found, node = _search(self._data, path)
        if not found:
            return None
        return YAMLValue(node, self._config)

    def list(self) -> ListIterator:
        if not isinstance(self._data, (list, tuple)):
            raise CoercionError(
                "list", self._data, f"unsupported iterator type `{type(self._data).__name__}`"
            )
        return ListIterator(self._data, self._config)

    def struct(self) -> StructIterator:
        if not isinstance(self._data, dict):
            raise CoercionError(
                "struct", self._data, f"unsupported iterator type `{type(self._data).__name__}`"
            )
        return StructIterator(self._data, self._config)

    # --- scalar extraction ---

    def string(self) -> str:
        return coercion.to_string(self._data)

    def string_list(self) -> list[str]:
        return coercion.to_string_list(self._data)

    def bytes(self) -> bytes:
        return coercion.to_bytes(self._data)

    def bool(self) -> bool:
        return coercion.to_bool(self._data)

    def float64(self) -> float:
        return coercion.to_float64(self._data)

    def int64(self) -> int:
        return coercion.to_int64(self._data)

    def uint64(self) -> int:
        return coercion.to_uint64(self._data)

    def interface(self) -> Any:
        return self._data

    def kind(self) -> Kind:
        """Classify the node by the Python type of its data."""
        data = self._data
        if data is None:
            return Kind.NULL
        if isinstance(data, bool):
            return Kind.BOOL
        if isinstance(data, int):
            # Integers beyond 64 bits only convert as decimals
            if coercion.fits_int64_or_uint64(data):
                return Kind.NUMBER
            return Kind.DECIMAL
        if isinstance(data, (float, complex)):
            return Kind.DECIMAL
        if isinstance(data, str):
            return Kind.STRING
        if isinstance(data, dict):
            return Kind.STRUCT
        if isinstance(data, (bytes, bytearray)):
            return Kind.BYTES
        if isinstance(data, (list, tuple)):
            return Kind.LIST
        return Kind.UNDEFINED

    # --- position ---

    def ref(self) -> str:
        return UNSUPPORTED_REF

    def file(self) -> str:
        return PLACEHOLDER_FILE

    # --- serialization ---

    def marshal(self) -> bytes:
        """Serialize this node back to YAML.

        Raises:
            ConfigError: If the node holds data YAML cannot represent.
        """
        try:
            return dump_yaml(self._data)
        except yaml.YAMLError as e:
            raise ConfigError(f"cannot marshal {type(self._data).__name__}: {e}") from e

    # --- decoding ---

    def decode(self, target: Any) -> Any:
        """Decode this node into target.

        See decode_with_ctx() for the dispatch rules; context-aware decoders
        receive the background context.
        """
        return self.decode_with_ctx(None, target)

    def decode_with_ctx(self, ctx: Context | None, target: Any) -> Any:
        """Decode this node into target.

        Classes and type expressions always decode structurally (step 4).
        For instances, dispatch is, in order:
            1. target.decode(value) if target is a Decoder.
            2. target.decode_ctx(ctx, value) if target is a ContextDecoder.
            3. target.decode_config(ctx, value) if target is a ConfigDecoder.
            4. Structural decoding with pydantic: a class or type expression
               yields a new validated instance; pydantic model, dataclass,
               dict and list instances are updated in place.

        Args:
            ctx: Caller context, or None when the caller has none. None is
                replaced by the background context.
            target: Object or type to decode into.

        Returns:
            The decoded object: target itself, or a new instance when
            target is a type.

        Raises:
            DecodeError: If any branch fails.
        """
        if ctx is None:
            ctx = Context.background()

        if _is_type_target(target):
            return self._decode_type(target)

        if isinstance(target, Decoder):
            logger.debug("decoding into %s via decode()", type(target).__name__)
            self._call_decoder(target.decode, self)
        elif isinstance(target, ContextDecoder):
            logger.debug("decoding into %s via decode_ctx()", type(target).__name__)
            self._call_decoder(target.decode_ctx, ctx, self)
        elif isinstance(target, ConfigDecoder):
            logger.debug("decoding into %s via decode_config()", type(target).__name__)
            self._call_decoder(target.decode_config, ctx, self)
        else:
            self._decode_in_place(target)
        return target

    def _call_decoder(self, method: Any, *args: Any) -> None:
        try:
            method(*args)
        except Exception as e:
            raise DecodeError(str(e), self.ref()) from e

    def _structural_data(self) -> Any:
        """Round-trip the node through YAML to get plain decodable data."""
        try:
            raw = self.marshal()
            return parse_yaml(raw, stringify_keys=self._config.stringify_keys)
        except ConfigError as e:
            raise DecodeError(str(e), self.ref()) from e

    def _decode_type(self, target: Any) -> Any:
        logger.debug("decoding into %r structurally", target)
        data = self._structural_data()
        try:
            return TypeAdapter(target).validate_python(data)
        except ValidationError as e:
            raise DecodeError(str(e), self.ref(), _validation_details(e)) from e
        except PydanticUserError as e:
            raise DecodeError(str(e), self.ref()) from e

    def _decode_in_place(self, target: Any) -> None:
        logger.debug("decoding into %s instance structurally", type(target).__name__)
        data = self._structural_data()

        if isinstance(target, dict):
            if not isinstance(data, dict):
                raise DecodeError(f"cannot decode {type(data).__name__} into dict", self.ref())
            target.update(data)
            return
        if isinstance(target, list):
            if not isinstance(data, list):
                raise DecodeError(f"cannot decode {type(data).__name__} into list", self.ref())
            target[:] = data
            return

        if isinstance(target, BaseModel):
            current = target.model_dump(by_alias=True)
            names = list(type(target).model_fields)
        elif dataclasses.is_dataclass(target):
            names = [f.name for f in dataclasses.fields(target)]
            current = {name: getattr(target, name) for name in names}
        else:
            raise DecodeError(
                f"unsupported decode target `{type(target).__name__}`", self.ref()
            )

        # Keys absent from the document keep the target's current values
        merged = {**current, **data} if isinstance(data, dict) else data
        try:
            decoded = TypeAdapter(type(target)).validate_python(merged)
        except ValidationError as e:
            raise DecodeError(str(e), self.ref(), _validation_details(e)) from e
        try:
            for name in names:
                setattr(target, name, getattr(decoded, name))
        except (ValidationError, dataclasses.FrozenInstanceError) as e:
            raise DecodeError(str(e), self.ref()) from e


def new_value(data: Any, config: LoaderConfig | None = None) -> YAMLValue:
    """Wrap already-parsed document data in a YAMLValue."""
    return YAMLValue(data, config)


def parse(
    content: bytes | str,
    config: LoaderConfig | None = None,
    path: str = "<bytes>",
) -> YAMLValue:
    """Parse YAML content and return the root YAMLValue.

    Args:
        content: YAML source.
        config: Parsing and iteration options.
        path: Path used to annotate parse errors.

    Raises:
        ParseError: If the content is not valid YAML.
    """
    config = config or _DEFAULT_CONFIG
    data = parse_yaml(content, path=path, stringify_keys=config.stringify_keys)
    return YAMLValue(data, config)
