"""Format-independent configuration value contract.

Every format adapter (YAML, and any other format a host registers)
implements the Loader, Value and Iterator ABCs defined here, so the host
can navigate and decode configuration without knowing its source format.

The decoding capability protocols let user types take over their own
decoding. They are checked in a fixed order by Value.decode():
Decoder, then ContextDecoder, then ConfigDecoder.
"""

from __future__ import annotations

import enum
import re
from abc import ABC, abstractmethod
from collections.abc import Generator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable


class Kind(enum.Enum):
    """Classification of the data held by a Value."""

    UNDEFINED = "undefined"
    NULL = "null"
    STRING = "string"
    BOOL = "bool"
    NUMBER = "number"
    DECIMAL = "decimal"
    STRUCT = "struct"
    LIST = "list"
    BYTES = "bytes"


@dataclass(frozen=True, eq=False)
class Context:
    """Immutable carrier for caller-scoped values passed to decoders.

    Contexts are derived with with_value(); the original is never changed.
    """

    values: Mapping[Any, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @classmethod
    def background(cls) -> Context:
        """Return the empty root context."""
        return _BACKGROUND

    def with_value(self, key: Any, value: Any) -> Context:
        """Return a child context with key set to value."""
        return Context({**self.values, key: value})

    def value(self, key: Any, default: Any = None) -> Any:
        """Return the value stored under key, or default."""
        return self.values.get(key, default)


_BACKGROUND = Context()


@runtime_checkable
class Decoder(Protocol):
    """A target that decodes itself from a Value."""

    def decode(self, value: Value) -> None: ...


@runtime_checkable
class ContextDecoder(Protocol):
    """A target that decodes itself from a Value with a caller context."""

    def decode_ctx(self, ctx: Context, value: Value) -> None: ...


@runtime_checkable
class ConfigDecoder(Protocol):
    """A target that decodes itself as configuration with a caller context."""

    def decode_config(self, ctx: Context, value: Value) -> None: ...


class Iterator(ABC):
    """Positioned cursor over the children of a list or struct Value.

    The cursor starts before the first element; next() must return True
    before value() or label() may be called.
    """

    @abstractmethod
    def next(self) -> bool:
        """Advance to the next element. Returns False once exhausted."""
        ...

    @abstractmethod
    def value(self) -> Value:
        """Return the element at the current position."""
        ...

    @abstractmethod
    def label(self) -> str:
        """Return the index (lists) or key (structs) of the current element."""
        ...

    def __iter__(self) -> Generator[tuple[str, Value], None, None]:
        while self.next():
            yield self.label(), self.value()


class Value(ABC):
    """Read-only view over one node of a parsed configuration document."""

    @abstractmethod
    def lookup(self, *path: str | int) -> Value | None:
        """Descend by keys or indices. Returns None if any segment is absent."""
        ...

    @abstractmethod
    def list(self) -> Iterator:
        """Return an iterator over a list node."""
        ...

    @abstractmethod
    def struct(self) -> Iterator:
        """Return an iterator over a struct node."""
        ...

    @abstractmethod
    def decode(self, target: Any) -> Any:
        """Decode this node into target and return the decoded object."""
        ...

    @abstractmethod
    def decode_with_ctx(self, ctx: Context | None, target: Any) -> Any:
        """Decode this node into target, passing ctx to context-aware decoders."""
        ...

    @abstractmethod
    def string(self) -> str: ...

    @abstractmethod
    def string_list(self) -> list[str]: ...

    @abstractmethod
    def bytes(self) -> bytes: ...

    @abstractmethod
    def bool(self) -> bool: ...

    @abstractmethod
    def float64(self) -> float: ...

    @abstractmethod
    def int64(self) -> int: ...

    @abstractmethod
    def uint64(self) -> int: ...

    @abstractmethod
    def interface(self) -> Any:
        """Return the raw node data."""
        ...

    @abstractmethod
    def kind(self) -> Kind: ...

    @abstractmethod
    def ref(self) -> str:
        """Return a human-readable source position for error messages."""
        ...

    @abstractmethod
    def file(self) -> str:
        """Return the path of the file this node came from."""
        ...

    @abstractmethod
    def marshal(self) -> bytes:
        """Serialize this node back to its source format."""
        ...


class Loader(ABC):
    """Turns file content of one format into a root Value."""

    @abstractmethod
    def type(self) -> str:
        """Return the short name the host registry knows this loader by."""
        ...

    @abstractmethod
    def path_pattern(self) -> re.Pattern[str]:
        """Return the pattern candidate paths must fully match."""
        ...

    @abstractmethod
    def allow_dir(self) -> bool:
        """Return True if this loader can load whole directories."""
        ...

    @abstractmethod
    def load(self, path: str, files: Mapping[str, bytes | str]) -> Value:
        """Load path from files and return the root Value.

        Raises:
            PathNotFoundError: If path is not in files.
            ParseError: If the content cannot be parsed.
        """
        ...

    def clear(self) -> None:
        """Release any cached state. The default holds none."""
        return None
