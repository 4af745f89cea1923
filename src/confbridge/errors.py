"""Exception hierarchy shared by every confbridge format adapter.

All errors derive from ConfigError so hosts can catch a single type.
Lookup misses are not errors: Value.lookup() returns None instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class ConfigError(Exception):
    """Base class for all confbridge errors."""


class PathNotFoundError(ConfigError):
    """Raised when a path is absent from the file set handed to a loader.

    Attributes:
        path: The path that was requested.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"path not found (path: {path})")


class ParseError(ConfigError):
    """Raised when file content cannot be parsed.

    Attributes:
        message: Description of the syntax error from the parser.
        path: Path of the file being parsed, or '<bytes>'.
        line: 1-indexed line number where the error occurred.
        column: 1-indexed column number where the error occurred.
    """

    def __init__(
        self,
        message: str,
        path: str = "<bytes>",
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.message = message
        self.path = path
        self.line = line
        self.column = column
        super().__init__(f"{message} (path: {path})")


class CoercionError(ConfigError):
    """Raised when a node's data cannot be converted to the requested type.

    Attributes:
        target: Name of the requested type (e.g. 'int64', 'list').
        value: The data that failed to convert.
    """

    def __init__(self, target: str, value: Any, reason: str | None = None) -> None:
        self.target = target
        self.value = value
        message = f"cannot convert {type(value).__name__} to {target}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


@dataclass
class DecodeErrorDetail:
    """A single structural decoding failure.

    Attributes:
        field: Dotted path of the offending field, '' for the root.
        message: Human-readable error description.
        type: Pydantic error type string (e.g. 'missing', 'int_parsing').
        input_value: The invalid input value, if available.
    """

    field: str
    message: str
    type: str
    input_value: Any = field(default=None)


class DecodeError(ConfigError):
    """Raised when a node cannot be decoded into a target.

    Attributes:
        message: Description of the underlying failure.
        ref: Position reference of the node being decoded.
        details: Per-field failures for structural decoding, else empty.
    """

    def __init__(
        self,
        message: str,
        ref: str,
        details: list[DecodeErrorDetail] | None = None,
    ) -> None:
        self.message = message
        self.ref = ref
        self.details = details or []
        super().__init__(f"{message}: (position: {ref})")
