"""Checked field access over decoded JSON objects.

:class:`FieldReader` wraps one JSON object and knows where it sits in
the surrounding payload. Each accessor either returns a value of the
requested shape or raises a :class:`~battlerite.exceptions.DecodeError`
subclass whose ``path`` names the offending field, so a malformed
payload fails with an inspectable error instead of an arbitrary
``KeyError`` or ``TypeError`` deep inside a decoder.

Numeric coercion follows the service's conventions: every wire number
is a JSON number (often a float such as ``3.0``) while the fields are
semantically integers, so integer accessors truncate with ``int()``.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from battlerite.exceptions import FieldTypeError, MissingFieldError
from battlerite.schemas.entities import ResourceRef

if TYPE_CHECKING:
    from collections.abc import Mapping

_TRUE_STRINGS: frozenset[str] = frozenset({"1", "t", "T", "true", "TRUE", "True"})
_FALSE_STRINGS: frozenset[str] = frozenset({"0", "f", "F", "false", "FALSE", "False"})


def _describe(value: object) -> str:
    """Return a short JSON-flavoured name for the type of *value*."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class FieldReader:
    """Typed, path-aware accessor for a single JSON object.

    Required accessors treat an absent key and an explicit ``null`` the
    same way and raise :class:`MissingFieldError`. A value of the wrong
    JSON type raises :class:`FieldTypeError`.

    Attributes:
        _data: The wrapped JSON object.
        _path: Location of the object inside the payload.
        _index: Event index carried into raised errors, if any.
    """

    __slots__ = ("_data", "_index", "_path")

    def __init__(
        self,
        data: Mapping[str, Any],
        path: str = "",
        index: int | None = None,
    ) -> None:
        self._data = data
        self._path = path
        self._index = index

    @classmethod
    def wrap(
        cls,
        value: object,
        path: str = "",
        index: int | None = None,
    ) -> FieldReader:
        """Wrap *value* after checking that it is a JSON object.

        Args:
            value: Candidate JSON object.
            path: Location of *value* inside the payload.
            index: Event index to attach to raised errors.

        Returns:
            A reader over *value*.

        Raises:
            FieldTypeError: If *value* is not a JSON object.
        """
        if not isinstance(value, dict):
            raise _type_error(path, "object", value, index)
        return cls(value, path, index)

    @property
    def path(self) -> str:
        """Location of the wrapped object inside the payload."""
        return self._path

    @property
    def index(self) -> int | None:
        """Event index attached to errors raised by this reader."""
        return self._index

    def has(self, key: str) -> bool:
        """Return True if *key* is present with a non-null value."""
        return self._data.get(key) is not None

    def raw(self, key: str, default: Any = None) -> Any:
        """Return the value under *key* without any shape check."""
        return self._data.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the wrapped object."""
        return dict(self._data)

    # ------------------------------------------------------------------
    # Required scalars
    # ------------------------------------------------------------------

    def string(self, key: str) -> str:
        """Return the string under *key*."""
        value = self._require(key)
        if not isinstance(value, str):
            raise _type_error(self._child(key), "string", value, self._index)
        return value

    def integer(self, key: str) -> int:
        """Return the number under *key* truncated to an ``int``."""
        value = self._require(key)
        if not _is_number(value) or not math.isfinite(value):
            raise _type_error(self._child(key), "number", value, self._index)
        return int(value)

    def number(self, key: str) -> float:
        """Return the number under *key* as a ``float``."""
        value = self._require(key)
        if not _is_number(value):
            raise _type_error(self._child(key), "number", value, self._index)
        return float(value)

    def boolean(self, key: str) -> bool:
        """Return the JSON boolean under *key*."""
        value = self._require(key)
        if not isinstance(value, bool):
            raise _type_error(self._child(key), "boolean", value, self._index)
        return value

    def flag(self, key: str) -> bool:
        """Return a boolean that the service may send as a string.

        Accepts a JSON boolean or one of the usual textual spellings
        (``"true"``, ``"False"``, ``"1"``, ``"f"`` ...).
        """
        value = self._require(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            if value in _TRUE_STRINGS:
                return True
            if value in _FALSE_STRINGS:
                return False
        raise _type_error(self._child(key), "boolean string", value, self._index)

    def int_string(self, key: str) -> int:
        """Return an integer that the service may send as a decimal string."""
        value = self._require(key)
        if _is_number(value) and math.isfinite(value):
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise _type_error(self._child(key), "integer string", value, self._index)

    # ------------------------------------------------------------------
    # Optional scalars
    # ------------------------------------------------------------------

    def optional_int(self, key: str, default: int = 0) -> int:
        """Return the integer under *key*, or *default* when null or absent."""
        if self._data.get(key) is None:
            return default
        return self.integer(key)

    def optional_string(self, key: str, default: str = "") -> str:
        """Return the string under *key*, or *default* when null or absent."""
        if self._data.get(key) is None:
            return default
        return self.string(key)

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def obj(self, key: str) -> FieldReader:
        """Return a reader over the nested object under *key*."""
        value = self._require(key)
        return FieldReader.wrap(value, self._child(key), self._index)

    def array(self, key: str) -> list[Any]:
        """Return the JSON array under *key*."""
        value = self._require(key)
        if not isinstance(value, list):
            raise _type_error(self._child(key), "array", value, self._index)
        return value

    def objects(self, key: str) -> list[FieldReader]:
        """Return readers over every object in the array under *key*."""
        base = self._child(key)
        return [
            FieldReader.wrap(item, f"{base}[{i}]", self._index)
            for i, item in enumerate(self.array(key))
        ]

    def integers(self, key: str) -> tuple[int, ...]:
        """Return the array of numbers under *key* as integers."""
        base = self._child(key)
        result: list[int] = []
        for i, item in enumerate(self.array(key)):
            if not _is_number(item) or not math.isfinite(item):
                raise _type_error(f"{base}[{i}]", "number", item, self._index)
            result.append(int(item))
        return tuple(result)

    # ------------------------------------------------------------------
    # JSON:API relationships
    # ------------------------------------------------------------------

    def ref(self, key: str) -> ResourceRef | None:
        """Return the to-one relationship linkage under *key*.

        *key* must hold a relationship object; its ``data`` member may be
        ``null`` (or omitted), in which case ``None`` is returned.
        """
        rel = self.obj(key)
        if not rel.has("data"):
            return None
        return _to_ref(rel.obj("data"))

    def refs(self, key: str) -> tuple[ResourceRef, ...]:
        """Return the to-many relationship linkage under *key*.

        *key* must hold a relationship object; a ``null`` or omitted
        ``data`` member yields an empty tuple.
        """
        rel = self.obj(key)
        if not rel.has("data"):
            return ()
        return tuple(_to_ref(item) for item in rel.objects("data"))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _child(self, key: str) -> str:
        return f"{self._path}.{key}" if self._path else key

    def _require(self, key: str) -> Any:
        value = self._data.get(key)
        if value is None:
            path = self._child(key)
            raise MissingFieldError(
                _message(f"missing required field {path!r}", self._index),
                path=path,
                index=self._index,
            )
        return value


def _to_ref(reader: FieldReader) -> ResourceRef:
    """Build a :class:`ResourceRef` from a resource identifier object."""
    return ResourceRef(type=reader.string("type"), id=reader.string("id"))


def _message(text: str, index: int | None) -> str:
    if index is None:
        return text
    return f"event {index}: {text}"


def _type_error(
    path: str,
    expected: str,
    value: object,
    index: int | None,
) -> FieldTypeError:
    where = repr(path) if path else "payload"
    got = _describe(value)
    if isinstance(value, (str, int, float)):
        got = f"{got} {value!r}"
    text = f"expected {expected} at {where}, got {got}"
    return FieldTypeError(_message(text, index), path=path, index=index)


def expect_array(value: object, path: str = "", index: int | None = None) -> list[Any]:
    """Return *value* if it is a JSON array.

    Raises:
        FieldTypeError: If *value* is not an array.
    """
    if not isinstance(value, list):
        raise _type_error(path, "array", value, index)
    return value
