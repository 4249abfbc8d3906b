"""JSON:API response envelope.

Every non-telemetry response is a JSON:API document::

    {"data": {...} | [...], "included": [...], "links": {...}, "meta": {...}}

:func:`parse_document` validates the top-level shape and exposes the
members as a :class:`Document`; the members themselves are decoded
later by :mod:`battlerite.decoding`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import orjson

from battlerite.decoding.fields import FieldReader, expect_array
from battlerite.exceptions import DecodeError


@dataclass(frozen=True, slots=True)
class Document:
    """A parsed JSON:API top-level document.

    Attributes:
        data: Primary data; a resource object or an array of them, or
            ``None`` for error documents.
        included: Side-table of related resource objects (empty when
            the service sent none).
        errors: Error objects reported by the service.
        links: Top-level links object.
        meta: Top-level meta object.
    """

    data: Any
    included: tuple[Any, ...] = ()
    errors: tuple[Any, ...] = ()
    links: dict[str, Any] | None = None
    meta: dict[str, Any] | None = None

    @property
    def is_collection(self) -> bool:
        """Return True if the primary data is an array of resources."""
        return isinstance(self.data, list)

    def error_summary(self) -> str:
        """Return the service's error titles/details joined into one line."""
        parts: list[str] = []
        for error in self.errors:
            if isinstance(error, dict):
                text = error.get("detail") or error.get("title") or error.get("status")
                parts.append(str(text))
            else:
                parts.append(str(error))
        return "; ".join(parts)


def parse_document(payload: bytes | str) -> Document:
    """Parse a JSON:API response body.

    Args:
        payload: Raw response body.

    Returns:
        The parsed :class:`Document`.

    Raises:
        DecodeError: If *payload* is not valid JSON.
        FieldTypeError: If the top level is not an object, or
            ``included``/``errors`` is present but not an array.
    """
    try:
        raw = orjson.loads(payload)
    except orjson.JSONDecodeError as exc:
        msg = f"response is not valid JSON: {exc}"
        raise DecodeError(msg) from exc

    top = FieldReader.wrap(raw)
    included = expect_array(top.raw("included"), "included") if top.has("included") else []
    errors = expect_array(top.raw("errors"), "errors") if top.has("errors") else []
    links = top.obj("links").to_dict() if top.has("links") else None
    meta = top.obj("meta").to_dict() if top.has("meta") else None
    return Document(
        data=top.raw("data"),
        included=tuple(included),
        errors=tuple(errors),
        links=links,
        meta=meta,
    )
