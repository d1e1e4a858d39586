"""XML, JSON and byte-order helpers shared by the API modules."""

from __future__ import annotations

import base64
import dataclasses
import json
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from enum import Enum
from typing import Any

_XML_ESCAPES = {
    '"': "&#34;",
    "'": "&#39;",
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
}

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
}

_LINE_SEPARATORS = {
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _is_xml_char(char: str) -> bool:
    code = ord(char)
    return (
        code in (0x9, 0xA, 0xD)
        or 0x20 <= code <= 0xD7FF
        or 0xE000 <= code <= 0xFFFD
        or 0x10000 <= code <= 0x10FFFF
    )


def _escape_xml_text(text: str) -> str:
    return "".join(
        _XML_ESCAPES.get(char, char) if _is_xml_char(char) else "\ufffd"
        for char in text
    )


def format_map_to_xml(mapping: Mapping[str, str]) -> str:
    """Render a flat mapping as an ``<xml>`` document with escaped values."""
    parts = ["<xml>"]
    parts.extend(
        f"<{key}>{_escape_xml_text(str(value))}</{key}>" for key, value in mapping.items()
    )
    parts.append("</xml>")
    return "".join(parts)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_xml_to_map(data: bytes | str) -> dict[str, str]:
    """Collect the text of the root's leaf children; children with children are skipped."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    if not data.strip():
        return {}
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise ValueError(f"invalid xml: {exc}") from exc

    result: dict[str, str] = {}
    for child in root:
        if len(child):
            continue
        result[_local_name(child.tag)] = child.text or ""
    return result


def encode_uint32(value: int) -> bytes:
    """Encode an unsigned 32-bit integer in network byte order."""
    if not 0 <= value <= 0xFFFFFFFF:
        raise ValueError(f"value out of uint32 range: {value}")
    return value.to_bytes(4, "big")


def decode_uint32(data: bytes) -> int:
    """Decode four bytes in network byte order; any other length gives 0."""
    if len(data) != 4:
        return 0
    return int.from_bytes(data, "big")


def _jsonable(value: Any, sort_maps: bool = True) -> Any:
    if isinstance(value, Enum):
        value = value.value
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")

    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict) and not isinstance(value, type):
        return _jsonable(to_dict(), sort_maps=False)

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: _jsonable(getattr(value, f.name), sort_maps)
            for f in dataclasses.fields(value)
        }

    if isinstance(value, Mapping):
        items = value.items()
        if sort_maps:
            items = sorted(items, key=lambda item: str(item[0]))
        return {str(key): _jsonable(item, sort_maps) for key, item in items}

    if isinstance(value, (list, tuple)):
        return [_jsonable(item, sort_maps) for item in value]

    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def _marshal(value: Any, escape_html: bool) -> bytes:
    text = json.dumps(
        _jsonable(value),
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    replacements = dict(_LINE_SEPARATORS)
    if escape_html:
        replacements.update(_HTML_ESCAPES)
    if any(char in text for char in replacements):
        text = "".join(replacements.get(char, char) for char in text)
    return text.encode("utf-8")


def marshal_json(value: Any) -> bytes:
    """Encode compact JSON with HTML-safe escaping.

    Plain mappings are written with sorted keys; objects with a ``to_dict``
    method and dataclasses keep their own field order.
    """
    return _marshal(value, escape_html=True)


def marshal_no_escape_html(value: Any) -> bytes:
    """Encode compact JSON like :func:`marshal_json` but leave ``<``, ``>`` and ``&`` as is."""
    return _marshal(value, escape_html=False)