"""Escape the string fields of dataclass instances in place."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable

__all__ = ["escape_struct", "xml_escaper", "html_escaper"]

Escaper = Callable[[Any], Any]

_XML_ENTITIES = {
    '"': "&#34;",
    "'": "&#39;",
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
}

_HTML_ENTITIES = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    "'": "&#39;",
    '"': "&#34;",
}


def _is_instance(obj: Any) -> bool:
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def escape_struct(obj: Any, escaper: Escaper) -> None:
    """Replace every field of the dataclass instance ``obj`` with its escaped value.

    Nested dataclass instances, and dataclass instances inside list or tuple
    fields, are escaped recursively. A field is replaced only when the
    escaper returns something other than ``None``.
    """
    if not _is_instance(obj):
        raise TypeError(f"{obj!r} is not a dataclass instance")
    _escape_fields(obj, escaper)


def _escape_fields(obj: Any, escaper: Escaper) -> None:
    for spec in dataclasses.fields(obj):
        value = getattr(obj, spec.name)
        if _is_instance(value):
            _escape_fields(value, escaper)
            continue
        if isinstance(value, (list, tuple)):
            for element in value:
                if not _is_instance(element):
                    raise TypeError(
                        f"element {element!r} of field {spec.name} is not a dataclass instance"
                    )
                _escape_fields(element, escaper)
            continue
        try:
            escaped = escaper(value)
        except Exception as exc:
            raise ValueError(f"escape {value!r}({spec.name}) failed") from exc
        if escaped is not None:
            setattr(obj, spec.name, escaped)


def _valid_xml_char(char: str) -> bool:
    code = ord(char)
    return (
        code in (0x09, 0x0A, 0x0D)
        or 0x20 <= code <= 0xD7FF
        or 0xE000 <= code <= 0xFFFD
        or 0x10000 <= code <= 0x10FFFF
    )


def _xml_escape(text: str) -> str:
    return "".join(
        _XML_ENTITIES.get(char) or (char if _valid_xml_char(char) else "\ufffd")
        for char in text
    )


def _html_escape(text: str) -> str:
    return "".join(_HTML_ENTITIES.get(char, char) for char in text)


def xml_escaper(field: Any) -> Any:
    """Escape a ``str`` or ``bytes`` value for XML text; ``None`` for anything else."""
    if isinstance(field, str):
        return _xml_escape(field)
    if isinstance(field, (bytes, bytearray)):
        return _xml_escape(bytes(field).decode("utf-8", errors="replace")).encode("utf-8")
    return None


def html_escaper(field: Any) -> Any:
    """Escape a ``str`` or ``bytes`` value for HTML; ``None`` for anything else."""
    if isinstance(field, str):
        return _html_escape(field)
    if isinstance(field, (bytes, bytearray)):
        return _html_escape(bytes(field).decode("utf-8", errors="replace")).encode("utf-8")
    return None