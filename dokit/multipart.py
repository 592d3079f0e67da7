"""Write a multipart/form-data body holding one file."""

from __future__ import annotations

import secrets
from typing import BinaryIO

__all__ = ["multipart_body"]


def _escape_quotes(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _part(boundary: str, first: bool, headers: list[tuple[str, str]]) -> bytes:
    lead = f"--{boundary}\r\n" if first else f"\r\n--{boundary}\r\n"
    lines = "".join(f"{key}: {value}\r\n" for key, value in sorted(headers))
    return (lead + lines + "\r\n").encode("utf-8")


def multipart_body(body: BinaryIO, fieldname: str, filename: str, data: bytes) -> str:
    """Write a form body to ``body`` and return its content type.

    The body holds a field ``fieldname`` whose value is ``filename``, then a
    file part under the same field name carrying ``data``.
    """
    boundary = secrets.token_hex(30)
    name = _escape_quotes(fieldname)
    body.write(
        _part(boundary, True, [("Content-Disposition", f'form-data; name="{name}"')])
    )
    body.write(filename.encode("utf-8"))
    body.write(
        _part(
            boundary,
            False,
            [
                (
                    "Content-Disposition",
                    f'form-data; name="{name}"; filename="{_escape_quotes(filename)}"',
                ),
                ("Content-Type", "application/octet-stream"),
            ],
        )
    )
    body.write(bytes(data))
    body.write(f"\r\n--{boundary}--\r\n".encode("utf-8"))
    return f"multipart/form-data; boundary={boundary}"