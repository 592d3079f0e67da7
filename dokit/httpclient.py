"""Send HTTP requests and turn their responses into results."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from datetime import timedelta
from typing import Any, Callable, Mapping

import requests
from requests.adapters import BaseAdapter

__all__ = [
    "HTTPRequestError",
    "code_is_200",
    "raw_extractor",
    "json_extractor",
    "xml_extractor",
    "new_http_client",
    "send_http_request",
]

DEFAULT_TIMEOUT = 10.0

CodeChecker = Callable[[int], None]
ResultExtractor = Callable[[bytes], Any]


class HTTPRequestError(Exception):
    """A request could not be made or its response was rejected."""


def code_is_200(code: int) -> None:
    """Raise :class:`HTTPRequestError` unless ``code`` is 200."""
    if code != 200:
        raise HTTPRequestError(f"bad http code: {code}")


def raw_extractor(data: bytes) -> bytes:
    """Return the response body as plain bytes."""
    return bytes(data)


def json_extractor(data: bytes) -> Any:
    """Decode the response body as JSON."""
    return json.loads(data)


def xml_extractor(data: bytes) -> ET.Element:
    """Parse the response body as XML and return its root element."""
    return ET.fromstring(data)


class _TimeoutSession(requests.Session):
    """A session that applies a default timeout to every request."""

    def __init__(self, timeout: float) -> None:
        super().__init__()
        self.timeout = timeout

    def request(self, method: str, url: str, *args: Any, **kwargs: Any) -> requests.Response:
        kwargs.setdefault("timeout", self.timeout)
        return super().request(method, url, *args, **kwargs)


def new_http_client(
    timeout: float | timedelta | None = None,
    skip_verify: bool = False,
    adapter: BaseAdapter | None = None,
) -> requests.Session:
    """Return a session with a default timeout (10 seconds unless given).

    ``skip_verify`` turns off TLS certificate checks; ``adapter`` is mounted
    for both ``http://`` and ``https://``.
    """
    seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else timeout
    session = _TimeoutSession(seconds or DEFAULT_TIMEOUT)
    if skip_verify:
        session.verify = False
    if adapter is not None:
        session.mount("http://", adapter)
        session.mount("https://", adapter)
    return session


def _flatten_headers(header: Mapping[str, Any] | None) -> dict[str, str]:
    result: dict[str, str] = {}
    for key, value in (header or {}).items():
        if isinstance(value, (list, tuple)):
            if value:
                result[key] = str(value[-1])
        else:
            result[key] = str(value)
    return result


def send_http_request(
    client: requests.Session | None = None,
    method: str = "",
    link: str = "",
    body: Any = None,
    header: Mapping[str, Any] | None = None,
    code_checker: CodeChecker | None = None,
    extract_result: ResultExtractor | None = None,
) -> Any:
    """Send a request and return the result extracted from the response body.

    The status code is checked with ``code_checker`` (default: must be 200)
    and the body turned into a result with ``extract_result`` (default:
    JSON). A result with an ``extract(headers)`` method receives the
    response headers; a result with a ``check()`` method is then checked,
    and whatever it raises propagates.
    """
    if not method or not link:
        raise HTTPRequestError("bad param: method or link is empty")

    session = client if client is not None else new_http_client()
    response = session.request(method, link, data=body, headers=_flatten_headers(header))
    with response:
        data = response.content

    text = data.decode("utf-8", errors="replace")
    checker = code_checker or code_is_200
    try:
        checker(response.status_code)
    except Exception as exc:
        raise HTTPRequestError(f"check code failed: {exc}, data: {text}") from exc

    extractor = extract_result or json_extractor
    try:
        result = extractor(data)
    except Exception as exc:
        raise HTTPRequestError(f"extract result failed: {exc}, data: {text}") from exc

    extract = getattr(result, "extract", None)
    if callable(extract):
        extract(response.headers)

    check = getattr(result, "check", None)
    if callable(check):
        check()

    return result