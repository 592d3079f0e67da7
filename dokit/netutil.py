"""IP address validation and directory creation."""

from __future__ import annotations

import ipaddress
import os

__all__ = ["is_valid_ip", "mkdir_all_if_not_exist"]


def is_valid_ip(ip: str) -> bool:
    """Return whether ``ip`` is a valid IPv4 or IPv6 address (zones allowed)."""
    if not isinstance(ip, str):
        return False
    try:
        ipaddress.ip_address(ip)
    except ValueError:
        return False
    return True


def mkdir_all_if_not_exist(directory: str | os.PathLike[str]) -> None:
    """Create ``directory`` and its parents unless the path already exists."""
    try:
        os.stat(directory)
    except FileNotFoundError:
        os.makedirs(directory, exist_ok=True)