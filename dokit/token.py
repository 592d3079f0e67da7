"""Sign and verify HMAC JSON Web Tokens that carry a user value."""

from __future__ import annotations

import dataclasses
import math
import secrets
import time
from datetime import timedelta
from typing import Any

import jwt

__all__ = ["TokenError", "BadIssuerError", "ExpiredError", "NotValidError", "Token"]

_HMAC_ALGORITHMS = ["HS256", "HS384", "HS512"]


class TokenError(Exception):
    """A token could not be signed or verified."""


class BadIssuerError(TokenError):
    """The token was issued by someone else."""

    def __init__(self, message: str = "Token Bad Issuer") -> None:
        super().__init__(message)


class ExpiredError(TokenError):
    """The token has expired."""

    def __init__(self, message: str = "Token Expired") -> None:
        super().__init__(message)


class NotValidError(TokenError):
    """The token's signature does not match."""

    def __init__(self, message: str = "Token Not Valid") -> None:
        super().__init__(message)


class Token:
    """Signs users into HS256 tokens that expire after ``exp`` and verifies them.

    ``exp`` is a number of seconds or a :class:`~datetime.timedelta`. If
    ``user_type`` is given, verified users are rebuilt with it (a dataclass
    from its fields, anything else from the decoded value).
    """

    def __init__(
        self,
        secret: bytes | str,
        exp: float | timedelta,
        issuer: str,
        user_type: type | None = None,
    ) -> None:
        self._secret = secret
        self._exp = exp.total_seconds() if isinstance(exp, timedelta) else float(exp)
        self._issuer = issuer
        self._user_type = user_type

    def _encode_user(self, user: Any) -> Any:
        if dataclasses.is_dataclass(user) and not isinstance(user, type):
            return dataclasses.asdict(user)
        return user

    def _decode_user(self, user: Any) -> Any:
        if self._user_type is None or user is None:
            return user
        if dataclasses.is_dataclass(self._user_type) and isinstance(user, dict):
            return self._user_type(**user)
        return self._user_type(user)

    def sign(self, user: Any) -> str:
        """Return a signed token carrying ``user``."""
        claims: dict[str, Any] = {
            "User": self._encode_user(user),
            "Nonce": str(secrets.randbits(63)),
            "exp": math.floor(time.time() + self._exp),
        }
        if self._issuer:
            claims["iss"] = self._issuer
        try:
            return jwt.encode(claims, self._secret, algorithm="HS256")
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            raise TokenError(f"sign failed: {exc}") from exc

    def verify(self, token_string: str) -> Any:
        """Return the user carried by ``token_string``; ``None`` for an empty string."""
        if not token_string or not token_string.strip():
            return None
        try:
            payload = jwt.decode(
                token_string,
                self._secret,
                algorithms=_HMAC_ALGORITHMS,
                options={"verify_exp": False},
            )
        except jwt.InvalidSignatureError as exc:
            raise NotValidError() from exc
        except jwt.PyJWTError as exc:
            raise TokenError(f"parse token failed: {exc}") from exc

        if payload.get("iss", "") != self._issuer:
            raise BadIssuerError()
        exp = payload.get("exp")
        if not isinstance(exp, (int, float)) or exp <= math.floor(time.time()):
            raise ExpiredError()
        return self._decode_user(payload.get("User"))