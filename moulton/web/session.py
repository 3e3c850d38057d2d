"""Signed cookie sessions.

Same wire format as Starlette's ``SessionMiddleware`` (base64 JSON signed with
an itsdangerous ``TimestampSigner``), but exposed as an explicit
read/commit pair so callers get back the ``Set-Cookie`` value and decide
which response it goes on.
"""

from __future__ import annotations

import json
from base64 import b64decode, b64encode
from collections.abc import Iterator, MutableMapping
from typing import Any

import itsdangerous
from itsdangerous.exc import BadSignature

from moulton.core.logging import get_logger
from moulton.core.settings import settings

FLASH_PREFIX = "__flash_"
FLASH_SUFFIX = "__"


def flash_key(name: str) -> str:
    return f"{FLASH_PREFIX}{name}{FLASH_SUFFIX}"


class Session(MutableMapping):
    """Per-request view of the session data.

    ``get`` also looks at flash entries and removes them when found, so a
    flashed value is gone from whatever gets committed afterwards.
    """

    def __init__(self, data: dict[str, Any] | None = None):
        self._data: dict[str, Any] = dict(data or {})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data or (
            isinstance(key, str) and flash_key(key) in self._data
        )

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._data:
            return self._data[key]
        fkey = flash_key(key)
        if fkey in self._data:
            return self._data.pop(fkey)
        return default

    def flash(self, key: str, value: Any) -> None:
        self._data[flash_key(key)] = value

    @property
    def data(self) -> dict[str, Any]:
        return dict(self._data)


class CookieSessionStorage:
    def __init__(
        self,
        secret_key: str,
        cookie_name: str = "__session",
        max_age: int | None = None,
        path: str = "/",
        same_site: str = "lax",
        https_only: bool = True,
    ):
        self.signer = itsdangerous.TimestampSigner(str(secret_key))
        self.cookie_name = cookie_name
        self.max_age = max_age
        self.path = path
        self.security_flags = "httponly; samesite=" + same_site
        if https_only:
            self.security_flags += "; secure"

    def get_session(self, cookie: str | None) -> Session:
        """Decode a raw cookie value. Missing or tampered cookies give an empty session."""
        if not cookie:
            return Session()
        try:
            raw = self.signer.unsign(cookie.encode("utf-8"), max_age=self.max_age)
            data = json.loads(b64decode(raw))
        except (BadSignature, ValueError) as exc:
            # SignatureExpired is a BadSignature; bad base64 and bad JSON are ValueErrors
            get_logger().debug("session.invalid", reason=type(exc).__name__)
            return Session()
        if not isinstance(data, dict):
            get_logger().debug("session.invalid", reason="not_a_mapping")
            return Session()
        return Session(data)

    def commit_session(self, session: Session) -> str:
        """Serialize and sign the session, returning a full Set-Cookie value."""
        data = b64encode(json.dumps(session.data).encode("utf-8"))
        data = self.signer.sign(data)
        max_age = f"Max-Age={self.max_age}; " if self.max_age else ""
        return "{name}={data}; path={path}; {max_age}{flags}".format(
            name=self.cookie_name,
            data=data.decode("utf-8"),
            path=self.path,
            max_age=max_age,
            flags=self.security_flags,
        )


def build_session_storage() -> CookieSessionStorage:
    return CookieSessionStorage(
        secret_key=settings.SESSION_SECRET,
        cookie_name=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE,
        https_only=settings.SECURE_COOKIES,
    )


session_storage = build_session_storage()
