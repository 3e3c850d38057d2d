from __future__ import annotations

from typing import Any

from fastapi import Request

from moulton.core.logging import get_logger
from moulton.web.session import CookieSessionStorage, session_storage


def _read_session(request: Request, storage: CookieSessionStorage):
    return storage.get_session(request.cookies.get(storage.cookie_name))


def set_flash(
    request: Request,
    key: str,
    value: Any = None,
    storage: CookieSessionStorage | None = None,
) -> dict[str, str]:
    """Stage ``value`` for the next read of ``key``.

    Returns the headers that must go on the outgoing response; nothing is
    persisted until the client receives the new cookie.
    """
    storage = storage or session_storage
    session = _read_session(request, storage)
    session.flash(key, value or True)
    get_logger().debug("flash.set", key=key)
    return {"Set-Cookie": storage.commit_session(session)}


def get_flash(
    request: Request,
    key: str,
    storage: CookieSessionStorage | None = None,
) -> tuple[Any, dict[str, str]]:
    """Read and clear ``key``.

    The headers are returned even when nothing was found and must be attached
    to the response so the rewritten (or refreshed) cookie reaches the client.
    """
    storage = storage or session_storage
    session = _read_session(request, storage)
    value = session.get(key) or None
    if value is not None:
        get_logger().debug("flash.read", key=key)
    return value, {"Set-Cookie": storage.commit_session(session)}
