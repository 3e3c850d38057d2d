from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
from fastapi import Depends

from moulton.services.subscriptions import SubscriptionClient
from moulton.web.session import CookieSessionStorage, session_storage


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    # no timeout: the provider call either resolves or the transport fails
    async with httpx.AsyncClient(timeout=None, follow_redirects=True) as client:
        yield client


def get_subscription_client(
    http: httpx.AsyncClient = Depends(get_http_client),  # noqa: B008
) -> SubscriptionClient:
    return SubscriptionClient(http)


def get_session_storage() -> CookieSessionStorage:
    return session_storage
