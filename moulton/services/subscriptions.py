from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlencode

import httpx
from starlette.datastructures import FormData

from moulton.core.logging import get_logger
from moulton.core.settings import settings

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class SubscriptionOutcome(str, enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class ProviderUnavailable(Exception):
    """The email provider could not be reached (DNS, connect, read...)."""


def _field_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    # UploadFile and friends: the provider only gets the file name
    filename = getattr(value, "filename", None)
    if filename is not None:
        return filename
    return str(value)


def _items(form: FormData | Mapping[str, Any]) -> Iterable[tuple[str, Any]]:
    if isinstance(form, FormData):
        return form.multi_items()
    return form.items()


def encode_form(form: FormData | Mapping[str, Any]) -> str:
    """Flatten a submitted form into an application/x-www-form-urlencoded body.

    >>> encode_form({"email": "a@b.com"})
    'email=a%40b.com'
    """
    return urlencode([(key, _field_value(value)) for key, value in _items(form)])


class SubscriptionClient:
    def __init__(self, http: httpx.AsyncClient, subscribe_url: str | None = None):
        self.http = http
        self.subscribe_url = subscribe_url or settings.subscribe_url

    async def subscribe(
        self, form: FormData | Mapping[str, Any]
    ) -> SubscriptionOutcome:
        """Forward the form to the provider. Only the response status matters."""
        log = get_logger().bind(url=self.subscribe_url)
        log.info("subscription.dispatch")
        try:
            response = await self.http.post(
                self.subscribe_url,
                content=encode_form(form),
                headers={"Content-Type": FORM_CONTENT_TYPE},
            )
        except httpx.TransportError as exc:
            log.warning("subscription.transport_error", error=type(exc).__name__)
            raise ProviderUnavailable(str(exc)) from exc

        if response.status_code >= 400:
            log.info("subscription.rejected", status_code=response.status_code)
            return SubscriptionOutcome.FAILURE

        log.info("subscription.accepted", status_code=response.status_code)
        return SubscriptionOutcome.SUCCESS
