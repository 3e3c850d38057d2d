import asyncio
from io import BytesIO

import httpx
import pytest
from starlette.datastructures import FormData, Headers, UploadFile

from moulton.services.subscriptions import (
    FORM_CONTENT_TYPE,
    ProviderUnavailable,
    SubscriptionClient,
    SubscriptionOutcome,
    encode_form,
)

URL = "https://buttondown.email/api/emails/embed-subscribe/moulton"


def _subscribe(provider, form):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(provider)) as http:
            return await SubscriptionClient(http, URL).subscribe(form)

    return asyncio.run(run())


def test_encode_plain_mapping():
    assert encode_form({"email": "a@b.com"}) == "email=a%40b.com"


def test_encode_replaces_files_with_their_name():
    upload = UploadFile(
        BytesIO(b"\x89PNG"),
        filename="f.png",
        headers=Headers({"content-type": "image/png"}),
    )
    form = FormData([("email", "a@b.com"), ("extra", upload)])

    assert encode_form(form) == "email=a%40b.com&extra=f.png"


def test_encode_keeps_repeated_fields_and_spaces():
    form = FormData([("tag", "a b"), ("tag", "c&d")])

    assert encode_form(form) == "tag=a+b&tag=c%26d"


def test_encode_empty_form():
    assert encode_form({}) == ""


def test_success_posts_encoded_body(provider):
    outcome = _subscribe(provider, {"email": "a@b.com"})

    assert outcome is SubscriptionOutcome.SUCCESS
    (sent,) = provider.requests
    assert sent.method == "POST"
    assert str(sent.url) == URL
    assert sent.headers["content-type"] == FORM_CONTENT_TYPE
    assert sent.content == b"email=a%40b.com"


@pytest.mark.parametrize("status_code", [200, 201, 302, 399])
def test_statuses_below_400_are_success(provider, status_code):
    provider.status_code = status_code

    assert _subscribe(provider, {"email": "a@b.com"}) is SubscriptionOutcome.SUCCESS


@pytest.mark.parametrize("status_code", [400, 404, 429, 500, 503])
def test_statuses_from_400_are_failure(provider, status_code):
    provider.status_code = status_code

    assert _subscribe(provider, {"email": "a@b.com"}) is SubscriptionOutcome.FAILURE


def test_exactly_one_request_even_on_failure(provider):
    provider.status_code = 500

    _subscribe(provider, {"email": "a@b.com"})

    assert len(provider.requests) == 1


def test_transport_error_is_wrapped(provider):
    provider.error = httpx.ConnectError("connection refused")

    with pytest.raises(ProviderUnavailable):
        _subscribe(provider, {"email": "a@b.com"})

    assert len(provider.requests) == 1


def test_default_url_comes_from_settings():
    from moulton.core.settings import settings

    client = SubscriptionClient(httpx.AsyncClient())

    assert client.subscribe_url == settings.subscribe_url
    assert client.subscribe_url.endswith("/api/emails/embed-subscribe/moulton")
