from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from moulton.deps import get_session_storage, get_subscription_client
from moulton.schemas.page import ActionError, IndexPage
from moulton.services.subscriptions import SubscriptionClient, SubscriptionOutcome
from moulton.utils.week import days_until_next_issue, local_today
from moulton.web.flash import get_flash, set_flash
from moulton.web.session import CookieSessionStorage
from moulton.web.templating import render

router = APIRouter(tags=["newsletter"])

SUCCESS_FLASH = "success"


def wants_json(request: Request) -> bool:
    return "application/json" in request.headers.get("accept", "")


@router.get("/", response_class=HTMLResponse, name="index")
def index(
    request: Request,
    storage: CookieSessionStorage = Depends(get_session_storage),  # noqa: B008
):
    success, headers = get_flash(request, SUCCESS_FLASH, storage=storage)
    page = IndexPage(
        is_success=bool(success),
        is_confirmed="confirmed" in request.query_params,
        days_until_next_issue=days_until_next_issue(local_today()),
    )
    return render(request, "index.html", {"page": page}, headers=headers)


@router.post("/", name="subscribe")
async def subscribe(
    request: Request,
    client: SubscriptionClient = Depends(get_subscription_client),  # noqa: B008
    storage: CookieSessionStorage = Depends(get_session_storage),  # noqa: B008
):
    async with request.form() as form:
        outcome = await client.subscribe(form)
        email = form.get("email")

    if outcome is SubscriptionOutcome.FAILURE:
        # no flash, no redirect: the form stays up for another try
        if wants_json(request):
            return JSONResponse(ActionError().model_dump())
        page = IndexPage(
            is_error=True,
            days_until_next_issue=days_until_next_issue(local_today()),
        )
        context = {"page": page, "email": email if isinstance(email, str) else ""}
        return render(request, "index.html", context)

    headers = set_flash(request, SUCCESS_FLASH, storage=storage)
    return RedirectResponse("/", status_code=303, headers=headers)
