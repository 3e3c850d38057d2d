from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware
from starlette.responses import JSONResponse

from moulton.core.logging import configure_logging, get_logger
from moulton.core.security import SecurityHeadersMiddleware
from moulton.core.settings import Env, settings
from moulton.middlewares.telemetry import RequestContextMiddleware
from moulton.services.subscriptions import ProviderUnavailable
from moulton.version import APP_VERSION, BUILD_TIME_UTC, GIT_SHA
from moulton.web.routes import newsletter
from moulton.web.routes.newsletter import wants_json
from moulton.web.templating import STATIC_DIR

configure_logging(json=settings.LOG_JSON, level=settings.LOG_LEVEL)

app = FastAPI(debug=settings.DEBUG, title=settings.SITE_TITLE, version=APP_VERSION)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# --- Middlewares de contexto/log
app.add_middleware(RequestContextMiddleware)

# --- Security headers (HSTS só em prod)
app.add_middleware(SecurityHeadersMiddleware, hsts=settings.APP_ENV is Env.PROD)

# --- HTTPS only em prod
if settings.APP_ENV is Env.PROD:
    app.add_middleware(HTTPSRedirectMiddleware)

app.include_router(newsletter.router)


@app.exception_handler(ProviderUnavailable)
async def provider_unavailable(request: Request, exc: ProviderUnavailable):
    get_logger().error("subscription.provider_unavailable", error=str(exc))
    if wants_json(request):
        return JSONResponse({"detail": "Bad Gateway"}, status_code=502)
    return HTMLResponse("<h1>Something wrong happened.</h1>", status_code=502)


@app.exception_handler(404)
async def not_found(_, __):
    return JSONResponse({"detail": "Not Found"}, status_code=404)


# --- Endpoints
@app.get("/healthz", tags=["ops"])
def healthz():
    get_logger().info("health.check")
    return {"status": "ok", "env": settings.APP_ENV, "version": APP_VERSION}


@app.get("/version", tags=["ops"])
def version():
    return {
        "version": APP_VERSION,
        "git_sha": GIT_SHA,
        "build_time_utc": BUILD_TIME_UTC,
        "env": settings.APP_ENV,
        "debug": settings.DEBUG,
    }
