from pathlib import Path

from fastapi.templating import Jinja2Templates

from moulton.core.settings import settings
from moulton.schemas.page import PageState
from moulton.version import APP_VERSION

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Globais comuns a todas as páginas
templates.env.globals.update(
    {
        "app_version": APP_VERSION,
        "site": {
            "title": settings.SITE_TITLE,
            "description": settings.SITE_DESCRIPTION,
            "url": settings.SITE_URL.rstrip("/"),
        },
        "PageState": PageState,
    }
)


def render(request, name: str, context: dict, **kwargs):
    """Atalho: TemplateResponse com o request já posicionado."""
    return templates.TemplateResponse(request, name, context, **kwargs)
