import logging
from typing import Awaitable, Optional, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import Settings, get_settings
from app.models.footer import Footer
from app.models.navigation import Navigation
from app.models.page import Page
from app.services.assembler import assemble_footer, assemble_navigation, assemble_page
from app.services.errors import ConfigurationError, SchemaMismatchError, TransportError

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()

T = TypeVar("T")

_LOCALE_QUERY = Query(default=None, description="Content locale, e.g. 'en-US'.")


@router.get("/pages/{slug}", response_model=Page, summary="Fetch a page and its components")
@limiter.limit("30/minute")
async def get_page(
    request: Request,
    slug: str,
    locale: Optional[str] = _LOCALE_QUERY,
    settings: Settings = Depends(get_settings),
) -> Page:
    """Return the page published under *slug* with its section components.

    Responds with 404 when the CMS has no page for *slug*, and with 502 when
    the content API fails or rejects the query.
    """
    locale = locale or settings.default_locale
    page = await _run("page", assemble_page(slug, locale, settings))
    if page is None:
        raise HTTPException(status_code=404, detail=f"No page found for slug '{slug}'.")
    return page


@router.get("/navigation", response_model=Navigation, summary="Fetch the header navigation")
@limiter.limit("30/minute")
async def get_navigation(
    request: Request,
    locale: Optional[str] = _LOCALE_QUERY,
    settings: Settings = Depends(get_settings),
) -> Navigation:
    navigation = await _run("navigation", assemble_navigation(locale or settings.default_locale, settings))
    if navigation is None:
        raise HTTPException(status_code=404, detail="No navigation menu is published.")
    return navigation


@router.get("/footer", response_model=Footer, summary="Fetch the footer")
@limiter.limit("30/minute")
async def get_footer(
    request: Request,
    locale: Optional[str] = _LOCALE_QUERY,
    settings: Settings = Depends(get_settings),
) -> Footer:
    footer = await _run("footer", assemble_footer(locale or settings.default_locale, settings))
    if footer is None:
        raise HTTPException(status_code=404, detail="No footer is published.")
    return footer


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

async def _run(assembly: str, pending: Awaitable[T]) -> T:
    """Await an assembly and propagate content errors as HTTP exceptions."""
    try:
        return await pending
    except ConfigurationError as exc:
        logger.error("Content API is not configured: %s", exc)
        raise HTTPException(status_code=500, detail="The content API is not configured.")
    except SchemaMismatchError as exc:
        logger.error("Schema mismatch fetching %s: %s", assembly, exc)
        raise HTTPException(
            status_code=502,
            detail=(
                f"The content space does not match the expected schema: {exc}. "
                "Check CONTENTFUL_SPACE_ID and the environment name."
            ),
        )
    except TransportError as exc:
        logger.error("Error fetching %s: %s", assembly, exc)
        raise HTTPException(status_code=502, detail=str(exc))
