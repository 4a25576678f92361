import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import Settings, get_settings
from app.models.site import SiteContent
from app.services.assembler import load_site

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


@router.get(
    "/site/{slug}",
    response_model=SiteContent,
    summary="Fetch a page together with the navigation and footer",
    description=(
        "Requests the page, the header navigation and the footer concurrently. "
        "Each part reports its own `status` (`ok`, `not_found`, `absent`, "
        "`transport_failed` or `schema_mismatch`), so a failure in one part "
        "never hides the others.  Always responds with 200."
    ),
)
@limiter.limit("20/minute")
async def get_site(
    request: Request,
    slug: str,
    locale: Optional[str] = Query(default=None, description="Content locale, e.g. 'en-US'."),
    settings: Settings = Depends(get_settings),
) -> SiteContent:
    locale = locale or settings.default_locale
    logger.info("Site request received", extra={"slug": slug, "locale": locale})
    return await load_site(slug, locale, settings)
