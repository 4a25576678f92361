"""Tree assembly: fetch, decode, normalise and compose the three content trees.

Each assembly moves through ``Fetching`` to one of ``Decoded``,
``SchemaEmpty`` (no matching entry, reported as ``None``) or
``TransportFailed`` (raised).  Decoding and normalisation cannot fail, so a
decoded response always yields a tree.
"""

import asyncio
import logging
from typing import Iterable, Optional, Tuple, Union

import httpx

from app.config import Settings
from app.models.footer import Footer, FooterMenuGroup
from app.models.navigation import MenuGroup, MenuItem, Navigation
from app.models.page import Page
from app.models.site import FooterOutcome, NavigationOutcome, PageOutcome, SiteContent
from app.services.decoder import (
    RawFooter,
    RawMenuGroup,
    RawMenuItem,
    RawNavigation,
    RawPage,
    decode_footers,
    decode_navigations,
    decode_pages,
)
from app.services.errors import SchemaMismatchError, TransportError
from app.services.normalizer import normalize_identity, normalize_text, normalize_url, pick
from app.services.queries import (
    GET_FOOTER,
    GET_FOOTER_MOBILE,
    GET_NAVIGATION,
    GET_NAVIGATION_MOBILE,
    GET_PAGE,
)
from app.services.resolver import resolve, resolve_all
from app.services.transport import GraphQLResult, execute_query

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pure composition
# ---------------------------------------------------------------------------

def build_page(raw: RawPage) -> Page:
    return Page(
        id=normalize_identity(raw.sys_id) or "",
        slug=normalize_text(raw.slug),
        page_name=normalize_text(raw.page_name),
        top_section=resolve_all(raw.top_section),
        page_content=resolve(raw.page_content) if raw.page_content is not None else None,
        extra_section=resolve_all(raw.extra_section),
    )


def build_menu_item(raw: RawMenuItem) -> Optional[MenuItem]:
    """Build a menu item from either a menu entry or a page link."""
    item_id = normalize_identity(raw.sys_id)
    if item_id is None:
        return None
    return MenuItem(
        id=item_id,
        label=pick(normalize_text(raw.label), normalize_text(raw.page_name)),
        path=pick(normalize_text(raw.path), normalize_text(raw.slug)),
        external_link=normalize_text(raw.external_link),
    )


def _menu_items(records: Iterable[RawMenuItem]) -> Tuple[MenuItem, ...]:
    items = (build_menu_item(record) for record in records)
    return tuple(item for item in items if item is not None)


def _group_children(raw: RawMenuGroup) -> Tuple[MenuItem, ...]:
    # Menu entries win over featured page links when any of them survive.
    return _menu_items(raw.menu_items) or _menu_items(raw.featured_pages)


def build_menu_group(raw: RawMenuGroup) -> Optional[MenuGroup]:
    group_id = normalize_identity(raw.sys_id)
    if group_id is None:
        return None
    return MenuGroup(
        id=group_id,
        group_name=normalize_text(raw.group_name),
        link=build_menu_item(raw.group_link) if raw.group_link is not None else None,
        items=_group_children(raw),
    )


def build_navigation(raw: RawNavigation) -> Navigation:
    groups = (build_menu_group(group) for group in raw.menu_groups)
    return Navigation(
        id=normalize_identity(raw.sys_id) or "",
        menu_groups=tuple(group for group in groups if group is not None),
    )


def _footer_group(raw: RawMenuGroup) -> Optional[FooterMenuGroup]:
    group_id = normalize_identity(raw.sys_id)
    if group_id is None:
        return None
    return FooterMenuGroup(
        id=group_id,
        group_name=normalize_text(raw.group_name),
        items=_group_children(raw),
    )


def build_footer(raw: RawFooter) -> Footer:
    groups = (_footer_group(group) for group in raw.menu_groups)
    return Footer(
        id=normalize_identity(raw.sys_id) or "",
        menu_groups=tuple(group for group in groups if group is not None),
        legal_links=_menu_items(raw.legal_links),
        twitter_link=normalize_url(raw.twitter_link),
        facebook_link=normalize_url(raw.facebook_link),
        linkedin_link=normalize_url(raw.linkedin_link),
        instagram_link=normalize_url(raw.instagram_link),
        logo_url=normalize_url(raw.logo_url),
        copyright_text=normalize_text(raw.copyright_text),
    )


# ---------------------------------------------------------------------------
# Assemblies
# ---------------------------------------------------------------------------

_MENU_QUERIES = {
    "web": (GET_NAVIGATION, GET_FOOTER),
    "mobile": (GET_NAVIGATION_MOBILE, GET_FOOTER_MOBILE),
}


def _require_collection(result: GraphQLResult, *names: str) -> None:
    """Raise if the response carries errors and none of the *names* collections.

    A present collection with no items is an empty result; an errored response
    without it is a failure and must not be reported as missing content.
    """
    if not result.errors:
        return
    if any(isinstance(result.data.get(name), dict) for name in names):
        return
    raise TransportError("; ".join(result.errors))


async def assemble_page(
    slug: str,
    locale: str,
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[Page]:
    """Fetch and assemble the page for *slug*.

    Returns:
        The assembled :class:`Page`, or ``None`` when no page matches *slug*
        (the caller should treat this as a 404, not as a failure).

    Raises:
        TransportError: on network, HTTP or envelope failures, or when the API
            reports errors and returns no page collection.
        SchemaMismatchError: if the configured space rejects the query.
    """
    logger.info("Fetching page", extra={"slug": slug, "locale": locale})
    result = await execute_query(settings, GET_PAGE, {"slug": slug, "locale": locale}, client)
    _require_collection(result, "pageCollection")

    pages = decode_pages(result.data)
    if not pages:
        logger.info("No page found for slug %s", slug)
        return None
    return build_page(pages[0])


async def assemble_navigation(
    locale: str,
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[Navigation]:
    """Fetch and assemble the header navigation; ``None`` if none is published.

    The query follows ``settings.content_model``.
    """
    query = _MENU_QUERIES[settings.content_model][0]
    logger.info("Fetching navigation", extra={"locale": locale, "content_model": settings.content_model})
    result = await execute_query(settings, query, {"locale": locale}, client)
    _require_collection(result, "navigationMenuCollection", "navigationCollection")

    navigations = decode_navigations(result.data)
    if not navigations:
        logger.info("No navigation menu found for locale %s", locale)
        return None
    return build_navigation(navigations[0])


async def assemble_footer(
    locale: str,
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[Footer]:
    """Fetch and assemble the footer; ``None`` if none is published."""
    query = _MENU_QUERIES[settings.content_model][1]
    logger.info("Fetching footer", extra={"locale": locale, "content_model": settings.content_model})
    result = await execute_query(settings, query, {"locale": locale}, client)
    _require_collection(result, "footerMenuCollection", "footerCollection")

    footers = decode_footers(result.data)
    if not footers:
        logger.info("No footer found for locale %s", locale)
        return None
    return build_footer(footers[0])


# ---------------------------------------------------------------------------
# Whole-site loading
# ---------------------------------------------------------------------------

def _failure(assembly: str, exc: BaseException) -> Tuple[str, str]:
    """Map a failed assembly to ``(status, detail)``.

    Failures that are not content errors are reported as ``transport_failed``
    so the other assemblies still reach the caller.
    """
    if isinstance(exc, SchemaMismatchError):
        status = "schema_mismatch"
    elif isinstance(exc, TransportError):
        status = "transport_failed"
    elif isinstance(exc, asyncio.CancelledError):
        status = "transport_failed"
        exc = TransportError("The request was cancelled.")
    elif isinstance(exc, Exception):
        logger.error(
            "%s assembly raised an unexpected error", assembly, exc_info=(type(exc), exc, exc.__traceback__)
        )
        return "transport_failed", f"Unexpected error: {exc!r}"
    else:
        raise exc
    logger.warning("%s assembly failed (%s): %s", assembly, status, exc)
    return status, str(exc)



def _page_outcome(result: Union[Optional[Page], BaseException]) -> PageOutcome:
    if isinstance(result, BaseException):
        status, detail = _failure("Page", result)
        return PageOutcome(status=status, detail=detail)
    if result is None:
        return PageOutcome(status="not_found", detail="No content for this slug.")
    return PageOutcome(status="ok", page=result)


def _navigation_outcome(result: Union[Optional[Navigation], BaseException]) -> NavigationOutcome:
    if isinstance(result, BaseException):
        status, detail = _failure("Navigation", result)
        return NavigationOutcome(status=status, detail=detail)
    if result is None:
        return NavigationOutcome(status="absent")
    return NavigationOutcome(status="ok", navigation=result)


def _footer_outcome(result: Union[Optional[Footer], BaseException]) -> FooterOutcome:
    if isinstance(result, BaseException):
        status, detail = _failure("Footer", result)
        return FooterOutcome(status=status, detail=detail)
    if result is None:
        return FooterOutcome(status="absent")
    return FooterOutcome(status="ok", footer=result)


async def load_site(
    slug: str,
    locale: str,
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> SiteContent:
    """Assemble page, navigation and footer concurrently.

    The three assemblies share nothing; a failure in one is reported in its
    own outcome and never affects the other two.
    """
    page_result, navigation_result, footer_result = await asyncio.gather(
        assemble_page(slug, locale, settings, client),
        assemble_navigation(locale, settings, client),
        assemble_footer(locale, settings, client),
        return_exceptions=True,
    )
    return SiteContent(
        slug=slug,
        locale=locale,
        page=_page_outcome(page_result),
        navigation=_navigation_outcome(navigation_result),
        footer=_footer_outcome(footer_result),
    )
