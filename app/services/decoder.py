"""Schema decoding: raw GraphQL JSON → loosely-validated intermediate records.

Every field is decoded on its own and scalars are kept exactly as they
arrived; coercion to canonical types is the normaliser's job.  Content is
author-editable and routinely violates the nominal schema (unpublished links,
locale gaps, mistyped fields), so decoding never raises: a field that cannot
be read is ``None`` and a collection that cannot be read is empty.
"""

import logging
from typing import Any, Callable, Dict, NamedTuple, Optional, Tuple, TypeVar

from app.services.normalizer import pick

logger = logging.getLogger(__name__)

T = TypeVar("T")

RichTextDocument = Dict[str, Any]


class RawComponent(NamedTuple):
    """Superset of every field any component fragment can carry."""

    typename: Any = None
    sys_id: Any = None
    headline: Any = None
    subline: Any = None
    subline_document: Optional[RichTextDocument] = None
    subline_text: Any = None
    cta_text: Any = None
    body: Optional[RichTextDocument] = None
    body_text: Optional[RichTextDocument] = None
    image_url: Any = None
    image_style: Any = None
    image_position: Any = None
    container_layout: Any = None
    block1_image_url: Any = None
    block2_image_url: Any = None
    block3_image_url: Any = None
    block1_body: Optional[RichTextDocument] = None
    block2_body: Optional[RichTextDocument] = None
    block3_body: Optional[RichTextDocument] = None
    quote: Optional[RichTextDocument] = None
    quote_text: Any = None
    author_name: Any = None
    author_title: Any = None
    author_image_url: Any = None
    color_palette: Any = None


class RawPage(NamedTuple):
    sys_id: Any = None
    slug: Any = None
    page_name: Any = None
    top_section: Tuple[RawComponent, ...] = ()
    page_content: Optional[RawComponent] = None
    extra_section: Tuple[RawComponent, ...] = ()


class RawMenuItem(NamedTuple):
    """A menu entry or a page link; both wire shapes share this record."""

    sys_id: Any = None
    label: Any = None
    page_name: Any = None
    path: Any = None
    slug: Any = None
    external_link: Any = None


class RawMenuGroup(NamedTuple):
    sys_id: Any = None
    group_name: Any = None
    group_link: Optional[RawMenuItem] = None
    menu_items: Tuple[RawMenuItem, ...] = ()
    featured_pages: Tuple[RawMenuItem, ...] = ()


class RawNavigation(NamedTuple):
    sys_id: Any = None
    menu_groups: Tuple[RawMenuGroup, ...] = ()


class RawFooter(NamedTuple):
    sys_id: Any = None
    menu_groups: Tuple[RawMenuGroup, ...] = ()
    legal_links: Tuple[RawMenuItem, ...] = ()
    twitter_link: Any = None
    facebook_link: Any = None
    linkedin_link: Any = None
    instagram_link: Any = None
    logo_url: Any = None
    copyright_text: Any = None


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _object(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


def _scalar(value: Any) -> Any:
    """Keep JSON scalars, drop objects and arrays."""
    return None if isinstance(value, (dict, list)) else value


def _sys_id(obj: Dict[str, Any]) -> Any:
    sys = _object(obj.get("sys"))
    return _scalar(sys.get("id")) if sys else None


def _asset_url(value: Any) -> Any:
    asset = _object(value)
    return _scalar(asset.get("url")) if asset else None


def _rich_text(value: Any) -> Optional[RichTextDocument]:
    """Unwrap a ``{ json: {...} }`` rich-text field."""
    wrapper = _object(value)
    return _object(wrapper.get("json")) if wrapper else None


def _optional(value: Any, decode: Callable[[Dict[str, Any]], T]) -> Optional[T]:
    obj = _object(value)
    return decode(obj) if obj is not None else None


def _collection_items(value: Any, decode: Callable[[Dict[str, Any]], T]) -> Tuple[T, ...]:
    """Decode ``{ items: [...] }``, degrading to ``()`` on any shape problem."""
    collection = _object(value)
    if collection is None:
        return ()
    items = collection.get("items")
    if not isinstance(items, list):
        logger.debug("Collection items is %s, not a list; using empty", type(items).__name__)
        return ()

    decoded = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            # Unresolvable links (e.g. unpublished entries) arrive as null.
            logger.debug("Dropping collection entry %d of type %s", index, type(item).__name__)
            continue
        decoded.append(decode(item))
    return tuple(decoded)


# ---------------------------------------------------------------------------
# Record decoders
# ---------------------------------------------------------------------------

def decode_component(obj: Dict[str, Any]) -> RawComponent:
    subline = obj.get("subline")
    return RawComponent(
        typename=_scalar(obj.get("__typename")),
        sys_id=_sys_id(obj),
        headline=_scalar(obj.get("headline")),
        subline=_scalar(subline),
        subline_document=_rich_text(subline),
        subline_text=_scalar(obj.get("sublineText")),
        cta_text=_scalar(obj.get("ctaText")),
        body=_rich_text(obj.get("body")),
        body_text=_rich_text(obj.get("bodyText")),
        image_url=_asset_url(obj.get("image")),
        image_style=_scalar(obj.get("imageStyle")),
        image_position=_scalar(obj.get("imagePosition")),
        container_layout=_scalar(obj.get("containerLayout")),
        block1_image_url=_asset_url(obj.get("block1Image")),
        block2_image_url=_asset_url(obj.get("block2Image")),
        block3_image_url=_asset_url(obj.get("block3Image")),
        block1_body=_rich_text(obj.get("block1Body")),
        block2_body=_rich_text(obj.get("block2Body")),
        block3_body=_rich_text(obj.get("block3Body")),
        quote=_rich_text(obj.get("quote")),
        quote_text=_scalar(obj.get("quoteText")),
        author_name=_scalar(obj.get("authorName")),
        author_title=_scalar(obj.get("authorTitle")),
        author_image_url=_asset_url(obj.get("authorImage")),
        color_palette=_scalar(obj.get("colorPalette")),
    )


def decode_page(obj: Dict[str, Any]) -> RawPage:
    return RawPage(
        sys_id=_sys_id(obj),
        slug=_scalar(obj.get("slug")),
        page_name=_scalar(obj.get("pageName")),
        top_section=_collection_items(obj.get("topSectionCollection"), decode_component),
        page_content=_optional(obj.get("pageContent"), decode_component),
        extra_section=_collection_items(obj.get("extraSectionCollection"), decode_component),
    )


def decode_menu_item(obj: Dict[str, Any]) -> RawMenuItem:
    return RawMenuItem(
        sys_id=_sys_id(obj),
        label=_scalar(obj.get("label")),
        page_name=_scalar(obj.get("pageName")),
        path=_scalar(obj.get("path")),
        slug=_scalar(obj.get("slug")),
        external_link=_scalar(obj.get("externalLink")),
    )


def decode_menu_group(obj: Dict[str, Any]) -> RawMenuGroup:
    return RawMenuGroup(
        sys_id=_sys_id(obj),
        group_name=_scalar(obj.get("groupName")),
        group_link=_optional(obj.get("groupLink"), decode_menu_item),
        menu_items=_collection_items(obj.get("menuItemsCollection"), decode_menu_item),
        featured_pages=_collection_items(obj.get("featuredPagesCollection"), decode_menu_item),
    )


def decode_navigation(obj: Dict[str, Any]) -> RawNavigation:
    return RawNavigation(
        sys_id=_sys_id(obj),
        menu_groups=_collection_items(obj.get("menuItemsCollection"), decode_menu_group),
    )


def decode_footer(obj: Dict[str, Any]) -> RawFooter:
    legal_links = _object(obj.get("legalLinks")) or {}
    return RawFooter(
        sys_id=_sys_id(obj),
        menu_groups=_collection_items(obj.get("menuItemsCollection"), decode_menu_group),
        legal_links=_collection_items(legal_links.get("featuredPagesCollection"), decode_menu_item),
        twitter_link=_scalar(obj.get("twitterLink")),
        facebook_link=_scalar(obj.get("facebookLink")),
        linkedin_link=_scalar(obj.get("linkedinLink")),
        instagram_link=_scalar(obj.get("instagramLink")),
        logo_url=_asset_url(obj.get("logo")),
        copyright_text=_scalar(obj.get("copyrightText")),
    )


# ---------------------------------------------------------------------------
# Query-level entry points
# ---------------------------------------------------------------------------

def decode_pages(data: Dict[str, Any]) -> Tuple[RawPage, ...]:
    return _collection_items(data.get("pageCollection"), decode_page)


def decode_navigations(data: Dict[str, Any]) -> Tuple[RawNavigation, ...]:
    # Older content models name the collection ``navigationCollection``.
    collection = pick(data.get("navigationMenuCollection"), data.get("navigationCollection"))
    return _collection_items(collection, decode_navigation)


def decode_footers(data: Dict[str, Any]) -> Tuple[RawFooter, ...]:
    collection = pick(data.get("footerMenuCollection"), data.get("footerCollection"))
    return _collection_items(collection, decode_footer)
