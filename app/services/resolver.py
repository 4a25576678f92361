"""Union resolution: dispatch decoded component records to typed variants."""

import logging
from typing import Callable, Dict, Iterable, Optional, Tuple

from app.models.page import CTA, Component, Duplex, HeroBanner, InfoBlock, Quote, TextBlock
from app.services.decoder import RawComponent
from app.services.normalizer import (
    normalize_flag,
    normalize_identity,
    normalize_text,
    normalize_url,
    pick,
)
from app.services.richtext import extract_plain_text

logger = logging.getLogger(__name__)


def _hero_banner(raw: RawComponent, component_id: str) -> HeroBanner:
    return HeroBanner(
        id=component_id,
        headline=normalize_text(raw.headline),
        subline=pick(normalize_text(raw.subline_text), normalize_text(raw.subline)),
        cta_text=normalize_text(raw.cta_text),
        body=pick(raw.body_text, raw.body),
        image_url=normalize_url(raw.image_url),
        image_style=normalize_flag(raw.image_style),
        color_palette=normalize_text(raw.color_palette),
    )


def _cta(raw: RawComponent, component_id: str) -> CTA:
    # The CTA requests ``subline`` as rich text; a plain string is the fallback.
    document_text = (
        extract_plain_text(raw.subline_document) if raw.subline_document is not None else None
    )
    return CTA(
        id=component_id,
        headline=normalize_text(raw.headline),
        subline=pick(document_text, normalize_text(raw.subline), normalize_text(raw.subline_text)),
        subline_document=raw.subline_document,
        cta_text=normalize_text(raw.cta_text),
        color_palette=normalize_text(raw.color_palette),
    )


def _text_block(raw: RawComponent, component_id: str) -> TextBlock:
    return TextBlock(
        id=component_id,
        headline=normalize_text(raw.headline),
        subline=pick(normalize_text(raw.subline_text), normalize_text(raw.subline)),
        body=pick(raw.body, raw.body_text),
        color_palette=normalize_text(raw.color_palette),
    )


def _info_block(raw: RawComponent, component_id: str) -> InfoBlock:
    return InfoBlock(
        id=component_id,
        headline=normalize_text(raw.headline),
        subline=pick(normalize_text(raw.subline_text), normalize_text(raw.subline)),
        block1_image_url=normalize_url(raw.block1_image_url),
        block2_image_url=normalize_url(raw.block2_image_url),
        block3_image_url=normalize_url(raw.block3_image_url),
        block1_body=raw.block1_body,
        block2_body=raw.block2_body,
        block3_body=raw.block3_body,
        color_palette=normalize_text(raw.color_palette),
    )


def _duplex(raw: RawComponent, component_id: str) -> Duplex:
    return Duplex(
        id=component_id,
        headline=normalize_text(raw.headline),
        body=pick(raw.body_text, raw.body),
        image_url=normalize_url(raw.image_url),
        image_style=normalize_flag(raw.image_style),
        container_layout=normalize_flag(raw.container_layout),
        color_palette=normalize_text(raw.color_palette),
    )


def _quote(raw: RawComponent, component_id: str) -> Quote:
    quote_text = extract_plain_text(raw.quote) if raw.quote is not None else None
    return Quote(
        id=component_id,
        quote=raw.quote,
        quote_text=pick(quote_text, normalize_text(raw.quote_text)),
        image_url=pick(normalize_url(raw.image_url), normalize_url(raw.author_image_url)),
        image_position=normalize_text(raw.image_position),
        author_name=normalize_text(raw.author_name),
        author_title=normalize_text(raw.author_title),
        color_palette=normalize_text(raw.color_palette),
    )


_VARIANTS: Dict[str, Callable[[RawComponent, str], Component]] = {
    "ComponentHeroBanner": _hero_banner,
    "ComponentCta": _cta,
    "ComponentTextBlock": _text_block,
    "ComponentInfoBlock": _info_block,
    "ComponentDuplex": _duplex,
    "ComponentQuote": _quote,
}


def resolve(raw: RawComponent) -> Optional[Component]:
    """Build the component variant named by ``__typename``.

    Returns ``None`` when the typename is missing or unknown, or when the
    record carries no entry ID.
    """
    builder = _VARIANTS.get(raw.typename) if isinstance(raw.typename, str) else None
    if builder is None:
        logger.debug("Skipping component with unsupported typename %r", raw.typename)
        return None

    component_id = normalize_identity(raw.sys_id)
    if component_id is None:
        logger.debug("Skipping %s without an entry ID", raw.typename)
        return None

    return builder(raw, component_id)


def resolve_all(records: Iterable[RawComponent]) -> Tuple[Component, ...]:
    """Resolve *records* in order, dropping the ones that resolve to nothing."""
    components = (resolve(record) for record in records)
    return tuple(component for component in components if component is not None)
