from typing import Annotated, Any, Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

RichTextDocument = Dict[str, Any]
"""Rich-text document passed through untouched (the ``json`` of a rich-text field)."""


class _ComponentBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    color_palette: Optional[str] = None


class HeroBanner(_ComponentBase):
    type: Literal["HeroBanner"] = "HeroBanner"
    headline: Optional[str] = None
    subline: Optional[str] = None
    cta_text: Optional[str] = None
    body: Optional[RichTextDocument] = None
    image_url: Optional[str] = None
    image_style: Optional[bool] = None


class CTA(_ComponentBase):
    type: Literal["CTA"] = "CTA"
    headline: Optional[str] = None
    subline: Optional[str] = None  # plain-text summary of subline_document
    subline_document: Optional[RichTextDocument] = None
    cta_text: Optional[str] = None


class TextBlock(_ComponentBase):
    type: Literal["TextBlock"] = "TextBlock"
    headline: Optional[str] = None
    subline: Optional[str] = None
    body: Optional[RichTextDocument] = None


class InfoBlock(_ComponentBase):
    type: Literal["InfoBlock"] = "InfoBlock"
    headline: Optional[str] = None
    subline: Optional[str] = None
    block1_image_url: Optional[str] = None
    block2_image_url: Optional[str] = None
    block3_image_url: Optional[str] = None
    block1_body: Optional[RichTextDocument] = None
    block2_body: Optional[RichTextDocument] = None
    block3_body: Optional[RichTextDocument] = None


class Duplex(_ComponentBase):
    type: Literal["Duplex"] = "Duplex"
    headline: Optional[str] = None
    body: Optional[RichTextDocument] = None
    image_url: Optional[str] = None
    image_style: Optional[bool] = None
    """``True`` for the fixed image style, ``False`` for full-bleed."""
    container_layout: Optional[bool] = None
    """``True`` renders the image first, ``False`` the text first."""


class Quote(_ComponentBase):
    type: Literal["Quote"] = "Quote"
    quote: Optional[RichTextDocument] = None
    quote_text: Optional[str] = None
    image_url: Optional[str] = None
    image_position: Optional[str] = None
    author_name: Optional[str] = None
    author_title: Optional[str] = None


Component = Annotated[
    Union[HeroBanner, CTA, TextBlock, InfoBlock, Duplex, Quote],
    Field(discriminator="type"),
]


class Page(BaseModel):
    """A page and its section components in render order."""

    model_config = ConfigDict(frozen=True)

    id: str
    slug: Optional[str] = None
    page_name: Optional[str] = None
    top_section: Tuple[Component, ...] = ()
    page_content: Optional[Component] = None
    extra_section: Tuple[Component, ...] = ()
