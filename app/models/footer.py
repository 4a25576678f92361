from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from app.models.navigation import MenuItem


class FooterMenuGroup(BaseModel):
    """A footer column: a heading plus a flat list of links (no submenus)."""

    model_config = ConfigDict(frozen=True)

    id: str
    group_name: Optional[str] = None
    items: Tuple[MenuItem, ...] = ()


class Footer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""
    menu_groups: Tuple[FooterMenuGroup, ...] = ()
    legal_links: Tuple[MenuItem, ...] = ()
    twitter_link: Optional[str] = None
    facebook_link: Optional[str] = None
    linkedin_link: Optional[str] = None
    instagram_link: Optional[str] = None
    logo_url: Optional[str] = None
    copyright_text: Optional[str] = None
