from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from app.models.footer import Footer
from app.models.navigation import Navigation
from app.models.page import Page

AssemblyStatus = Literal["ok", "not_found", "absent", "transport_failed", "schema_mismatch"]
"""Terminal state of one assembly.

``"not_found"`` is only used for the page; navigation and footer report
``"absent"`` when the CMS has no entry.
"""


class _Outcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: AssemblyStatus
    detail: Optional[str] = None


class PageOutcome(_Outcome):
    page: Optional[Page] = None


class NavigationOutcome(_Outcome):
    navigation: Optional[Navigation] = None


class FooterOutcome(_Outcome):
    footer: Optional[Footer] = None


class SiteContent(BaseModel):
    """Page, navigation and footer, each resolved independently."""

    model_config = ConfigDict(frozen=True)

    slug: str
    locale: str
    page: PageOutcome
    navigation: NavigationOutcome
    footer: FooterOutcome
