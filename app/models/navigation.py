from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, computed_field


class MenuItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: Optional[str] = None
    path: Optional[str] = None
    external_link: Optional[str] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def href(self) -> Optional[str]:
        """Navigation target; the internal path wins when both are set."""
        return self.path or self.external_link


class MenuGroup(BaseModel):
    """A menu header with an optional link of its own and optional children.

    ``link`` and ``items`` are independent: either, both, or neither may be
    present.  A group with neither renders as a plain label.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    group_name: Optional[str] = None
    link: Optional[MenuItem] = None
    items: Tuple[MenuItem, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_interactive(self) -> bool:
        return self.link is not None or bool(self.items)


class Navigation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""  # some content models expose no entry ID for the menu
    menu_groups: Tuple[MenuGroup, ...] = ()
