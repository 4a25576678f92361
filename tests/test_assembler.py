"""Tests for app.services.assembler.

A fake content API built on ``httpx.MockTransport`` answers each of the three
queries by operation name, so the whole pipeline (transport → decoder →
normaliser → resolver → assembler) runs for real.
"""

import asyncio
import json
from unittest.mock import patch

import httpx
import pytest

from app.config import Settings
from app.models.page import HeroBanner
from app.services.assembler import (
    assemble_footer,
    assemble_navigation,
    assemble_page,
    build_menu_group,
    build_menu_item,
    load_site,
)
from app.services.decoder import RawMenuGroup, RawMenuItem
from app.services.errors import SchemaMismatchError, TransportError

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

_HOME_PAGE = {
    "data": {
        "pageCollection": {
            "items": [
                {
                    "sys": {"id": "page-home"},
                    "slug": "home",
                    "pageName": "Home",
                    "topSectionCollection": {
                        "items": [
                            {
                                "__typename": "ComponentHeroBanner",
                                "sys": {"id": "hero-1"},
                                "headline": "Welcome",
                                "image": {"url": 42},
                            }
                        ]
                    },
                    "pageContent": None,
                    "extraSectionCollection": {"items": []},
                }
            ]
        }
    }
}

_NAVIGATION = {
    "data": {
        "navigationMenuCollection": {
            "items": [
                {
                    "menuItemsCollection": {
                        "items": [
                            {
                                "sys": {"id": "group-products"},
                                "groupName": "Products",
                                "groupLink": {"sys": {"id": "page-products"}, "slug": "products", "pageName": "Products"},
                                "featuredPagesCollection": {
                                    "items": [
                                        {"sys": {"id": "page-pricing"}, "slug": "pricing", "pageName": "Pricing"},
                                        {"slug": "no-id", "pageName": "Dropped"},
                                    ]
                                },
                            },
                            {"sys": {"id": "group-label"}, "groupName": "Just a label"},
                            {"groupName": "No identity"},
                        ]
                    }
                }
            ]
        }
    }
}

_FOOTER = {
    "data": {
        "footerMenuCollection": {
            "items": [
                {
                    "sys": {"id": "footer-1"},
                    "menuItemsCollection": {
                        "items": [
                            {
                                "sys": {"id": "group-company"},
                                "groupName": "Company",
                                "featuredPagesCollection": {
                                    "items": [{"sys": {"id": "page-about"}, "slug": "about", "pageName": "About"}]
                                },
                            }
                        ]
                    },
                    "legalLinks": {
                        "featuredPagesCollection": {
                            "items": [{"sys": {"id": "page-privacy"}, "slug": "privacy", "pageName": "Privacy"}]
                        }
                    },
                    "twitterLink": "https://twitter.com/example",
                    "facebookLink": "",
                    "linkedinLink": 12345,
                    "instagramLink": None,
                }
            ]
        }
    }
}

_EMPTY_PAGES = {"data": {"pageCollection": {"items": []}}}

_MOBILE_NAVIGATION = {
    "data": {
        "navigationCollection": {
            "items": [
                {
                    "sys": {"id": "nav-mobile"},
                    "menuItemsCollection": {
                        "items": [
                            {
                                "sys": {"id": "group-resources"},
                                "groupName": "Resources",
                                "menuItemsCollection": {
                                    "items": [
                                        {"sys": {"id": "item-docs"}, "label": "Docs", "path": "/docs"},
                                        {
                                            "sys": {"id": "item-blog"},
                                            "label": "Blog",
                                            "externalLink": "https://blog.example.com",
                                        },
                                    ]
                                },
                            }
                        ]
                    },
                }
            ]
        }
    }
}

_MOBILE_FOOTER = {
    "data": {
        "footerCollection": {
            "items": [
                {
                    "sys": {"id": "footer-mobile"},
                    "logo": {"url": "https://images.example.com/logo.svg"},
                    "menuItemsCollection": {
                        "items": [
                            {
                                "sys": {"id": "group-help"},
                                "groupName": "Help",
                                "menuItemsCollection": {
                                    "items": [
                                        {
                                            "sys": {"id": "item-status"},
                                            "label": "Status",
                                            "externalLink": "https://status.example.com",
                                        }
                                    ]
                                },
                            }
                        ]
                    },
                    "copyrightText": "© 2024 Example Inc.",
                }
            ]
        }
    }
}

_COMPLEXITY_ERROR = {
    "message": "Query cannot be executed. The maximum allowed complexity for a query is 11000 but it was 12000."
}


def _settings(**overrides) -> Settings:
    values = dict(
        _env_file=None,
        contentful_space_id="space123",
        contentful_access_token="secret",
        environment_name="",
    )
    values.update(overrides)
    return Settings(**values)


def _content_api(page=None, navigation=None, footer=None):
    """Build a handler answering each operation with a body or an ``httpx.Response``."""
    answers = {
        "GetPage": page if page is not None else _HOME_PAGE,
        "GetNavigation": navigation if navigation is not None else _NAVIGATION,
        "GetFooter": footer if footer is not None else _FOOTER,
        "GetMobileNavigation": _MOBILE_NAVIGATION,
        "GetMobileFooter": _MOBILE_FOOTER,
    }

    def handler(request: httpx.Request) -> httpx.Response:
        query = json.loads(request.content)["query"]
        for operation, answer in answers.items():
            if f"query {operation}(" in query:
                if isinstance(answer, httpx.Response):
                    return answer
                return httpx.Response(200, json=answer)
        return httpx.Response(400, json={"errors": [{"message": "unknown operation"}]})

    return handler


def _run(handler, make_call):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await make_call(client)

    return asyncio.run(run())


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

class TestAssemblePage:
    def test_home_page_end_to_end(self):
        page = _run(_content_api(), lambda c: assemble_page("home", "en-US", _settings(), c))

        assert page.id == "page-home"
        assert page.slug == "home"
        assert page.page_name == "Home"
        assert len(page.top_section) == 1
        banner = page.top_section[0]
        assert isinstance(banner, HeroBanner)
        assert banner.headline == "Welcome"
        assert banner.image_url is None
        assert page.page_content is None
        assert page.extra_section == ()

    def test_zero_items_is_not_found(self):
        page = _run(_content_api(page=_EMPTY_PAGES), lambda c: assemble_page("missing", "en-US", _settings(), c))
        assert page is None

    def test_http_500_is_a_transport_error_not_not_found(self):
        handler = _content_api(page=httpx.Response(500, text="Internal Server Error"))
        with pytest.raises(TransportError):
            _run(handler, lambda c: assemble_page("home", "en-US", _settings(), c))

    def test_sends_slug_and_locale(self):
        seen = {}

        def handler(request):
            seen.update(json.loads(request.content)["variables"])
            return httpx.Response(200, json=_EMPTY_PAGES)

        _run(handler, lambda c: assemble_page("about", "de-DE", _settings(), c))
        assert seen == {"slug": "about", "locale": "de-DE"}

    def test_page_content_slot_and_unknown_components(self):
        body = {
            "data": {
                "pageCollection": {
                    "items": [
                        {
                            "sys": {"id": "p"},
                            "topSectionCollection": {"items": "not-an-array"},
                            "pageContent": {"__typename": "ComponentDuplex", "sys": {"id": "d1"}},
                            "extraSectionCollection": {
                                "items": [
                                    {"__typename": "TopicProduct", "sys": {"id": "x"}},
                                    {"__typename": "ComponentCta", "sys": {"id": "cta"}},
                                ]
                            },
                        }
                    ]
                }
            }
        }
        page = _run(_content_api(page=body), lambda c: assemble_page("p", "en-US", _settings(), c))
        assert page.top_section == ()
        assert page.page_content.id == "d1"
        assert [c.id for c in page.extra_section] == ["cta"]

    def test_soft_graphql_errors_still_yield_a_page(self):
        body = dict(_HOME_PAGE, errors=[{"message": "Link could not be resolved"}])
        page = _run(_content_api(page=body), lambda c: assemble_page("home", "en-US", _settings(), c))
        assert page.id == "page-home"

    def test_errors_with_null_collection_are_a_transport_error(self):
        body = {"data": {"pageCollection": None}, "errors": [_COMPLEXITY_ERROR]}
        with pytest.raises(TransportError, match="maximum allowed complexity"):
            _run(_content_api(page=body), lambda c: assemble_page("home", "en-US", _settings(), c))

    def test_errors_with_missing_collection_are_a_transport_error(self):
        body = {"data": {}, "errors": [_COMPLEXITY_ERROR]}
        with pytest.raises(TransportError):
            _run(_content_api(page=body), lambda c: assemble_page("home", "en-US", _settings(), c))

    def test_errors_with_empty_collection_are_still_not_found(self):
        body = {"data": {"pageCollection": {"items": []}}, "errors": [{"message": "Link could not be resolved"}]}
        page = _run(_content_api(page=body), lambda c: assemble_page("missing", "en-US", _settings(), c))
        assert page is None


# ---------------------------------------------------------------------------
# Navigation and footer
# ---------------------------------------------------------------------------

class TestAssembleNavigation:
    def test_groups_links_and_children(self):
        navigation = _run(_content_api(), lambda c: assemble_navigation("en-US", _settings(), c))

        assert navigation.id == ""
        assert [g.id for g in navigation.menu_groups] == ["group-products", "group-label"]

        products, label = navigation.menu_groups
        assert products.link.path == "products"
        assert products.link.label == "Products"
        assert [item.label for item in products.items] == ["Pricing"]
        assert products.is_interactive is True

        assert label.link is None
        assert label.items == ()
        assert label.is_interactive is False

    def test_absent_when_no_menu(self):
        empty = {"data": {"navigationMenuCollection": {"items": []}}}
        assert _run(_content_api(navigation=empty), lambda c: assemble_navigation("en-US", _settings(), c)) is None

    def test_errors_without_menu_are_a_transport_error(self):
        body = {"data": {"navigationMenuCollection": None}, "errors": [_COMPLEXITY_ERROR]}
        with pytest.raises(TransportError):
            _run(_content_api(navigation=body), lambda c: assemble_navigation("en-US", _settings(), c))

    def test_mobile_content_model_populates_external_links(self):
        settings = _settings(content_model="mobile")
        navigation = _run(_content_api(), lambda c: assemble_navigation("en-US", settings, c))

        assert navigation.id == "nav-mobile"
        (resources,) = navigation.menu_groups
        assert resources.group_name == "Resources"
        docs, blog = resources.items
        assert docs.href == "/docs"
        assert blog.path is None
        assert blog.external_link == "https://blog.example.com"
        assert blog.href == "https://blog.example.com"

    def test_mobile_content_model_sends_mobile_query(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content)["query"])
            return httpx.Response(200, json=_MOBILE_NAVIGATION)

        _run(handler, lambda c: assemble_navigation("en-US", _settings(content_model="mobile"), c))
        (query,) = seen
        assert "navigationCollection(" in query
        assert "externalLink" in query
        assert "navigationMenuCollection" not in query


class TestAssembleFooter:
    def test_footer_tree(self):
        footer = _run(_content_api(), lambda c: assemble_footer("en-US", _settings(), c))

        assert footer.id == "footer-1"
        (company,) = footer.menu_groups
        assert company.group_name == "Company"
        assert [item.path for item in company.items] == ["about"]
        assert [link.label for link in footer.legal_links] == ["Privacy"]
        assert footer.twitter_link == "https://twitter.com/example"
        assert footer.facebook_link is None
        assert footer.linkedin_link is None
        assert footer.instagram_link is None

    def test_schema_mismatch_propagates(self):
        mismatch = {"data": None, "errors": [{"message": 'Cannot query field "footerMenuCollection" on type "Query".'}]}
        with pytest.raises(SchemaMismatchError):
            _run(_content_api(footer=mismatch), lambda c: assemble_footer("en-US", _settings(), c))

    def test_mobile_content_model_populates_logo_and_copyright(self):
        footer = _run(_content_api(), lambda c: assemble_footer("en-US", _settings(content_model="mobile"), c))

        assert footer.id == "footer-mobile"
        assert footer.logo_url == "https://images.example.com/logo.svg"
        assert footer.copyright_text == "© 2024 Example Inc."
        (help_group,) = footer.menu_groups
        assert [item.external_link for item in help_group.items] == ["https://status.example.com"]
        assert footer.legal_links == ()
        assert footer.twitter_link is None


class TestBuildMenuGroup:
    def test_menu_items_win_over_featured_pages(self):
        group = build_menu_group(
            RawMenuGroup(
                sys_id="g1",
                menu_items=(RawMenuItem(sys_id="i1", label="Docs", path="/docs"),),
                featured_pages=(RawMenuItem(sys_id="p1", page_name="Pricing", slug="pricing"),),
            )
        )
        assert [item.id for item in group.items] == ["i1"]

    def test_falls_back_to_featured_pages_when_no_menu_item_has_identity(self):
        group = build_menu_group(
            RawMenuGroup(
                sys_id="g1",
                menu_items=(RawMenuItem(label="Orphan", path="/orphan"),),
                featured_pages=(RawMenuItem(sys_id="p1", page_name="Pricing", slug="pricing"),),
            )
        )
        assert [(item.id, item.label, item.path) for item in group.items] == [("p1", "Pricing", "pricing")]

    def test_group_link_comes_from_group_link(self):
        group = build_menu_group(
            RawMenuGroup(sys_id="g1", group_link=RawMenuItem(sys_id="p1", page_name="Products", slug="products"))
        )
        assert group.link.label == "Products"
        assert group.is_interactive is True


class TestBuildMenuItem:
    def test_internal_path_wins_over_external_link(self):
        item = build_menu_item(
            RawMenuItem(sys_id="i1", label="Docs", path="/docs", external_link="https://docs.example.com")
        )
        assert item.href == "/docs"

    def test_external_link_used_without_path(self):
        item = build_menu_item(RawMenuItem(sys_id="i1", label="Blog", external_link="https://blog.example.com"))
        assert item.href == "https://blog.example.com"

    def test_label_alias_prefers_label_over_page_name(self):
        item = build_menu_item(RawMenuItem(sys_id="i1", label="Short", page_name="Long page name"))
        assert item.label == "Short"

    def test_missing_identity_is_dropped(self):
        assert build_menu_item(RawMenuItem(label="x")) is None


# ---------------------------------------------------------------------------
# Whole site
# ---------------------------------------------------------------------------

class TestLoadSite:
    def test_all_assemblies_succeed(self):
        site = _run(_content_api(), lambda c: load_site("home", "en-US", _settings(), c))
        assert site.page.status == "ok"
        assert site.navigation.status == "ok"
        assert site.footer.status == "ok"
        assert site.page.page.top_section[0].headline == "Welcome"

    def test_navigation_failure_is_isolated(self):
        handler = _content_api(navigation=httpx.Response(503, text="unavailable"))
        site = _run(handler, lambda c: load_site("home", "en-US", _settings(), c))

        assert site.navigation.status == "transport_failed"
        assert site.navigation.navigation is None
        assert "503" in site.navigation.detail

        assert site.page.status == "ok"
        assert site.page.page.top_section[0].headline == "Welcome"
        assert site.footer.status == "ok"
        assert site.footer.footer.legal_links[0].label == "Privacy"

    def test_not_found_and_absent_outcomes(self):
        handler = _content_api(
            page=_EMPTY_PAGES,
            navigation={"data": {"navigationMenuCollection": {"items": []}}},
            footer={"data": {"footerMenuCollection": None}},
        )
        site = _run(handler, lambda c: load_site("missing", "en-US", _settings(), c))
        assert site.page.status == "not_found"
        assert site.navigation.status == "absent"
        assert site.footer.status == "absent"

    def test_schema_mismatch_outcome(self):
        mismatch = {"data": None, "errors": [{"message": 'Unknown type "FooterMenu".'}]}
        site = _run(_content_api(footer=mismatch), lambda c: load_site("home", "en-US", _settings(), c))
        assert site.footer.status == "schema_mismatch"
        assert site.page.status == "ok"
        assert site.navigation.status == "ok"

    def test_page_transport_failure_keeps_menus(self):
        handler = _content_api(page=httpx.Response(500, text="boom"))
        site = _run(handler, lambda c: load_site("home", "en-US", _settings(), c))
        assert site.page.status == "transport_failed"
        assert site.navigation.status == "ok"
        assert site.footer.status == "ok"

    def test_errored_page_without_content_is_a_failure_not_not_found(self):
        body = {"data": {"pageCollection": None}, "errors": [_COMPLEXITY_ERROR]}
        site = _run(_content_api(page=body), lambda c: load_site("home", "en-US", _settings(), c))

        assert site.page.status == "transport_failed"
        assert "maximum allowed complexity" in site.page.detail
        assert site.navigation.status == "ok"
        assert site.footer.status == "ok"
        assert site.footer.footer.id == "footer-1"

    def test_unexpected_error_is_reported_without_losing_other_trees(self):
        with patch("app.services.assembler.decode_navigations", side_effect=RecursionError("too deep")):
            site = _run(_content_api(), lambda c: load_site("home", "en-US", _settings(), c))

        assert site.navigation.status == "transport_failed"
        assert site.navigation.navigation is None
        assert "too deep" in site.navigation.detail
        assert site.page.status == "ok"
        assert site.footer.status == "ok"
