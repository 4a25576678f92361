"""GraphQL documents for the page, navigation and footer queries.

Each query selects at most one entry (``limit: 1``) and returns it wrapped in
a ``{ items: [...] }`` collection that may legitimately be empty.

Navigation and footer come in two content models: ``web`` (page links under
``groupLink``/``featuredPagesCollection``, legal and social links) and
``mobile`` (``MenuItem`` entries, footer logo and copyright text).

``subline`` is requested under two response names: the CTA exposes it as rich
text, while the text and info blocks expose it as a plain string.  GraphQL
forbids one response key with two shapes, so the string form is aliased to
``sublineText``.
"""

_PAGE_LINK_FIELDS = """
fragment PageLinkFields on Page {
  sys { id }
  slug
  pageName
}
"""

_MENU_GROUP_FIELDS = """
fragment MenuGroupFields on MenuGroup {
  sys { id }
  groupName
  groupLink { ...PageLinkFields }
  featuredPagesCollection {
    items { ...PageLinkFields }
  }
}
"""

GET_PAGE = """
query GetPage($slug: String!, $locale: String!) {
  pageCollection(where: { slug: $slug }, locale: $locale, limit: 1) {
    items {
      sys { id }
      slug
      pageName
      topSectionCollection {
        items {
          __typename
          ... on Entry {
            sys { id }
          }
          ... on ComponentHeroBanner {
            headline
            bodyText { json }
            ctaText
            image { url }
            imageStyle
            colorPalette
          }
          ... on ComponentCta {
            headline
            subline { json }
            ctaText
            colorPalette
          }
          ... on ComponentTextBlock {
            headline
            sublineText: subline
            body { json }
            colorPalette
          }
          ... on ComponentInfoBlock {
            headline
            sublineText: subline
            block1Image { url }
            block1Body { json }
            block2Image { url }
            block2Body { json }
            block3Image { url }
            block3Body { json }
            colorPalette
          }
          ... on ComponentDuplex {
            headline
            bodyText { json }
            image { url }
            imageStyle
            containerLayout
            colorPalette
          }
          ... on ComponentQuote {
            quote { json }
            image { url }
            imagePosition
            colorPalette
          }
        }
      }
      pageContent {
        __typename
        ... on Entry {
          sys { id }
        }
      }
      extraSectionCollection {
        items {
          __typename
          ... on Entry {
            sys { id }
          }
        }
      }
    }
  }
}
"""

GET_NAVIGATION = (
    """
query GetNavigation($locale: String!) {
  navigationMenuCollection(locale: $locale, limit: 1) {
    items {
      menuItemsCollection {
        items { ...MenuGroupFields }
      }
    }
  }
}
"""
    + _MENU_GROUP_FIELDS
    + _PAGE_LINK_FIELDS
)

GET_FOOTER = (
    """
query GetFooter($locale: String!) {
  footerMenuCollection(locale: $locale, limit: 1) {
    items {
      sys { id }
      menuItemsCollection {
        items { ...MenuGroupFields }
      }
      legalLinks {
        featuredPagesCollection {
          items { ...PageLinkFields }
        }
      }
      twitterLink
      facebookLink
      linkedinLink
      instagramLink
    }
  }
}
"""
    + _MENU_GROUP_FIELDS
    + _PAGE_LINK_FIELDS
)

# Content model used by the native apps: menu groups hold MenuItem entries and
# the footer carries a logo and copyright line instead of legal/social links.
_MENU_ITEM_FIELDS = """
fragment MenuItemFields on MenuItem {
  sys { id }
  label
  path
  externalLink
}
"""

GET_NAVIGATION_MOBILE = (
    """
query GetMobileNavigation($locale: String!) {
  navigationCollection(locale: $locale, limit: 1) {
    items {
      sys { id }
      menuItemsCollection {
        items {
          sys { id }
          groupName
          menuItemsCollection {
            items { ...MenuItemFields }
          }
        }
      }
    }
  }
}
"""
    + _MENU_ITEM_FIELDS
)

GET_FOOTER_MOBILE = (
    """
query GetMobileFooter($locale: String!) {
  footerCollection(locale: $locale, limit: 1) {
    items {
      sys { id }
      logo { url }
      menuItemsCollection {
        items {
          sys { id }
          groupName
          menuItemsCollection {
            items { ...MenuItemFields }
          }
        }
      }
      copyrightText
    }
  }
}
"""
    + _MENU_ITEM_FIELDS
)
