"""Typed dataclasses describing the declared site configuration."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ
from types import MappingProxyType

from docsite.errors import SiteConfigError


class NavPosition(enum.Enum):
    """Side of the navbar an item is placed on."""

    LEADING = "leading"
    TRAILING = "trailing"


@dc.dataclass(frozen=True, slots=True)
class DocRef:
    """Sidebar leaf pointing at a document in the content registry."""

    document_id: str


@dc.dataclass(frozen=True, slots=True)
class Category:
    """Labelled sidebar group; not navigable itself."""

    label: str
    items: tuple[SidebarNode, ...]
    collapsed: bool = True


SidebarNode = DocRef | Category


@dc.dataclass(frozen=True, slots=True)
class SidebarTree:
    """A named, ordered sidebar declaration."""

    sidebar_id: str
    items: tuple[SidebarNode, ...]


@dc.dataclass(frozen=True, slots=True)
class SidebarRef:
    """Navbar entry opening the first document of a sidebar."""

    sidebar_id: str
    label: str
    position: NavPosition = NavPosition.LEADING


@dc.dataclass(frozen=True, slots=True)
class DirectPath:
    """Link to an internal site path, not necessarily a document."""

    path: str
    label: str
    position: NavPosition = NavPosition.LEADING


@dc.dataclass(frozen=True, slots=True)
class ExternalLink:
    """Link leaving the site."""

    url: str
    label: str
    position: NavPosition = NavPosition.LEADING


@dc.dataclass(frozen=True, slots=True)
class SearchBox:
    """Slot where the renderer places the search widget."""

    position: NavPosition = NavPosition.TRAILING


NavLinkItem = SidebarRef | DirectPath | ExternalLink | SearchBox
FooterLink = DirectPath | ExternalLink


@dc.dataclass(frozen=True, slots=True)
class FooterGroup:
    """Titled column of footer links."""

    title: str
    items: tuple[FooterLink, ...]


@dc.dataclass(frozen=True, slots=True)
class LogoConfig:
    """Navbar logo sources."""

    alt: str
    src: str
    src_dark: str | None = None


@dc.dataclass(frozen=True, slots=True)
class NavbarConfig:
    """Navbar title, logo, and ordered items."""

    title: str
    items: tuple[NavLinkItem, ...] = ()
    logo: LogoConfig | None = None


@dc.dataclass(frozen=True, slots=True)
class FooterConfig:
    """Footer style, link groups, and copyright line."""

    style: str = "light"
    groups: tuple[FooterGroup, ...] = ()
    copyright: str | None = None


@dc.dataclass(frozen=True, slots=True)
class ColorModeConfig:
    """Colour scheme preferences handed to the theme."""

    default_mode: str = "light"
    disable_switch: bool = False
    respect_prefers_color_scheme: bool = False


@dc.dataclass(frozen=True, slots=True)
class CallToAction:
    """Hero button on the landing page."""

    label: str
    link: str
    variant: str = "primary"


@dc.dataclass(frozen=True, slots=True)
class FeatureItem:
    """Landing-page card linking into the documentation."""

    title: str
    icon: str
    description: str
    link: str
    badge: str | None = None


@dc.dataclass(frozen=True, slots=True)
class FeatureSection:
    """Landing-page copy surrounding the feature cards."""

    heading: str = ""
    subheading: str = ""
    items: tuple[FeatureItem, ...] = ()
    ctas: tuple[CallToAction, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class SiteConfiguration:
    """Immutable site metadata shared by every build stage."""

    title: str
    base_url: str
    default_locale: str = "en"
    supported_locales: frozenset[str] = frozenset({"en"})
    theme_options: typ.Mapping[str, typ.Any] = dc.field(
        default_factory=lambda: MappingProxyType({})
    )
    tagline: str = ""
    url: str | None = None
    favicon: str | None = None
    organization_name: str | None = None
    project_name: str | None = None
    color_mode: ColorModeConfig = dc.field(default_factory=ColorModeConfig)
    sidebars: typ.Mapping[str, SidebarTree] = dc.field(
        default_factory=lambda: MappingProxyType({})
    )
    navbar: NavbarConfig | None = None
    footer: FooterConfig = dc.field(default_factory=FooterConfig)
    features: FeatureSection = dc.field(default_factory=FeatureSection)

    def __post_init__(self) -> None:
        """Reject a base URL without slashes or an unsupported default locale."""
        if not (self.base_url.startswith("/") and self.base_url.endswith("/")):
            msg = f"Base URL '{self.base_url}' must start and end with '/'."
            raise SiteConfigError(msg)
        if self.default_locale not in self.supported_locales:
            available = ", ".join(sorted(self.supported_locales))
            msg = (
                f"Default locale '{self.default_locale}' is not among the supported "
                f"locales: {available}."
            )
            raise SiteConfigError(msg)

    @property
    def sidebar_ids(self) -> frozenset[str]:
        """Return the ids of every declared sidebar."""
        return frozenset(self.sidebars)


__all__ = [
    "CallToAction",
    "Category",
    "ColorModeConfig",
    "DirectPath",
    "DocRef",
    "ExternalLink",
    "FeatureItem",
    "FeatureSection",
    "FooterConfig",
    "FooterGroup",
    "FooterLink",
    "LogoConfig",
    "NavLinkItem",
    "NavPosition",
    "NavbarConfig",
    "SearchBox",
    "SidebarNode",
    "SidebarRef",
    "SidebarTree",
    "SiteConfiguration",
]
