"""Validate and normalise navbar and footer links.

Every link declared in the navbar or footer is checked syntactically against
the site configuration and the set of resolved sidebars, then normalised into
a :class:`ResolvedLink` carrying the final ``href``. No network access takes
place: external URLs are only checked for an ``http`` or ``https`` scheme and
a host.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from urllib.parse import urlsplit

from .config.models import (
    DirectPath,
    ExternalLink,
    FooterConfig,
    LogoConfig,
    NavbarConfig,
    NavLinkItem,
    NavPosition,
    SearchBox,
    SidebarRef,
)
from .errors import InvalidPath, InvalidUrl, UnknownDocumentPath, UnknownSidebar

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config.models import SiteConfiguration
    from .registry import ContentRegistry
    from .sidebars import ResolvedSidebar

EXTERNAL_SCHEMES = frozenset({"http", "https"})


@dc.dataclass(frozen=True, slots=True)
class ResolvedLink:
    """Link ready for rendering.

    ``kind`` is ``"sidebar"``, ``"path"``, ``"external"``, or ``"search"``;
    search slots have no ``href``.
    """

    kind: str
    label: str
    href: str | None
    position: NavPosition = NavPosition.LEADING

    @property
    def external(self) -> bool:
        """Return True when the link leaves the site."""
        return self.kind == "external"


@dc.dataclass(frozen=True, slots=True)
class ResolvedFooterGroup:
    """Footer column with validated links."""

    title: str
    items: tuple[ResolvedLink, ...]


@dc.dataclass(frozen=True, slots=True)
class ValidatedLinkSurface:
    """Navbar split into leading and trailing groups, plus the footer."""

    navbar_title: str
    leading: tuple[ResolvedLink, ...]
    trailing: tuple[ResolvedLink, ...]
    footer_groups: tuple[ResolvedFooterGroup, ...]
    logo: LogoConfig | None = None
    footer_style: str = "light"
    copyright: str | None = None


class LinkSurfaceValidator:
    """Check navbar and footer entries against the site and its sidebars.

    When a ``registry`` is given, :meth:`validate_content_link` also requires
    internal links under the registry's docs route to name a real document.
    """

    def __init__(
        self,
        config: SiteConfiguration,
        sidebars: cabc.Mapping[str, ResolvedSidebar],
        *,
        registry: ContentRegistry | None = None,
    ) -> None:
        self.config = config
        self.sidebars = sidebars
        self.registry = registry

    def validate(self, item: NavLinkItem) -> ResolvedLink:
        """Validate a single link and return its normalised form.

        Raises
        ------
        UnknownSidebar
            For a :class:`SidebarRef` to an undeclared sidebar.
        InvalidPath
            For a :class:`DirectPath` outside the site base URL.
        InvalidUrl
            For an :class:`ExternalLink` without an http(s) scheme and host.
        """
        match item:
            case SidebarRef(sidebar_id=sidebar_id, label=label, position=position):
                sidebar = self.sidebars.get(sidebar_id)
                if sidebar is None:
                    raise UnknownSidebar(sidebar_id, label)
                first = sidebar.first_document
                href = first.path if first else self.config.base_url
                return ResolvedLink("sidebar", label, href, position)
            case DirectPath(path=path, label=label, position=position):
                return ResolvedLink("path", label, self.check_path(path), position)
            case ExternalLink(url=url, label=label, position=position):
                return ResolvedLink("external", label, check_url(url), position)
            case SearchBox(position=position):
                return ResolvedLink("search", "", None, position)
            case _:  # pragma: no cover - exhaustive over NavLinkItem
                msg = f"Unsupported link {item!r}."
                raise TypeError(msg)

    def validate_target(self, link: str) -> ResolvedLink:
        """Validate a bare link string as an internal path or external URL."""
        if urlsplit(link).scheme:
            return ResolvedLink("external", "", check_url(link))
        return ResolvedLink("path", "", self.check_path(link))

    def validate_content_link(self, link: str) -> ResolvedLink:
        """Validate a feature or call-to-action link.

        Applies :meth:`validate_target`, then rejects internal links under the
        docs route that match no registered document.

        Raises
        ------
        UnknownDocumentPath
            When the link points into the docs route at a missing document.
        """
        target = self.validate_target(link)
        registry = self.registry
        if registry is None or target.external:
            return target
        route = registry.route_prefix
        under_docs = link.startswith(route) or link.rstrip("/") == route.rstrip("/")
        if under_docs and not registry.has_path(link):
            raise UnknownDocumentPath(link, self.config.base_url, route)
        return target

    def validate_surface(
        self, navbar: NavbarConfig | None, footer: FooterConfig
    ) -> ValidatedLinkSurface:
        """Validate every navbar and footer entry, stopping at the first error.

        Navbar items are partitioned by position; each group keeps
        declaration order.
        """
        leading: list[ResolvedLink] = []
        trailing: list[ResolvedLink] = []
        for item in navbar.items if navbar else ():
            link = self.validate(item)
            bucket = leading if link.position is NavPosition.LEADING else trailing
            bucket.append(link)
        groups = tuple(
            ResolvedFooterGroup(
                title=group.title,
                items=tuple(self.validate(entry) for entry in group.items),
            )
            for group in footer.groups
        )
        return ValidatedLinkSurface(
            navbar_title=navbar.title if navbar else self.config.title,
            leading=tuple(leading),
            trailing=tuple(trailing),
            footer_groups=groups,
            logo=navbar.logo if navbar else None,
            footer_style=footer.style,
            copyright=footer.copyright,
        )

    def check_path(self, path: str) -> str:
        """Return ``path`` when it is absolute and under the base URL."""
        base_url = self.config.base_url
        within_base = path.startswith(base_url) or path == base_url.rstrip("/")
        if not path.startswith("/") or path.startswith("//") or not within_base:
            raise InvalidPath(path, base_url)
        return path


def check_url(url: str) -> str:
    """Return ``url`` when it has an http(s) scheme and a host."""
    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise InvalidUrl(url) from exc
    if parts.scheme.lower() not in EXTERNAL_SCHEMES or not parts.hostname:
        raise InvalidUrl(url)
    return url


__all__ = [
    "EXTERNAL_SCHEMES",
    "LinkSurfaceValidator",
    "ResolvedFooterGroup",
    "ResolvedLink",
    "ValidatedLinkSurface",
    "check_url",
]
