"""Navbar and footer configuration builders."""

from __future__ import annotations

import typing as typ

from docsite.errors import SiteConfigError

from .helpers import (
    _as_list,
    _as_mapping,
    _optional_str,
    _parse_position,
    _render_copyright,
)
from .models import (
    DirectPath,
    ExternalLink,
    FooterConfig,
    FooterGroup,
    FooterLink,
    LogoConfig,
    NavbarConfig,
    NavLinkItem,
    NavPosition,
    SearchBox,
    SidebarRef,
)


def _build_navbar_config(
    payload: typ.Mapping[str, typ.Any] | None, *, site_title: str
) -> NavbarConfig:
    """Build the navbar configuration, defaulting its title to the site title."""
    data = _as_mapping(payload, context="'themeConfig.navbar'")
    return NavbarConfig(
        title=_optional_str(data.get("title")) or site_title,
        items=_build_nav_items(data.get("items")),
        logo=_build_logo(data.get("logo")),
    )


def _build_logo(payload: typ.Mapping[str, object] | None) -> LogoConfig | None:
    """Build the navbar logo, or None when no logo is declared."""
    match payload:
        case None:
            return None
        case {"src": src, **rest} if _optional_str(src):
            return LogoConfig(
                alt=_optional_str(rest.get("alt")) or "",
                src=str(src),
                src_dark=_optional_str(rest.get("srcDark")),
            )
        case _:
            msg = "Navbar logo requires a 'src'."
            raise SiteConfigError(msg)


def _build_nav_items(entries: list[typ.Any] | None) -> tuple[NavLinkItem, ...]:
    """Build navbar items in declaration order."""
    return tuple(
        _build_nav_item(entry)
        for entry in _as_list(entries, context="'navbar.items'")
    )


def _build_nav_item(entry: object) -> NavLinkItem:
    """Build one navbar item from its declared mapping."""
    if not isinstance(entry, dict):
        msg = f"Navbar items must be mappings; got {entry!r}."
        raise SiteConfigError(msg)
    position = _parse_position(entry.get("position"), default=NavPosition.LEADING)
    match entry:
        case {"type": "search"}:
            return SearchBox(
                position=_parse_position(
                    entry.get("position"), default=NavPosition.TRAILING
                )
            )
        case {"type": "docSidebar", "sidebarId": sidebar_id, "label": label}:
            if not (_optional_str(sidebar_id) and _optional_str(label)):
                msg = "Sidebar navbar items require 'sidebarId' and 'label'."
                raise SiteConfigError(msg)
            return SidebarRef(
                sidebar_id=str(sidebar_id).strip(), label=str(label), position=position
            )
        case {"type": "docSidebar"}:
            msg = "Sidebar navbar items require 'sidebarId' and 'label'."
            raise SiteConfigError(msg)
        case {"type": other} if other not in (None, "default"):
            msg = f"Unsupported navbar item type '{other}'."
            raise SiteConfigError(msg)
        case _:
            return _build_link(entry, context="Navbar links", position=position)


def _build_link(
    entry: typ.Mapping[str, object], *, context: str, position: NavPosition
) -> DirectPath | ExternalLink:
    """Build a ``to`` (internal) or ``href`` (external) link entry."""
    label = _optional_str(entry.get("label"))
    to = _optional_str(entry.get("to"))
    href = _optional_str(entry.get("href"))
    if not label or bool(to) == bool(href):
        msg = f"{context} require a 'label' and exactly one of 'to' or 'href'."
        raise SiteConfigError(msg)
    if to:
        return DirectPath(path=to, label=label, position=position)
    return ExternalLink(url=typ.cast("str", href), label=label, position=position)


def _build_footer_config(payload: typ.Mapping[str, typ.Any] | None) -> FooterConfig:
    """Build the footer configuration."""
    data = _as_mapping(payload, context="'themeConfig.footer'")
    groups = tuple(
        _build_footer_group(entry)
        for entry in _as_list(data.get("links"), context="'footer.links'")
    )
    return FooterConfig(
        style=_optional_str(data.get("style")) or "light",
        groups=groups,
        copyright=_render_copyright(_optional_str(data.get("copyright"))),
    )


def _build_footer_group(entry: object) -> FooterGroup:
    """Build one titled footer column."""
    match entry:
        case {"title": title, **rest} if _optional_str(title):
            pass
        case _:
            msg = "Footer link groups require a 'title'."
            raise SiteConfigError(msg)
    items: list[FooterLink] = []
    for item in _as_list(rest.get("items"), context=f"Footer group '{title}'"):
        if not isinstance(item, dict):
            msg = f"Footer group '{title}' items must be mappings."
            raise SiteConfigError(msg)
        items.append(
            _build_link(
                item, context="Footer links", position=NavPosition.LEADING
            )
        )
    return FooterGroup(title=str(title), items=tuple(items))


__all__ = [
    "_build_footer_config",
    "_build_footer_group",
    "_build_link",
    "_build_logo",
    "_build_nav_item",
    "_build_nav_items",
    "_build_navbar_config",
]
