"""Load and validate the declarative site description.

This subpackage parses the project's ``site.yaml`` file, merges required
fields with documented defaults, and produces frozen dataclasses
(:class:`SiteConfiguration`, :class:`SidebarTree`, :class:`NavbarConfig`,
etc.) that the resolver, link validator, and feature builder consume. The
primary entry points are :func:`load_site_config` for files and
:func:`load_declared` for already-parsed mappings.

Examples
--------
>>> from docsite.config import load_declared
>>> config = load_declared({"title": "Docs", "baseUrl": "/"})
>>> config.default_locale
'en'
"""

from .loader import load_declared, load_site_config
from .models import (
    CallToAction,
    Category,
    ColorModeConfig,
    DirectPath,
    DocRef,
    ExternalLink,
    FeatureItem,
    FeatureSection,
    FooterConfig,
    FooterGroup,
    FooterLink,
    LogoConfig,
    NavbarConfig,
    NavLinkItem,
    NavPosition,
    SearchBox,
    SidebarNode,
    SidebarRef,
    SidebarTree,
    SiteConfiguration,
)

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
    "load_declared",
    "load_site_config",
]
