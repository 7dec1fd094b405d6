"""Load the site declaration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path
from types import MappingProxyType

from ruamel.yaml import YAML

from docsite.errors import MissingRequiredField

from .features import _build_feature_section
from .helpers import (
    DEFAULT_LOCALE,
    _as_list,
    _as_mapping,
    _build_color_mode,
    _normalize_base_url,
    _optional_str,
)
from .models import SiteConfiguration
from .navigation import _build_footer_config, _build_navbar_config
from .sidebars import _build_sidebars

REQUIRED_FIELDS = ("title", "baseUrl")
THEME_SECTIONS = frozenset({"colorMode", "navbar", "footer"})


def load_site_config(path: Path) -> SiteConfiguration:
    """Load the YAML file declaring the site, its sidebars, links, and features.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML declaration (for example,
        ``config/site.yaml``).

    Returns
    -------
    SiteConfiguration
        Immutable configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    MissingRequiredField
        If ``title`` or ``baseUrl`` is absent.
    SiteConfigError
        If any other section is malformed.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docsite.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> sorted(config.sidebars)[:1]  # doctest: +SKIP
    ['architectureSidebar']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return load_declared(loaded)


def load_declared(declared: typ.Mapping[str, typ.Any]) -> SiteConfiguration:
    """Merge a declared mapping with defaults into a :class:`SiteConfiguration`.

    Required fields are checked before anything else is parsed so later
    stages can rely on a valid base URL.
    """
    for field_name in REQUIRED_FIELDS:
        if _optional_str(declared.get(field_name)) is None:
            raise MissingRequiredField(field_name)

    title = str(declared["title"]).strip()
    default_locale, locales = _build_locales(declared.get("i18n"))
    theme_raw = _as_mapping(declared.get("themeConfig"), context="'themeConfig'")
    theme_options = {
        key: value for key, value in theme_raw.items() if key not in THEME_SECTIONS
    }

    return SiteConfiguration(
        title=title,
        base_url=_normalize_base_url(declared["baseUrl"]),
        default_locale=default_locale,
        supported_locales=locales,
        theme_options=MappingProxyType(theme_options),
        tagline=_optional_str(declared.get("tagline")) or "",
        url=_optional_str(declared.get("url")),
        favicon=_optional_str(declared.get("favicon")),
        organization_name=_optional_str(declared.get("organizationName")),
        project_name=_optional_str(declared.get("projectName")),
        color_mode=_build_color_mode(
            _as_mapping(theme_raw.get("colorMode"), context="'colorMode'")
        ),
        sidebars=_build_sidebars(declared.get("sidebars")),
        navbar=_build_navbar_config(theme_raw.get("navbar"), site_title=title),
        footer=_build_footer_config(theme_raw.get("footer")),
        features=_build_feature_section(declared.get("features")),
    )


def _build_locales(
    payload: typ.Mapping[str, typ.Any] | None,
) -> tuple[str, frozenset[str]]:
    """Return the default locale and the supported locale set."""
    data = _as_mapping(payload, context="'i18n'")
    default_locale = _optional_str(data.get("defaultLocale")) or DEFAULT_LOCALE
    declared = [
        text
        for text in (
            _optional_str(locale)
            for locale in _as_list(data.get("locales"), context="'i18n.locales'")
        )
        if text
    ]
    return default_locale, frozenset(declared or [default_locale])


__all__ = ["load_declared", "load_site_config"]
