"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import datetime as dt
import typing as typ

from docsite.errors import SiteConfigError

from .models import ColorModeConfig, NavPosition

DEFAULT_LOCALE = "en"
POSITION_ALIASES: dict[str, NavPosition] = {
    "left": NavPosition.LEADING,
    "leading": NavPosition.LEADING,
    "right": NavPosition.TRAILING,
    "trailing": NavPosition.TRAILING,
}


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _normalize_base_url(value: object) -> str:
    """Return ``value`` as a path that starts and ends with a slash."""
    text = str(value).strip()
    if not text.startswith("/"):
        text = f"/{text}"
    if not text.endswith("/"):
        text = f"{text}/"
    return text


def _parse_position(value: object | None, *, default: NavPosition) -> NavPosition:
    """Map a declared ``position`` onto :class:`NavPosition`."""
    if value is None:
        return default
    try:
        return POSITION_ALIASES[str(value).strip().lower()]
    except KeyError as exc:
        msg = f"Unknown navbar position '{value}'; expected left or right."
        raise SiteConfigError(msg) from exc


def _as_mapping(value: object | None, *, context: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating None as empty."""
    match value:
        case None:
            return {}
        case dict() as data:
            return data
        case _:
            msg = f"{context} must be a mapping."
            raise SiteConfigError(msg)


def _as_list(value: object | None, *, context: str) -> list[typ.Any]:
    """Return ``value`` as a list, treating None as empty."""
    match value:
        case None:
            return []
        case list() as items:
            return items
        case _:
            msg = f"{context} must be a list."
            raise SiteConfigError(msg)


def _build_color_mode(payload: typ.Mapping[str, typ.Any]) -> ColorModeConfig:
    """Build a ColorModeConfig from the ``colorMode`` mapping."""
    base = ColorModeConfig()
    return ColorModeConfig(
        default_mode=str(payload.get("defaultMode", base.default_mode)),
        disable_switch=bool(payload.get("disableSwitch", base.disable_switch)),
        respect_prefers_color_scheme=bool(
            payload.get(
                "respectPrefersColorScheme", base.respect_prefers_color_scheme
            )
        ),
    )


def _render_copyright(
    template: str | None, *, now: dt.datetime | None = None
) -> str | None:
    """Substitute ``{year}`` in the footer copyright line."""
    if template is None:
        return None
    year = (now or dt.datetime.now(dt.UTC)).year
    return template.replace("{year}", str(year))


__all__ = [
    "DEFAULT_LOCALE",
    "POSITION_ALIASES",
    "_as_list",
    "_as_mapping",
    "_build_color_mode",
    "_normalize_base_url",
    "_optional_str",
    "_parse_position",
    "_render_copyright",
]
