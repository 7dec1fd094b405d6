"""Landing-page feature listing builders."""

from __future__ import annotations

import typing as typ

from docsite.errors import SiteConfigError

from .helpers import _as_list, _as_mapping, _optional_str
from .models import CallToAction, FeatureItem, FeatureSection


def _build_feature_section(
    payload: typ.Mapping[str, typ.Any] | list[typ.Any] | None,
) -> FeatureSection:
    """Build the feature section from a mapping or a bare list of cards."""
    if isinstance(payload, list):
        payload = {"items": payload}
    data = _as_mapping(payload, context="'features'")
    return FeatureSection(
        heading=_optional_str(data.get("heading")) or "",
        subheading=_optional_str(data.get("subheading")) or "",
        items=_build_feature_items(data.get("items")),
        ctas=_build_ctas(data.get("ctas")),
    )


def _build_feature_items(entries: list[typ.Any] | None) -> tuple[FeatureItem, ...]:
    """Build feature cards in declaration order."""
    items: list[FeatureItem] = []
    for entry in _as_list(entries, context="'features.items'"):
        match entry:
            case {
                "title": title,
                "icon": icon,
                "description": description,
                "link": link,
                **rest,
            }:
                pass
            case _:
                msg = (
                    "Feature items require 'title', 'icon', 'description', "
                    f"and 'link'; got {entry!r}."
                )
                raise SiteConfigError(msg)
        if not (title and icon and description and link):
            msg = "Feature items require 'title', 'icon', 'description', and 'link'."
            raise SiteConfigError(msg)
        items.append(
            FeatureItem(
                title=str(title),
                icon=str(icon),
                description=str(description).strip(),
                link=str(link).strip(),
                badge=_optional_str(rest.get("badge")),
            )
        )
    return tuple(items)


def _build_ctas(entries: list[typ.Any] | None) -> tuple[CallToAction, ...]:
    """Build hero call-to-action buttons."""
    buttons: list[CallToAction] = []
    for entry in _as_list(entries, context="'features.ctas'"):
        match entry:
            case {"label": label, "link": link, **rest} if label and link:
                buttons.append(
                    CallToAction(
                        label=str(label),
                        link=str(link).strip(),
                        variant=_optional_str(rest.get("variant")) or "primary",
                    )
                )
            case _:
                msg = "Call-to-action entries require 'label' and 'link'."
                raise SiteConfigError(msg)
    return tuple(buttons)


__all__ = ["_build_ctas", "_build_feature_items", "_build_feature_section"]
