"""Validate and order landing-page feature cards."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from markdown import markdown

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config.models import FeatureItem
    from .links import LinkSurfaceValidator


@dc.dataclass(frozen=True, slots=True)
class ValidatedFeatureItem:
    """Feature card with a checked link and a stable rendering index."""

    index: int
    title: str
    icon: str
    description: str
    description_html: str
    link: str
    external: bool
    badge: str | None = None


class FeatureListingBuilder:
    """Check feature links and number cards in declaration order."""

    def __init__(self, validator: LinkSurfaceValidator) -> None:
        self.validator = validator
        self._markdown_extensions = ["sane_lists", "tables", "fenced_code"]

    def build(
        self, items: cabc.Iterable[FeatureItem]
    ) -> tuple[ValidatedFeatureItem, ...]:
        """Return validated cards; ``index`` is the declaration position.

        Links follow the navbar rules: internal paths must sit under the base
        URL, external links need an http(s) URL. When the validator carries a
        registry, paths under the docs route must name a registered document.
        Badges are copied verbatim, so a missing badge stays ``None``.
        """
        built: list[ValidatedFeatureItem] = []
        for index, item in enumerate(items):
            target = self.validator.validate_content_link(item.link)
            built.append(
                ValidatedFeatureItem(
                    index=index,
                    title=item.title,
                    icon=item.icon,
                    description=item.description,
                    description_html=self._render_description(item.description),
                    link=item.link,
                    external=target.external,
                    badge=item.badge,
                )
            )
        return tuple(built)

    def _render_description(self, text: str) -> str:
        normalized = (text or "").strip()
        if not normalized:
            return ""
        return markdown(
            normalized,
            extensions=self._markdown_extensions,
            output_format="html5",
        )


__all__ = ["FeatureListingBuilder", "ValidatedFeatureItem"]
