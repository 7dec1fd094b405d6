"""Run the validation stages and hand an immutable model to renderers.

Stages run in dependency order: site configuration, sidebar resolution, link
surface validation, feature listing. A stage only runs when every earlier
stage succeeded, and any error propagates to the caller unchanged.

Typical usage:

>>> from pathlib import Path
>>> from docsite.build import SiteBuilder
>>> from docsite.config import load_site_config
>>> from docsite.registry import FileContentRegistry
>>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> registry = FileContentRegistry(Path("docs"), base_url=config.base_url)  # doctest: +SKIP
>>> site = SiteBuilder(registry).build(config)  # doctest: +SKIP
>>> site.write_manifest(Path("build/site-manifest.json"))  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import typing as typ

from .features import FeatureListingBuilder, ValidatedFeatureItem
from .links import LinkSurfaceValidator, ResolvedLink, ValidatedLinkSurface
from .sidebars import (
    ResolvedCategory,
    ResolvedNode,
    ResolvedSidebar,
    SidebarResolver,
    breadcrumbs,
    flatten,
    pager,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .config.models import SiteConfiguration
    from .registry import ContentRegistry

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class SiteBuild:
    """Everything a renderer needs, fully validated and read-only."""

    config: SiteConfiguration
    sidebars: cabc.Mapping[str, ResolvedSidebar]
    links: ValidatedLinkSurface
    features: tuple[ValidatedFeatureItem, ...]
    ctas: tuple[ResolvedLink, ...] = ()

    def to_manifest(self) -> dict[str, typ.Any]:
        """Return a JSON-serialisable view of the build for renderers."""
        config = self.config
        return {
            "site": {
                "title": config.title,
                "tagline": config.tagline,
                "url": config.url,
                "baseUrl": config.base_url,
                "favicon": config.favicon,
                "defaultLocale": config.default_locale,
                "locales": sorted(config.supported_locales),
                "colorMode": dc.asdict(config.color_mode),
                "themeOptions": dict(config.theme_options),
            },
            "sidebars": {
                sidebar_id: _sidebar_manifest(sidebar)
                for sidebar_id, sidebar in self.sidebars.items()
            },
            "navbar": {
                "title": self.links.navbar_title,
                "logo": dc.asdict(self.links.logo) if self.links.logo else None,
                "leading": [_link_manifest(link) for link in self.links.leading],
                "trailing": [_link_manifest(link) for link in self.links.trailing],
            },
            "footer": {
                "style": self.links.footer_style,
                "copyright": self.links.copyright,
                "groups": [
                    {
                        "title": group.title,
                        "items": [_link_manifest(link) for link in group.items],
                    }
                    for group in self.links.footer_groups
                ],
            },
            "features": {
                "heading": config.features.heading,
                "subheading": config.features.subheading,
                "ctas": [_link_manifest(link) for link in self.ctas],
                "items": [dc.asdict(item) for item in self.features],
            },
        }

    def write_manifest(self, path: Path) -> Path:
        """Write :meth:`to_manifest` as UTF-8 JSON and return ``path``."""
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(
            self.to_manifest(), indent=2, ensure_ascii=False, default=str
        )
        path.write_text(payload + "\n", encoding="utf-8")
        return path


class SiteBuilder:
    """Validate a :class:`SiteConfiguration` against a content registry."""

    def __init__(self, registry: ContentRegistry) -> None:
        self.registry = registry

    def build(self, config: SiteConfiguration) -> SiteBuild:
        """Resolve sidebars, validate links, and build the feature listing.

        Raises
        ------
        SidebarResolutionError
            When any sidebar references an unknown document.
        UnknownSidebar, InvalidPath, InvalidUrl
            When a navbar, footer, call-to-action, or feature link is invalid.
        UnknownDocumentPath
            When a call-to-action or feature link names a missing document.
        """
        logger.debug("Resolving %d sidebars", len(config.sidebars))
        sidebars = SidebarResolver(self.registry).resolve_all(config.sidebars)

        logger.debug("Validating navbar and footer links")
        validator = LinkSurfaceValidator(config, sidebars, registry=self.registry)
        links = validator.validate_surface(config.navbar, config.footer)
        ctas = tuple(
            dc.replace(validator.validate_content_link(cta.link), label=cta.label)
            for cta in config.features.ctas
        )

        logger.debug("Building %d feature cards", len(config.features.items))
        features = FeatureListingBuilder(validator).build(config.features.items)

        logger.info(
            "Validated site '%s': %d sidebars, %d navbar links, %d features",
            config.title,
            len(sidebars),
            len(links.leading) + len(links.trailing),
            len(features),
        )
        return SiteBuild(
            config=config,
            sidebars=sidebars,
            links=links,
            features=features,
            ctas=ctas,
        )


def _sidebar_manifest(sidebar: ResolvedSidebar) -> dict[str, typ.Any]:
    documents: dict[str, dict[str, typ.Any]] = {}
    for doc in sidebar.documents():
        if doc.document_id in documents:
            continue
        links = pager(sidebar, doc.document_id)
        documents[doc.document_id] = {
            "title": doc.title,
            "path": doc.path,
            "breadcrumbs": list(breadcrumbs(sidebar, doc.document_id)),
            "previous": links.previous.document_id if links.previous else None,
            "next": links.next.document_id if links.next else None,
        }
    return {
        "items": [_node_manifest(node) for node in sidebar.items],
        "order": list(flatten(sidebar)),
        "documents": documents,
    }


def _node_manifest(node: ResolvedNode) -> dict[str, typ.Any]:
    if isinstance(node, ResolvedCategory):
        return {
            "type": "category",
            "label": node.label,
            "collapsed": node.collapsed,
            "items": [_node_manifest(child) for child in node.items],
        }
    return {
        "type": "doc",
        "id": node.document_id,
        "title": node.title,
        "path": node.path,
    }


def _link_manifest(link: ResolvedLink) -> dict[str, typ.Any]:
    return {
        "kind": link.kind,
        "label": link.label,
        "href": link.href,
        "position": link.position.value,
    }


__all__ = ["SiteBuild", "SiteBuilder"]
