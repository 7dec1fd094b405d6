"""End-to-end tests for the site build pipeline.

These tests load a YAML declaration, scan a temporary Markdown docs tree, and
run :class:`docsite.build.SiteBuilder`. They verify stage ordering, the JSON
manifest handed to renderers, and the landing page rendered by
:class:`docsite.homepage.HomePageBuilder`.

Usage
-----
Run ``pytest tests/test_build.py -v``. BeautifulSoup is used to inspect the
rendered HTML.
"""

from __future__ import annotations

import json
import typing as typ

import pytest
from bs4 import BeautifulSoup

from docsite.build import SiteBuild, SiteBuilder
from docsite.config import load_declared, load_site_config
from docsite.errors import (
    InvalidUrl,
    SidebarResolutionError,
    UnknownDocumentPath,
    UnknownSidebar,
)
from docsite.homepage import HomePageBuilder
from docsite.registry import FileContentRegistry, InMemoryContentRegistry

if typ.TYPE_CHECKING:
    from pathlib import Path

SITE_YAML = """
title: Example Docs
tagline: Everything in one place
baseUrl: /
themeConfig:
  navbar:
    title: Example
    items:
      - type: docSidebar
        sidebarId: tutorial
        label: Tutorial
      - to: /blog
        label: Blog
      - type: search
        position: right
      - href: https://github.com/example/docs
        label: GitHub
        position: right
  footer:
    style: dark
    links:
      - title: Docs
        items:
          - label: Intro
            to: /docs/intro
          - label: Upstream
            href: https://example.com/upstream
    copyright: Copyright {year} Example
sidebars:
  tutorial:
    - intro
    - type: category
      label: Getting Started
      items:
        - basics/setup
        - basics/deploy
  reference:
    - intro
features:
  heading: What you will find
  ctas:
    - label: Start reading
      link: /docs/intro
  items:
    - title: Setup
      icon: 🛠️
      description: Install **everything**.
      link: /docs/basics/setup
      badge: Core
    - title: Deploy
      icon: 🚀
      description: Ship it.
      link: /docs/basics/deploy
"""


@pytest.fixture
def site_files(tmp_path: Path) -> tuple[Path, Path]:
    """Write a declaration and matching docs tree; return their paths."""
    docs = tmp_path / "docs"
    (docs / "basics").mkdir(parents=True)
    (docs / "intro.md").write_text("# Introduction\n", encoding="utf-8")
    (docs / "basics" / "setup.md").write_text("# Setup\n", encoding="utf-8")
    (docs / "basics" / "deploy.md").write_text("# Deploy\n", encoding="utf-8")
    config_path = tmp_path / "site.yaml"
    config_path.write_text(SITE_YAML.strip() + "\n", encoding="utf-8")
    return config_path, docs


@pytest.fixture
def site(site_files: tuple[Path, Path]) -> SiteBuild:
    """Return a validated build of the example site."""
    config_path, docs = site_files
    config = load_site_config(config_path)
    return SiteBuilder(FileContentRegistry(docs, base_url=config.base_url)).build(
        config
    )


def test_build_produces_validated_model(site: SiteBuild) -> None:
    """The build exposes resolved sidebars, links, and features."""
    assert list(site.sidebars) == ["tutorial", "reference"]
    assert [link.label for link in site.links.leading] == ["Tutorial", "Blog"]
    assert site.links.leading[0].href == "/docs/intro"
    assert [link.kind for link in site.links.trailing] == ["search", "external"]
    assert [card.title for card in site.features] == ["Setup", "Deploy"]
    assert site.ctas[0].label == "Start reading"
    assert site.ctas[0].href == "/docs/intro"


def test_manifest_carries_navigation(site: SiteBuild, tmp_path: Path) -> None:
    """The manifest records order, breadcrumbs, and pager data per document."""
    path = site.write_manifest(tmp_path / "out" / "manifest.json")
    manifest = json.loads(path.read_text(encoding="utf-8"))
    tutorial = manifest["sidebars"]["tutorial"]
    assert tutorial["order"] == ["intro", "basics/setup", "basics/deploy"]
    assert tutorial["documents"]["basics/setup"] == {
        "title": "Setup",
        "path": "/docs/basics/setup",
        "breadcrumbs": ["Getting Started"],
        "previous": "intro",
        "next": "basics/deploy",
    }
    assert tutorial["items"][1]["type"] == "category"
    assert manifest["site"]["locales"] == ["en"]
    assert manifest["navbar"]["trailing"][0]["kind"] == "search"
    assert manifest["features"]["items"][1]["badge"] is None
    assert manifest["features"]["items"][1]["index"] == 1


def test_sidebar_errors_stop_before_link_validation() -> None:
    """A broken sidebar fails the build even when links are also broken."""
    config = load_declared(
        {
            "title": "Docs",
            "baseUrl": "/",
            "sidebars": {"main": ["intro", "missing"]},
            "themeConfig": {
                "navbar": {"items": [{"href": "ftp://bad.example", "label": "Bad"}]}
            },
        }
    )
    registry = InMemoryContentRegistry.from_ids(["intro"])
    with pytest.raises(SidebarResolutionError) as exc_info:
        SiteBuilder(registry).build(config)
    assert exc_info.value.errors[0].document_id == "missing"


def test_navbar_error_propagates_unchanged() -> None:
    """Link errors reach the caller with their context intact."""
    config = load_declared(
        {
            "title": "Docs",
            "baseUrl": "/",
            "themeConfig": {
                "navbar": {
                    "items": [
                        {"type": "docSidebar", "sidebarId": "ghost", "label": "Ghost"}
                    ]
                }
            },
        }
    )
    with pytest.raises(UnknownSidebar) as exc_info:
        SiteBuilder(InMemoryContentRegistry({})).build(config)
    assert exc_info.value.sidebar_id == "ghost"


def test_feature_error_propagates_unchanged() -> None:
    """Invalid feature links fail the build."""
    config = load_declared(
        {
            "title": "Docs",
            "baseUrl": "/",
            "features": [
                {
                    "title": "FTP",
                    "icon": "📦",
                    "description": "Files.",
                    "link": "ftp://example.com",
                }
            ],
        }
    )
    with pytest.raises(InvalidUrl):
        SiteBuilder(InMemoryContentRegistry({})).build(config)


@pytest.mark.parametrize(
    "features",
    [
        {
            "items": [
                {
                    "title": "Missing",
                    "icon": "❓",
                    "description": "Nowhere.",
                    "link": "/docs/does-not-exist",
                }
            ]
        },
        {"ctas": [{"label": "Start", "link": "/docs/does-not-exist"}]},
    ],
)
def test_links_to_missing_documents_fail_the_build(
    features: dict[str, object],
) -> None:
    """Feature cards and calls to action must point at registered documents."""
    config = load_declared({"title": "Docs", "baseUrl": "/", "features": features})
    registry = InMemoryContentRegistry.from_ids(["intro"])
    with pytest.raises(UnknownDocumentPath) as exc_info:
        SiteBuilder(registry).build(config)
    assert exc_info.value.path == "/docs/does-not-exist"


def test_homepage_renders_cards_in_order(site: SiteBuild, tmp_path: Path) -> None:
    """The landing page shows one card per feature, badges only when set."""
    output = HomePageBuilder(site, output=tmp_path / "public" / "index.html").run()
    soup = BeautifulSoup(output.read_text(encoding="utf-8"), "html.parser")
    cards = soup.select("[data-test='feature-card']")
    assert [card.get("data-index") for card in cards] == ["0", "1"]
    assert [card.get("href") for card in cards] == [
        "/docs/basics/setup",
        "/docs/basics/deploy",
    ]
    assert cards[0].select_one("[data-test='feature-badge']") is not None
    assert cards[1].select_one("[data-test='feature-badge']") is None
    assert cards[0].select_one("strong") is not None
    assert soup.select_one("h1").get_text(strip=True) == "Example Docs"
    assert len(soup.select("[data-test='navbar-search']")) == 1
    footer_links = soup.select("[data-test='footer-group'] a")
    assert [link.get("href") for link in footer_links] == [
        "/docs/intro",
        "https://example.com/upstream",
    ]
