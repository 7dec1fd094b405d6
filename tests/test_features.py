"""Unit tests for the landing-page feature listing builder."""

from __future__ import annotations

import pytest

from docsite.config import FeatureItem, load_declared
from docsite.errors import InvalidPath, InvalidUrl, UnknownDocumentPath
from docsite.features import FeatureListingBuilder
from docsite.links import LinkSurfaceValidator
from docsite.registry import InMemoryContentRegistry


@pytest.fixture
def builder() -> FeatureListingBuilder:
    """Return a builder for a site served from the root."""
    config = load_declared({"title": "Docs", "baseUrl": "/"})
    return FeatureListingBuilder(LinkSurfaceValidator(config, {}))


def _item(title: str, link: str, badge: str | None = None) -> FeatureItem:
    return FeatureItem(
        title=title, icon="🚀", description="Some *text*.", link=link, badge=badge
    )


def test_indices_follow_declaration_order(builder: FeatureListingBuilder) -> None:
    """Cards keep declaration order regardless of badges or titles."""
    items = [
        _item("Zeta", "/docs/z", badge="Core"),
        _item("Alpha", "/docs/a"),
        _item("Mid", "https://example.com/m", badge="Aardvark"),
    ]
    built = builder.build(items)
    assert [(card.index, card.title) for card in built] == [
        (0, "Zeta"),
        (1, "Alpha"),
        (2, "Mid"),
    ]


def test_missing_badge_stays_absent(builder: FeatureListingBuilder) -> None:
    """No placeholder badge is invented."""
    (card,) = builder.build([_item("Intro", "/docs/intro")])
    assert card.badge is None
    assert card.link == "/docs/intro"
    assert not card.external


def test_external_feature_link(builder: FeatureListingBuilder) -> None:
    """http(s) links are accepted and flagged as external."""
    (card,) = builder.build([_item("Out", "https://flutter.dev/docs")])
    assert card.external


def test_description_rendered_to_html(builder: FeatureListingBuilder) -> None:
    """Descriptions are Markdown and rendered for the card body."""
    (card,) = builder.build([_item("Intro", "/docs/intro")])
    assert card.description == "Some *text*."
    assert "<em>text</em>" in card.description_html


@pytest.mark.parametrize(
    ("link", "error"),
    [
        ("docs/intro", InvalidPath),
        ("ftp://example.com/file", InvalidUrl),
        ("javascript:alert(1)", InvalidUrl),
    ],
)
def test_invalid_feature_links(
    builder: FeatureListingBuilder, link: str, error: type[Exception]
) -> None:
    """Feature links obey the same rules as navbar links."""
    with pytest.raises(error):
        builder.build([_item("Bad", link)])


@pytest.fixture
def registry_builder() -> FeatureListingBuilder:
    """Return a builder whose validator knows the registered documents."""
    config = load_declared({"title": "Docs", "baseUrl": "/"})
    registry = InMemoryContentRegistry.from_ids(["intro", "guides/setup"])
    return FeatureListingBuilder(LinkSurfaceValidator(config, {}, registry=registry))


def test_feature_link_to_missing_document_fails(
    registry_builder: FeatureListingBuilder,
) -> None:
    """Links into the docs route must name a registered document."""
    with pytest.raises(UnknownDocumentPath) as exc_info:
        registry_builder.build([_item("Gone", "/docs/does-not-exist")])
    assert exc_info.value.path == "/docs/does-not-exist"
    assert exc_info.value.route_prefix == "/docs/"


@pytest.mark.parametrize(
    "link",
    ["/docs/intro", "/docs/guides/setup/", "/docs/intro#install", "/blog"],
)
def test_feature_links_to_known_targets_pass(
    registry_builder: FeatureListingBuilder, link: str
) -> None:
    """Registered documents and paths outside the docs route are accepted."""
    (card,) = registry_builder.build([_item("Ok", link)])
    assert card.link == link
