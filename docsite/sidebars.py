"""Resolve declared sidebars against the content registry.

Resolution turns each :class:`~docsite.config.SidebarTree` into a
:class:`ResolvedSidebar` whose leaves carry registry metadata. A single tree
resolves fail-fast: the first unknown document aborts it and nothing partial
is returned. :meth:`SidebarResolver.resolve_all` resolves every tree
independently and raises one :class:`~docsite.errors.SidebarResolutionError`
listing the failure of each broken tree.

Derived navigation (linear reading order, breadcrumbs, previous/next links)
is computed from the resolved structure only.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from types import MappingProxyType

from .config.models import Category, DocRef, SidebarNode, SidebarTree
from .errors import NotInTree, SidebarResolutionError, UnknownDocument

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .registry import ContentRegistry

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class ResolvedDoc:
    """Sidebar leaf backed by an existing document."""

    document_id: str
    title: str
    path: str


@dc.dataclass(frozen=True, slots=True)
class ResolvedCategory:
    """Sidebar group whose children all resolved."""

    label: str
    items: tuple[ResolvedNode, ...]
    collapsed: bool = True


ResolvedNode = ResolvedDoc | ResolvedCategory


@dc.dataclass(frozen=True, slots=True)
class PagerLinks:
    """Previous and next documents in a sidebar's reading order."""

    previous: ResolvedDoc | None
    next: ResolvedDoc | None


@dc.dataclass(frozen=True, slots=True)
class ResolvedSidebar:
    """A sidebar whose every document reference exists."""

    sidebar_id: str
    items: tuple[ResolvedNode, ...]

    def documents(self) -> tuple[ResolvedDoc, ...]:
        """Return the navigable leaves in depth-first declaration order."""
        return tuple(_iter_docs(self.items))

    @property
    def first_document(self) -> ResolvedDoc | None:
        """Return the document a link to this sidebar opens, if any."""
        return next(_iter_docs(self.items), None)


class SidebarResolver:
    """Validate sidebars against a :class:`~docsite.registry.ContentRegistry`."""

    def __init__(self, registry: ContentRegistry) -> None:
        self.registry = registry

    def resolve(self, tree: SidebarTree) -> ResolvedSidebar:
        """Resolve ``tree`` depth-first, failing on the first unknown document.

        Raises
        ------
        UnknownDocument
            When a :class:`DocRef` names a document the registry lacks.
        """
        items = tuple(self._resolve_node(node, tree.sidebar_id) for node in tree.items)
        logger.debug("Resolved sidebar '%s'", tree.sidebar_id)
        return ResolvedSidebar(sidebar_id=tree.sidebar_id, items=items)

    def resolve_all(
        self, trees: cabc.Mapping[str, SidebarTree]
    ) -> cabc.Mapping[str, ResolvedSidebar]:
        """Resolve every tree, then fail if any of them failed.

        Each tree resolves independently, so a broken tree does not hide
        errors in the trees declared after it.
        """
        resolved: dict[str, ResolvedSidebar] = {}
        errors: list[UnknownDocument] = []
        for sidebar_id, tree in trees.items():
            try:
                resolved[sidebar_id] = self.resolve(tree)
            except UnknownDocument as exc:
                logger.debug("Sidebar '%s' failed: %s", sidebar_id, exc)
                errors.append(exc)
        if errors:
            raise SidebarResolutionError(errors)
        return MappingProxyType(resolved)

    def _resolve_node(self, node: SidebarNode, sidebar_id: str) -> ResolvedNode:
        match node:
            case DocRef(document_id=document_id):
                if not self.registry.exists(document_id):
                    raise UnknownDocument(document_id, sidebar_id)
                meta = self.registry.metadata(document_id)
                return ResolvedDoc(
                    document_id=document_id, title=meta.title, path=meta.path
                )
            case Category(label=label, items=children, collapsed=collapsed):
                return ResolvedCategory(
                    label=label,
                    items=tuple(
                        self._resolve_node(child, sidebar_id) for child in children
                    ),
                    collapsed=collapsed,
                )
            case _:  # pragma: no cover - exhaustive over SidebarNode
                msg = f"Unsupported sidebar node {node!r}."
                raise TypeError(msg)


def flatten(sidebar: ResolvedSidebar) -> tuple[str, ...]:
    """Return the document ids of ``sidebar`` in depth-first reading order.

    Categories are not navigable and contribute only their children.
    """
    return tuple(doc.document_id for doc in _iter_docs(sidebar.items))


def breadcrumbs(sidebar: ResolvedSidebar, document_id: str) -> tuple[str, ...]:
    """Return enclosing category labels, root first, for ``document_id``.

    The first occurrence wins when a document appears more than once.

    Raises
    ------
    NotInTree
        When ``document_id`` is not a leaf of ``sidebar``.
    """
    trail = _find_trail(sidebar.items, document_id)
    if trail is None:
        raise NotInTree(document_id, sidebar.sidebar_id)
    return trail


def pager(sidebar: ResolvedSidebar, document_id: str) -> PagerLinks:
    """Return the previous and next documents around ``document_id``.

    Raises
    ------
    NotInTree
        When ``document_id`` is not a leaf of ``sidebar``.
    """
    docs = sidebar.documents()
    for index, doc in enumerate(docs):
        if doc.document_id == document_id:
            return PagerLinks(
                previous=docs[index - 1] if index > 0 else None,
                next=docs[index + 1] if index + 1 < len(docs) else None,
            )
    raise NotInTree(document_id, sidebar.sidebar_id)


def _iter_docs(nodes: cabc.Iterable[ResolvedNode]) -> cabc.Iterator[ResolvedDoc]:
    for node in nodes:
        if isinstance(node, ResolvedCategory):
            yield from _iter_docs(node.items)
        else:
            yield node


def _find_trail(
    nodes: cabc.Iterable[ResolvedNode], document_id: str
) -> tuple[str, ...] | None:
    for node in nodes:
        if isinstance(node, ResolvedCategory):
            trail = _find_trail(node.items, document_id)
            if trail is not None:
                return (node.label, *trail)
        elif node.document_id == document_id:
            return ()
    return None


__all__ = [
    "PagerLinks",
    "ResolvedCategory",
    "ResolvedDoc",
    "ResolvedNode",
    "ResolvedSidebar",
    "SidebarResolver",
    "breadcrumbs",
    "flatten",
    "pager",
]
