"""Sidebar declaration builders."""

from __future__ import annotations

import typing as typ
from types import MappingProxyType

from docsite.errors import SiteConfigError

from .helpers import _as_list, _as_mapping, _optional_str
from .models import Category, DocRef, SidebarNode, SidebarTree


def _build_sidebars(
    payload: typ.Mapping[str, typ.Any] | None,
) -> typ.Mapping[str, SidebarTree]:
    """Build every named sidebar, keeping declaration order."""
    sidebars: dict[str, SidebarTree] = {}
    for sidebar_id, entries in _as_mapping(payload, context="'sidebars'").items():
        key = str(sidebar_id)
        items = _build_nodes(entries, sidebar_id=key)
        sidebars[key] = SidebarTree(sidebar_id=key, items=items)
    return MappingProxyType(sidebars)


def _build_nodes(entries: object, *, sidebar_id: str) -> tuple[SidebarNode, ...]:
    """Build the ordered nodes of one sidebar level."""
    context = f"Sidebar '{sidebar_id}' items"
    return tuple(
        _build_node(entry, sidebar_id=sidebar_id)
        for entry in _as_list(entries, context=context)
    )


def _build_node(entry: object, *, sidebar_id: str) -> SidebarNode:
    """Build a single sidebar node from a string or mapping declaration."""
    match entry:
        case str() as document_id if document_id.strip():
            return DocRef(document_id=document_id.strip())
        case {"type": "doc", "id": document_id} if _optional_str(document_id):
            return DocRef(document_id=str(document_id).strip())
        case {"type": "category", "label": label, **rest} if _optional_str(label):
            return Category(
                label=str(label),
                items=_build_nodes(rest.get("items"), sidebar_id=sidebar_id),
                collapsed=bool(rest.get("collapsed", True)),
            )
        case _:
            msg = (
                f"Sidebar '{sidebar_id}' entries must be document ids, "
                f"'doc' mappings with an 'id', or 'category' mappings with a "
                f"'label'; got {entry!r}."
            )
            raise SiteConfigError(msg)


__all__ = ["_build_node", "_build_nodes", "_build_sidebars"]
