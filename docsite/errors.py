"""Error taxonomy raised while loading and validating the site declaration.

Every error is a build-time defect in the static declaration: none are
retried. Each carries the identifiers needed to locate the defect as
attributes so callers can report it without inspecting internals.
"""

from __future__ import annotations

import typing as typ


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class MissingRequiredField(SiteConfigError):
    """A required top-level field is absent from the declaration."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Site configuration requires '{field_name}'.")


class UnknownDocument(SiteConfigError):
    """A sidebar references a document id the registry does not know."""

    def __init__(self, document_id: str, sidebar_id: str) -> None:
        self.document_id = document_id
        self.sidebar_id = sidebar_id
        super().__init__(
            f"Sidebar '{sidebar_id}' references unknown document '{document_id}'."
        )


class UnknownSidebar(SiteConfigError):
    """A navbar entry references a sidebar id that was never declared."""

    def __init__(self, sidebar_id: str, label: str | None = None) -> None:
        self.sidebar_id = sidebar_id
        self.label = label
        where = f" (link '{label}')" if label else ""
        super().__init__(f"Unknown sidebar '{sidebar_id}'{where}.")


class InvalidPath(SiteConfigError):
    """An internal path is relative or lives outside the site base URL."""

    def __init__(self, path: str, base_url: str) -> None:
        self.path = path
        self.base_url = base_url
        super().__init__(
            f"Path '{path}' must be absolute and start with base URL '{base_url}'."
        )


class UnknownDocumentPath(InvalidPath):
    """An internal link under the docs route matches no registered document."""

    def __init__(self, path: str, base_url: str, route_prefix: str) -> None:
        self.path = path
        self.base_url = base_url
        self.route_prefix = route_prefix
        SiteConfigError.__init__(
            self,
            f"Path '{path}' does not match any document under '{route_prefix}'.",
        )


class InvalidUrl(SiteConfigError):
    """An external link is not a well-formed http(s) URL."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"External link '{url}' must be an http or https URL.")


class NotInTree(SiteConfigError, LookupError):
    """A document was looked up in a sidebar it does not belong to."""

    def __init__(self, document_id: str, sidebar_id: str) -> None:
        self.document_id = document_id
        self.sidebar_id = sidebar_id
        super().__init__(
            f"Document '{document_id}' is not part of sidebar '{sidebar_id}'."
        )


class SidebarResolutionError(SiteConfigError):
    """One or more sidebars failed to resolve.

    ``errors`` holds the first failure of every broken sidebar, in sidebar
    declaration order, exactly as raised by the resolver.
    """

    def __init__(self, errors: typ.Sequence[UnknownDocument]) -> None:
        self.errors = tuple(errors)
        details = "; ".join(str(error) for error in self.errors)
        super().__init__(f"{len(self.errors)} sidebar(s) failed to resolve: {details}")


class DocumentNotFound(LookupError):
    """Raised by a content registry when asked for an unknown document."""

    def __init__(self, document_id: str) -> None:
        self.document_id = document_id
        super().__init__(f"No document with id '{document_id}'.")


__all__ = [
    "DocumentNotFound",
    "InvalidPath",
    "InvalidUrl",
    "MissingRequiredField",
    "NotInTree",
    "SidebarResolutionError",
    "SiteConfigError",
    "UnknownDocument",
    "UnknownDocumentPath",
    "UnknownSidebar",
]
