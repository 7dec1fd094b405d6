r"""Content registries answering which documents exist and where they live.

The sidebar resolver only needs two questions answered: does a document id
exist, and what is its title and public path. :class:`ContentRegistry`
captures that contract; :class:`InMemoryContentRegistry` serves tests and
programmatic callers, while :class:`FileContentRegistry` scans a Markdown docs
directory the way the site generator lays documents out.

Example
-------
>>> registry = InMemoryContentRegistry(
...     {"intro": DocumentMetadata(title="Intro", path="/docs/intro")}
... )
>>> registry.exists("intro")
True
>>> registry.metadata("intro").path
'/docs/intro'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ
from pathlib import Path
from urllib.parse import unquote, urlsplit

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import DocumentNotFound, SiteConfigError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

DOC_SUFFIXES = (".md", ".mdx")
FRONT_MATTER_PATTERN = re.compile(r"\A---\s*\n(.*?)\n---\s*(?:\n|\Z)", re.DOTALL)
TITLE_PATTERN = re.compile(r"^#[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$", re.MULTILINE)
FENCE_PATTERN = re.compile(
    r"^[ ]{0,3}(`{3,}|~{3,})[^\n]*\n.*?(?:^[ ]{0,3}\1[ \t]*$|\Z)",
    re.DOTALL | re.MULTILINE,
)
NUMBER_PREFIX_PATTERN = re.compile(r"^\d+[ \t]*[-_.]+[ \t]*(?=[^\d\s])")


@dc.dataclass(frozen=True, slots=True)
class DocumentMetadata:
    """Title and public path of a registered document."""

    title: str
    path: str


class ContentRegistry(typ.Protocol):
    """Read-only lookup of documents by stable id.

    ``route_prefix`` is the URL prefix every document is served under, such as
    ``/docs/``.
    """

    route_prefix: str

    def exists(self, document_id: str) -> bool:
        """Return True when ``document_id`` names a known document."""
        ...

    def metadata(self, document_id: str) -> DocumentMetadata:
        """Return metadata for ``document_id`` or raise DocumentNotFound."""
        ...

    def has_path(self, path: str) -> bool:
        """Return True when a registered document is served at ``path``."""
        ...


class InMemoryContentRegistry:
    """Registry backed by a mapping of document id to metadata."""

    def __init__(
        self,
        documents: cabc.Mapping[str, DocumentMetadata],
        *,
        route_prefix: str = "/docs/",
    ) -> None:
        self._documents = dict(documents)
        self.route_prefix = route_prefix
        self._paths = _path_index(self._documents)

    @classmethod
    def from_ids(
        cls, document_ids: cabc.Iterable[str], *, route_base: str = "/docs/"
    ) -> InMemoryContentRegistry:
        """Build a registry whose titles are the ids themselves."""
        return cls(
            {
                doc_id: DocumentMetadata(title=doc_id, path=f"{route_base}{doc_id}")
                for doc_id in document_ids
            },
            route_prefix=route_base,
        )

    def exists(self, document_id: str) -> bool:
        return document_id in self._documents

    def metadata(self, document_id: str) -> DocumentMetadata:
        try:
            return self._documents[document_id]
        except KeyError as exc:
            raise DocumentNotFound(document_id) from exc

    def has_path(self, path: str) -> bool:
        return _normalize_route(path) in self._paths

    def __len__(self) -> int:
        return len(self._documents)


class FileContentRegistry:
    """Registry built by scanning a directory of Markdown documents.

    Parameters
    ----------
    docs_dir : Path
        Root of the Markdown tree. Document ids are POSIX paths relative to
        this directory, without the file extension.
    base_url : str, optional
        Site base URL that prefixes every document path.
    route_base_path : str, optional
        URL segment under which documents are served (``docs`` by default).

    Notes
    -----
    Numeric ordering prefixes are stripped from every path segment, so
    ``01-basics/02-setup.md`` registers as ``basics/setup``. Front matter may
    override the id (``id``), the title (``title``), and the public path
    (``slug``, when absolute). Without a ``title`` the first level-one heading
    outside fenced code is used. Files whose name starts with an underscore
    are partials and are not registered. The directory is scanned once, on
    construction.
    """

    def __init__(
        self,
        docs_dir: Path,
        *,
        base_url: str = "/",
        route_base_path: str = "docs",
    ) -> None:
        if not docs_dir.is_dir():
            msg = f"Docs directory '{docs_dir}' not found."
            raise FileNotFoundError(msg)
        self.docs_dir = docs_dir
        route = route_base_path.strip("/")
        self.route_prefix = f"{base_url.rstrip('/')}/{route}/" if route else base_url
        self._yaml = YAML(typ="safe")
        self._documents = self._scan()
        self._paths = _path_index(self._documents)
        logger.debug(
            "Registered %d documents from %s", len(self._documents), docs_dir
        )

    def exists(self, document_id: str) -> bool:
        return document_id in self._documents

    def metadata(self, document_id: str) -> DocumentMetadata:
        try:
            return self._documents[document_id]
        except KeyError as exc:
            raise DocumentNotFound(document_id) from exc

    def has_path(self, path: str) -> bool:
        return _normalize_route(path) in self._paths

    def document_ids(self) -> list[str]:
        """Return every registered id, sorted."""
        return sorted(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def _scan(self) -> dict[str, DocumentMetadata]:
        documents: dict[str, DocumentMetadata] = {}
        for path in sorted(self.docs_dir.rglob("*")):
            if path.suffix not in DOC_SUFFIXES or not path.is_file():
                continue
            if path.name.startswith("_"):
                continue
            doc_id, metadata = self._read_document(path)
            if doc_id in documents:
                msg = f"Duplicate document id '{doc_id}' declared by '{path}'."
                raise SiteConfigError(msg)
            documents[doc_id] = metadata
        return documents

    def _read_document(self, path: Path) -> tuple[str, DocumentMetadata]:
        """Return the id and metadata for a single Markdown file."""
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Document '{path}' is not valid UTF-8."
            raise SiteConfigError(msg) from exc
        front_matter, body = self._split_front_matter(text, path)
        relative = Path(
            *(
                _strip_number_prefix(part)
                for part in path.relative_to(self.docs_dir).with_suffix("").parts
            )
        )
        declared_id = _string_field(front_matter, "id")
        if declared_id:
            parent = relative.parent.as_posix()
            doc_id = declared_id if parent == "." else f"{parent}/{declared_id}"
        else:
            doc_id = relative.as_posix()
        title = _string_field(front_matter, "title") or _first_heading(body) or doc_id
        slug = _string_field(front_matter, "slug")
        if slug and slug.startswith("/"):
            public_path = f"{self.route_prefix.rstrip('/')}{slug}"
        else:
            public_path = f"{self.route_prefix}{doc_id}"
        return doc_id, DocumentMetadata(title=title, path=public_path)

    def _split_front_matter(
        self, text: str, path: Path
    ) -> tuple[typ.Mapping[str, typ.Any], str]:
        match = FRONT_MATTER_PATTERN.match(text)
        if not match:
            return {}, text
        try:
            loaded = self._yaml.load(match.group(1)) or {}
        except YAMLError as exc:
            msg = f"Invalid front matter in '{path}'."
            raise SiteConfigError(msg) from exc
        if not isinstance(loaded, dict):
            msg = f"Front matter in '{path}' must be a mapping."
            raise SiteConfigError(msg)
        return loaded, text[match.end() :]


def _string_field(data: typ.Mapping[str, typ.Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _first_heading(body: str) -> str | None:
    """Return the first level-one heading of ``body`` outside fenced code."""
    match = TITLE_PATTERN.search(FENCE_PATTERN.sub("", body))
    return match.group(1).strip() if match else None


def _strip_number_prefix(segment: str) -> str:
    return NUMBER_PREFIX_PATTERN.sub("", segment, count=1)


def _normalize_route(path: str) -> str:
    """Drop query, fragment, and trailing slash so routes compare equal."""
    route = unquote(urlsplit(path).path)
    return route.rstrip("/") or "/"


def _path_index(documents: cabc.Mapping[str, DocumentMetadata]) -> frozenset[str]:
    return frozenset(_normalize_route(meta.path) for meta in documents.values())


__all__ = [
    "ContentRegistry",
    "DocumentMetadata",
    "FileContentRegistry",
    "InMemoryContentRegistry",
]
