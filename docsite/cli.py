"""Cyclopts CLI entrypoint for validating and assembling the documentation site.

The ``docsite`` console script loads the site declaration, checks every
sidebar, navbar, footer, and feature link against the Markdown docs tree, and
can write the renderer manifest and landing page. Typical usage runs
``docsite check`` in CI so a broken sidebar or link fails the pipeline before
the site is built, and ``docsite build`` to emit the artefacts.

Examples
--------
Validate the default configuration:

>>> from docsite.cli import main
>>> main()  # doctest: +SKIP

Show breadcrumbs and previous/next links for a document:

>>> from docsite.cli import app
>>> app(
...     ["nav", "--sidebar", "tutorialSidebar", "--doc", "intro"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from ruamel.yaml.error import YAMLError

from .build import SiteBuild, SiteBuilder
from .config import load_site_config
from .errors import SidebarResolutionError, SiteConfigError
from .homepage import HomePageBuilder
from .registry import FileContentRegistry
from .sidebars import breadcrumbs, pager

DEFAULT_CONFIG = Path("config/site.yaml")
DEFAULT_DOCS_DIR = Path("docs")
DEFAULT_MANIFEST = Path("build/site-manifest.json")
DEFAULT_HOMEPAGE = Path("build/index.html")

app = App(name="docsite", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to the site declaration", env_var="INPUT_CONFIG")
]
DocsDirOption = typ.Annotated[
    Path, Parameter(help="Markdown docs directory", env_var="INPUT_DOCS_DIR")
]
VerboseOption = typ.Annotated[bool, Parameter(help="Enable debug logging")]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _report(exc: Exception) -> typ.NoReturn:
    """Print a configuration error to stderr and exit non-zero."""
    if isinstance(exc, SidebarResolutionError):
        for error in exc.errors:
            print(f"error: {error}", file=sys.stderr)
    else:
        print(f"error: {exc}", file=sys.stderr)
    raise SystemExit(1) from exc


def _validate(config: Path, docs_dir: Path) -> SiteBuild:
    """Load the declaration and validate it against the docs tree."""
    try:
        site_config = load_site_config(config)
        registry = FileContentRegistry(docs_dir, base_url=site_config.base_url)
        return SiteBuilder(registry).build(site_config)
    except (FileNotFoundError, TypeError, YAMLError, SiteConfigError) as exc:
        _report(exc)


@app.command(help="Validate sidebars, links, and feature cards.")
def check(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    docs_dir: DocsDirOption = DEFAULT_DOCS_DIR,
    verbose: VerboseOption = False,
) -> None:
    """Validate the site declaration and print a short summary.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` declaration (overridable via
        ``INPUT_CONFIG``).
    docs_dir : Path, optional
        Root of the Markdown docs tree used as the content registry.
    verbose : bool, optional
        Emit debug logging for each validation stage.

    Raises
    ------
    SystemExit
        With status 1 when any declaration defect is found.
    """
    _configure_logging(verbose=verbose)
    site = _validate(config, docs_dir)
    for sidebar_id, sidebar in site.sidebars.items():
        print(f"sidebar {sidebar_id}: {len(sidebar.documents())} documents")
    navbar_count = len(site.links.leading) + len(site.links.trailing)
    print(f"navbar: {navbar_count} items")
    print(f"footer: {len(site.links.footer_groups)} groups")
    print(f"features: {len(site.features)} cards")


@app.command(help="Validate, then write the renderer manifest and landing page.")
def build(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    docs_dir: DocsDirOption = DEFAULT_DOCS_DIR,
    manifest: typ.Annotated[
        Path, Parameter(help="Where to write the manifest JSON")
    ] = DEFAULT_MANIFEST,
    homepage: typ.Annotated[
        Path, Parameter(help="Where to write the landing page HTML")
    ] = DEFAULT_HOMEPAGE,
    render_homepage: bool = True,
    verbose: VerboseOption = False,
) -> None:
    """Validate the declaration and emit the renderer artefacts.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` declaration.
    docs_dir : Path, optional
        Root of the Markdown docs tree.
    manifest : Path, optional
        Output path for the JSON manifest consumed by renderers.
    homepage : Path, optional
        Output path for the landing page.
    render_homepage : bool, optional
        Render the landing page; disable with ``--no-render-homepage``.
    verbose : bool, optional
        Emit debug logging for each validation stage.
    """
    _configure_logging(verbose=verbose)
    site = _validate(config, docs_dir)
    print(f"wrote {_format_path(site.write_manifest(manifest))}")
    if render_homepage:
        written = HomePageBuilder(site, output=homepage).run()
        print(f"wrote {_format_path(written)}")


@app.command(help="Show breadcrumbs and previous/next links for a document.")
def nav(
    *,
    sidebar: typ.Annotated[str, Parameter(help="Sidebar id")],
    doc: typ.Annotated[str, Parameter(help="Document id")],
    config: ConfigOption = DEFAULT_CONFIG,
    docs_dir: DocsDirOption = DEFAULT_DOCS_DIR,
    verbose: VerboseOption = False,
) -> None:
    """Print where ``doc`` sits within ``sidebar``."""
    _configure_logging(verbose=verbose)
    site = _validate(config, docs_dir)
    resolved = site.sidebars.get(sidebar)
    if resolved is None:
        known = ", ".join(sorted(site.sidebars))
        print(f"error: unknown sidebar '{sidebar}'. Known: {known}", file=sys.stderr)
        raise SystemExit(1)
    try:
        trail = breadcrumbs(resolved, doc)
        links = pager(resolved, doc)
    except SiteConfigError as exc:
        _report(exc)
    print(f"breadcrumbs: {' / '.join(trail) or '(root)'}")
    print(f"previous: {links.previous.document_id if links.previous else '-'}")
    print(f"next: {links.next.document_id if links.next else '-'}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docsite`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
