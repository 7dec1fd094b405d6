"""Landing page rendering pipeline.

This module turns a validated :class:`~docsite.build.SiteBuild` into the
static landing page: a hero with the site title, tagline, and call-to-action
links, followed by one card per feature item in declaration order. The main
entry point is ``HomePageBuilder``, which loads the Jinja template, injects
the build model, and persists the generated HTML.

Typical usage mirrors the build pipeline:

>>> builder = HomePageBuilder(site, output=Path("index.html"))  # doctest: +SKIP
>>> output_path = builder.run()  # doctest: +SKIP

The builder expects templates to reside under ``docsite/templates`` unless a
custom directory is provided. It relies on Jinja2 with autoescape enabled and
produces UTF-8 encoded files.
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

if typ.TYPE_CHECKING:
    from .build import SiteBuild

DEFAULT_OUTPUT = Path("build/index.html")


class HomePageBuilder:
    """Render the landing page from a validated site build."""

    def __init__(
        self,
        site: SiteBuild,
        *,
        output: Path = DEFAULT_OUTPUT,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        site : SiteBuild
            Validated build supplying site metadata, navbar and footer links,
            call-to-action buttons, and feature cards.
        output : Path, optional
            Where the rendered HTML is written.
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``docsite/templates``.
        """
        self.site = site
        self.output = output
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("home_page.jinja")

    def run(self) -> Path:
        """Render and write the landing page HTML, returning the output path.

        Feature descriptions are pre-rendered Markdown and are marked safe in
        the template; every other value is escaped.
        """
        self.output.parent.mkdir(parents=True, exist_ok=True)
        config = self.site.config
        context = {
            "site": config,
            "links": self.site.links,
            "ctas": self.site.ctas,
            "features": self.site.features,
            "feature_section": config.features,
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        self.output.write_text(html, encoding="utf-8")
        return self.output


__all__ = ["DEFAULT_OUTPUT", "HomePageBuilder"]
