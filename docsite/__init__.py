"""Configuration and content-assembly layer for the documentation site.

The package loads the declarative site description, validates its sidebars,
navbar, footer, and landing-page feature cards against the Markdown docs
tree, and hands an immutable model to renderers.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docsite import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
