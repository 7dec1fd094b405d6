from __future__ import annotations

import json
from pathlib import Path

import pytest

from docsite import cli


def _write_site(tmp_path: Path, *, sidebar_docs: list[str]) -> tuple[Path, Path]:
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "intro.md").write_text("# Intro\n", encoding="utf-8")
    (docs / "setup.md").write_text("# Setup\n", encoding="utf-8")
    entries = "\n".join(f"        - {doc_id}" for doc_id in sidebar_docs)
    config = tmp_path / "site.yaml"
    config.write_text(
        f"""
title: CLI Docs
baseUrl: /
sidebars:
  main:
    - type: category
      label: Basics
      items:
{entries}
themeConfig:
  navbar:
    items:
      - type: docSidebar
        sidebarId: main
        label: Docs
""".strip()
        + "\n",
        encoding="utf-8",
    )
    return config, docs


def test_check_prints_summary(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config, docs = _write_site(tmp_path, sidebar_docs=["intro", "setup"])
    cli.check(config=config, docs_dir=docs)
    out = capsys.readouterr().out
    assert "sidebar main: 2 documents" in out
    assert "navbar: 1 items" in out


def test_check_fails_loudly_on_unknown_document(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config, docs = _write_site(tmp_path, sidebar_docs=["intro", "deploy"])
    with pytest.raises(SystemExit) as exc_info:
        cli.check(config=config, docs_dir=docs)
    assert exc_info.value.code == 1
    err = capsys.readouterr().err
    assert "unknown document 'deploy'" in err
    assert "'main'" in err


def test_check_reports_missing_base_url(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = tmp_path / "site.yaml"
    config.write_text("title: Docs\n", encoding="utf-8")
    with pytest.raises(SystemExit):
        cli.check(config=config, docs_dir=tmp_path)
    assert "baseUrl" in capsys.readouterr().err


def test_build_writes_manifest_and_homepage(tmp_path: Path) -> None:
    config, docs = _write_site(tmp_path, sidebar_docs=["intro", "setup"])
    manifest = tmp_path / "out" / "manifest.json"
    homepage = tmp_path / "out" / "index.html"
    cli.build(config=config, docs_dir=docs, manifest=manifest, homepage=homepage)
    payload = json.loads(manifest.read_text(encoding="utf-8"))
    assert payload["sidebars"]["main"]["order"] == ["intro", "setup"]
    assert homepage.exists()


def test_build_can_skip_homepage(tmp_path: Path) -> None:
    config, docs = _write_site(tmp_path, sidebar_docs=["intro"])
    homepage = tmp_path / "out" / "index.html"
    cli.build(
        config=config,
        docs_dir=docs,
        manifest=tmp_path / "out" / "manifest.json",
        homepage=homepage,
        render_homepage=False,
    )
    assert not homepage.exists()


def test_nav_prints_breadcrumbs_and_pager(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config, docs = _write_site(tmp_path, sidebar_docs=["intro", "setup"])
    cli.nav(sidebar="main", doc="setup", config=config, docs_dir=docs)
    out = capsys.readouterr().out
    assert "breadcrumbs: Basics" in out
    assert "previous: intro" in out
    assert "next: -" in out


def test_nav_rejects_document_outside_sidebar(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config, docs = _write_site(tmp_path, sidebar_docs=["intro"])
    with pytest.raises(SystemExit):
        cli.nav(sidebar="main", doc="setup", config=config, docs_dir=docs)
    assert "not part of sidebar 'main'" in capsys.readouterr().err


@pytest.mark.parametrize(
    "content",
    ["- just\n- a list\n", "title: [unclosed\n"],
    ids=["not-a-mapping", "malformed-yaml"],
)
def test_check_reports_unreadable_declaration(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], content: str
) -> None:
    config = tmp_path / "site.yaml"
    config.write_text(content, encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        cli.check(config=config, docs_dir=tmp_path)
    assert exc_info.value.code == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_check_reports_undecodable_document(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config, docs = _write_site(tmp_path, sidebar_docs=["intro"])
    (docs / "latin.md").write_bytes(b"# Caf\xe9\n")
    with pytest.raises(SystemExit) as exc_info:
        cli.check(config=config, docs_dir=docs)
    assert exc_info.value.code == 1
    assert "not valid UTF-8" in capsys.readouterr().err
