"""Render package Markdown sources into browsable HTML documentation.

References:
- Markdown syntax and extensions: https://python-markdown.github.io/
"""

from __future__ import annotations

import html
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

import markdown

from docopen.core.config import CompileKind, CompileOptions
from docopen.core.errors import CompilationError
from docopen.core.workspace import Package, Workspace

logger = logging.getLogger(__name__)

LOCAL_MD_LINK_RE = re.compile(r'href="([^":#]+)\.md(#[^"]*)?"')
INDEX_SOURCE = "README.md"
INDEX_PAGE = "index.html"


@dataclass(slots=True)
class Compilation:
    """Result of a documentation build."""

    root_crate_names: list[str]
    root_output: dict[CompileKind, Path]


@dataclass(slots=True)
class _RenderedPage:
    source: Path
    title: str
    body_html: str
    out_html: Path


def _discover_sources(root: Path) -> list[Path]:
    sources = [root / INDEX_SOURCE]
    sources.extend(sorted((root / "docs").glob("*.md")))
    return [p for p in sources if p.is_file()]


def _read_title(markdown_text: str, fallback: str) -> str:
    for line in markdown_text.splitlines():
        if line.startswith("# "):
            return line[2:].strip()
    return fallback


def _page_name(rel: Path) -> Path:
    if rel.as_posix() == INDEX_SOURCE:
        return Path(INDEX_PAGE)
    return rel.with_suffix(".html")


def _rewrite_links(raw_html: str) -> str:
    def replace_local(m: re.Match[str]) -> str:
        base = m.group(1)
        frag = m.group(2) or ""
        if base.startswith("http://") or base.startswith("https://"):
            return m.group(0)
        head, _, name = base.rpartition("/")
        if name == "README":
            base = f"{head}/index" if head else "index"
        return f'href="{base}.html{frag}"'

    return LOCAL_MD_LINK_RE.sub(replace_local, raw_html)


def _render_markdown(markdown_text: str) -> str:
    rendered = markdown.markdown(
        markdown_text,
        extensions=["fenced_code", "tables", "toc", "sane_lists", "admonition", "attr_list"],
        output_format="html5",
    )
    return _rewrite_links(rendered)


def _render_page_template(crate: str, nav_html: str, body_html: str, page_title: str) -> str:
    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{html.escape(page_title)} - {html.escape(crate)}</title>
  <style>
    body {{ margin: 0; font-family: ui-sans-serif, -apple-system, Segoe UI, Helvetica, Arial, sans-serif; color: #0f172a; }}
    .layout {{ display: grid; grid-template-columns: 240px minmax(0, 1fr); min-height: 100vh; }}
    nav {{ border-right: 1px solid #dbe3ef; background: #f8fbff; padding: 20px 16px; }}
    nav a {{ display: block; color: #0b4ea2; text-decoration: none; padding: 4px 0; }}
    main {{ padding: 28px 32px 48px; max-width: 1060px; }}
    pre {{ background: #0b1b33; color: #eef6ff; padding: 14px; border-radius: 8px; overflow: auto; }}
    table {{ border-collapse: collapse; }}
    th, td {{ border: 1px solid #dbe3ef; padding: 6px 10px; }}
  </style>
</head>
<body>
  <div class="layout">
    <nav>
      <h1>{html.escape(crate)}</h1>
      {nav_html}
    </nav>
    <main>
      {body_html}
    </main>
  </div>
</body>
</html>
"""


def _build_nav(pages: list[_RenderedPage], current_html: Path) -> str:
    items = []
    for page in pages:
        href = os.path.relpath(page.out_html, start=current_html.parent).replace("\\", "/")
        items.append(f'<a href="{href}">{html.escape(page.title)}</a>')
    return "\n".join(items)


def _document_package(pkg: Package, doc_dir: Path) -> list[Path]:
    sources = _discover_sources(pkg.root)
    if not sources:
        raise CompilationError(f"no markdown sources found for package `{pkg.name}` in {pkg.root}")

    pages: list[_RenderedPage] = []
    try:
        for source in sources:
            rel = source.relative_to(pkg.root)
            text = source.read_text(encoding="utf-8")
            pages.append(
                _RenderedPage(
                    source=source,
                    title=_read_title(text, rel.stem),
                    body_html=_render_markdown(text),
                    out_html=doc_dir / _page_name(rel),
                )
            )
        for page in pages:
            page.out_html.parent.mkdir(parents=True, exist_ok=True)
            page.out_html.write_text(
                _render_page_template(
                    crate=pkg.crate_name,
                    nav_html=_build_nav(pages, page.out_html),
                    body_html=page.body_html,
                    page_title=page.title,
                ),
                encoding="utf-8",
            )
    except (OSError, UnicodeDecodeError) as exc:
        raise CompilationError(f"could not document `{pkg.name}`: {exc}") from exc

    logger.debug("documented %s: %d pages in %s", pkg.name, len(pages), doc_dir)
    return [p.out_html for p in pages]


def _select_packages(ws: Workspace, names: tuple[str, ...]) -> list[Package]:
    if not names:
        return list(ws.packages)
    selected: list[Package] = []
    for name in names:
        pkg = ws.package(name)
        if pkg is None:
            raise CompilationError(f"package `{name}` not found in workspace `{ws.root}`")
        if pkg not in selected:
            selected.append(pkg)
    return selected


def compile_docs(ws: Workspace, compile_opts: CompileOptions) -> Compilation:
    """Build HTML docs for the selected packages and every requested kind.

    Output for a package lands in `<kind root>/doc/<crate_name>/`, with the
    package's README rendered as `index.html`.
    """
    kinds = compile_opts.build_config.requested_kinds
    if not kinds:
        raise CompilationError("no target kinds were requested")
    selected = _select_packages(ws, compile_opts.packages)

    root_output: dict[CompileKind, Path] = {}
    for kind in kinds:
        out_root = kind.output_root(ws.target_dir)
        root_output[kind] = out_root
        for pkg in selected:
            ws.shell.status("Documenting", f"{pkg.name} ({pkg.root})")
            _document_package(pkg, out_root / "doc" / pkg.crate_name)

    ws.shell.status("Finished", f"documentation for {len(selected)} package(s) in {ws.target_dir}")
    return Compilation(
        root_crate_names=[pkg.crate_name for pkg in selected],
        root_output=root_output,
    )
