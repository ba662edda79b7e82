"""The `doc` command: build documentation and optionally open it."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from docopen.core.config import DocOptions
from docopen.core.workspace import Workspace
from docopen.docsgen import compile_docs
from docopen.viewer import Opener, ViewerConfig, launch


def doc_index_path(root_output: Path, crate_name: str) -> Path:
    return root_output / "doc" / crate_name / "index.html"


def doc(
    ws: Workspace,
    options: DocOptions,
    *,
    env: Mapping[str, str] | None = None,
    opener: Opener | None = None,
) -> None:
    """Compile docs for `ws`; open the first crate's index when requested.

    Failing to open the docs is only a warning. A missing index (nothing
    browsable for this target) is not reported at all.
    """
    compilation = compile_docs(ws, options.compile_opts)

    if not options.open_result:
        return

    name = compilation.root_crate_names[0]
    kind = options.compile_opts.build_config.single_requested_kind()
    path = doc_index_path(compilation.root_output[kind], name)
    if not path.exists():
        return

    configured = ViewerConfig.from_settings(ws.settings).resolved_browser(ws.settings)
    ws.shell.status("Opening", path)
    launch(path, configured, ws.shell, env=env, opener=opener)
