"""Pick a viewer for generated docs and launch it.

The viewer is chosen from, in order: the configured `doc.browser`, the
`BROWSER` environment variable, and the platform default opener. Failures
to launch are reported as warnings and never raised.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping

from docopen.core.errors import OpenError
from docopen.core.shell import Shell, display_warning_with_error

from .config import ResolvedViewer
from .opener import Opener, SystemOpener

logger = logging.getLogger(__name__)

BROWSER_ENV = "BROWSER"

ViewerProvider = Callable[[], ResolvedViewer | None]


@dataclass(frozen=True, slots=True)
class LaunchOutcome:
    """What happened when opening docs; `viewer=None` is the default opener."""

    viewer: ResolvedViewer | None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def browser_from_env(env: Mapping[str, str]) -> ResolvedViewer | None:
    value = env.get(BROWSER_ENV)
    if not value:
        return None
    return ResolvedViewer(program=Path(value))


def resolve_viewer(configured: ResolvedViewer | None, env: Mapping[str, str]) -> ResolvedViewer | None:
    """Return the first viewer offered by the provider chain, if any."""
    providers: tuple[ViewerProvider, ...] = (
        lambda: configured,
        lambda: browser_from_env(env),
    )
    for provider in providers:
        viewer = provider()
        if viewer is not None:
            return viewer
    return None


def _open(path: Path, viewer: ResolvedViewer | None, opener: Opener) -> LaunchOutcome:
    if viewer is None:
        try:
            opener.open_default(path)
        except OpenError as exc:
            return LaunchOutcome(viewer=None, error=exc)
        return LaunchOutcome(viewer=None)

    try:
        opener.spawn(viewer.program, viewer.args, path)
    except (OSError, ValueError, subprocess.SubprocessError) as exc:
        return LaunchOutcome(viewer=viewer, error=exc)
    return LaunchOutcome(viewer=viewer)


def _report(outcome: LaunchOutcome, shell: Shell) -> None:
    if outcome.ok:
        return
    if outcome.viewer is None:
        display_warning_with_error("couldn't open docs", outcome.error, shell)
    else:
        shell.warn(f"Couldn't open docs with {outcome.viewer.program}: {outcome.error}")


def launch(
    path: str | Path,
    configured: ResolvedViewer | None,
    shell: Shell,
    *,
    env: Mapping[str, str] | None = None,
    opener: Opener | None = None,
) -> None:
    """Open `path` in a viewer, turning any failure into a warning."""
    viewer = resolve_viewer(configured, os.environ if env is None else env)
    if viewer is not None:
        shell.verbose("Running", " ".join([str(viewer.program), *viewer.args, str(path)]))
    logger.debug("opening %s with %s", path, viewer.program if viewer else "platform default opener")
    outcome = _open(Path(path), viewer, opener or SystemOpener())
    _report(outcome, shell)
