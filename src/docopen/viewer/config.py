"""Viewer settings read from the `doc` configuration namespace."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from docopen.core.settings import ProgramInvocation, Settings

NAMESPACE = "doc"


@dataclass(frozen=True, slots=True)
class ResolvedViewer:
    """Concrete program and leading arguments used to open docs."""

    program: Path
    args: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ViewerConfig:
    # Browser to open docs with. When unset, `BROWSER` is consulted.
    browser: ProgramInvocation | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> ViewerConfig:
        item = settings.get(NAMESPACE).get("browser")
        if item is None:
            return cls()
        return cls(browser=ProgramInvocation.from_value(f"{NAMESPACE}.browser", item))

    def resolved_browser(self, settings: Settings) -> ResolvedViewer | None:
        if self.browser is None:
            return None
        return ResolvedViewer(program=self.browser.path.resolve(settings), args=self.browser.args)
