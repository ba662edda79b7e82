from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Sequence

import pytest
import yaml

from docopen.core import Shell, Workspace, load_workspace
from docopen.viewer import Opener


class FakeOpener(Opener):
    """Records launches instead of starting real programs."""

    def __init__(self, spawn_error: BaseException | None = None, default_error: BaseException | None = None) -> None:
        self.spawn_error = spawn_error
        self.default_error = default_error
        self.spawned: list[list[str]] = []
        self.defaults: list[Path] = []

    def spawn(self, program: Path, args: Sequence[str], target: Path) -> None:
        self.spawned.append([str(program), *args, str(target)])
        if self.spawn_error is not None:
            raise self.spawn_error

    def open_default(self, target: Path) -> None:
        self.defaults.append(target)
        if self.default_error is not None:
            raise self.default_error


@pytest.fixture
def fake_opener() -> FakeOpener:
    return FakeOpener()


@pytest.fixture
def make_workspace(tmp_path: Path) -> Callable[..., Workspace]:
    """Create a workspace on disk and load it with an isolated config home."""

    def _make(
        packages: Sequence[str] = ("my-lib",),
        readme: bool = True,
        config: dict[str, Any] | None = None,
        env: dict[str, str] | None = None,
        shell: Shell | None = None,
    ) -> Workspace:
        root = tmp_path / "ws"
        root.mkdir(parents=True, exist_ok=True)
        entries = []
        for name in packages:
            pkg_dir = root / name
            (pkg_dir / "docs").mkdir(parents=True, exist_ok=True)
            if readme:
                (pkg_dir / "README.md").write_text(f"# {name}\n\nSee [guide](docs/guide.md).\n", encoding="utf-8")
            (pkg_dir / "docs" / "guide.md").write_text("# Guide\n\nBack to [readme](../README.md).\n", encoding="utf-8")
            entries.append({"name": name, "path": name})
        (root / "docopen.yaml").write_text(yaml.safe_dump({"packages": entries}), encoding="utf-8")
        if config is not None:
            (root / ".docopen").mkdir(exist_ok=True)
            (root / ".docopen" / "config.yaml").write_text(yaml.safe_dump(config), encoding="utf-8")
        return load_workspace(
            root / "docopen.yaml",
            shell,
            env=env or {},
            home=tmp_path / "home",
        )

    return _make
