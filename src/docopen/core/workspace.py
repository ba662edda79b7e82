"""Workspace manifest loading."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ManifestError
from .settings import Settings, load_settings
from .shell import Shell

MANIFEST_NAME = "docopen.yaml"
DEFAULT_TARGET_DIR = "target"


@dataclass(frozen=True, slots=True)
class Package:
    """One documented package of the workspace."""

    name: str
    root: Path

    @property
    def crate_name(self) -> str:
        return self.name.replace("-", "_")


@dataclass(slots=True)
class Workspace:
    root: Path
    packages: list[Package]
    target_dir: Path
    settings: Settings
    shell: Shell = field(default_factory=Shell)

    def package(self, name: str) -> Package | None:
        for pkg in self.packages:
            if pkg.name == name:
                return pkg
        return None


def find_manifest(cwd: str | Path) -> Path:
    """Find the nearest `docopen.yaml` in `cwd` or its ancestors."""
    start = Path(cwd).resolve()
    for directory in (start, *start.parents):
        candidate = directory / MANIFEST_NAME
        if candidate.is_file():
            return candidate
    raise ManifestError(f"could not find `{MANIFEST_NAME}` in `{start}` or any parent directory")


def _read_manifest(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ManifestError(f"manifest not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
        payload = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ManifestError(f"failed to parse manifest at `{path}`: {exc}") from exc
    if not isinstance(payload, dict):
        raise ManifestError(f"manifest must contain a mapping: {path}")
    return payload


def _parse_packages(raw: Any, root: Path, path: Path) -> list[Package]:
    if not isinstance(raw, list) or not raw:
        raise ManifestError(f"manifest must define a non-empty 'packages' list: {path}")
    packages: list[Package] = []
    names: set[str] = set()
    for idx, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ManifestError(f"package entry at index {idx} must be a mapping")
        name = str(item.get("name") or "").strip()
        if not name:
            raise ManifestError(f"package entry at index {idx} is missing 'name'")
        if name in names:
            raise ManifestError(f"package `{name}` is listed more than once")
        names.add(name)
        packages.append(Package(name=name, root=(root / str(item.get("path", name))).resolve()))
    return packages


def load_workspace(
    manifest_path: str | Path,
    shell: Shell | None = None,
    *,
    env: Mapping[str, str] | None = None,
    home: str | Path | None = None,
    cwd: str | Path | None = None,
) -> Workspace:
    """Load the manifest at `manifest_path` and the config visible from `cwd`."""
    path = Path(manifest_path).resolve()
    payload = _read_manifest(path)
    root = path.parent
    packages = _parse_packages(payload.get("packages"), root, path)
    target_dir = root / str(payload.get("target-dir", DEFAULT_TARGET_DIR))
    settings = load_settings(cwd if cwd is not None else root, home=home, env=env)
    return Workspace(
        root=root,
        packages=packages,
        target_dir=target_dir,
        settings=settings,
        shell=shell or Shell(),
    )
