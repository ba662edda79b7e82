"""Layered user configuration.

Config files live in a `.docopen` directory as `config.yaml`, `config.yml`
or `config.json`. Files are collected from the home config directory and
from the current directory and each of its ancestors; deeper files win over
shallower ones and over the home file. Environment variables of the form
`DOCOPEN_<NAMESPACE>_<KEY>` win over every file.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR = ".docopen"
CONFIG_NAMES = ("config.yaml", "config.yml", "config.json")
ENV_PREFIX = "DOCOPEN_"
HOME_ENV = "DOCOPEN_HOME"


@dataclass(frozen=True, slots=True)
class Definition:
    """Where a configuration value came from."""

    path: Path | None = None
    env_key: str | None = None

    def root(self, cwd: Path) -> Path:
        """Directory that relative paths in this value are resolved against."""
        if self.path is None:
            return cwd
        # <root>/.docopen/config.yaml
        return self.path.parent.parent

    def __str__(self) -> str:
        if self.path is not None:
            return str(self.path)
        return f"environment variable `{self.env_key}`"


@dataclass(frozen=True, slots=True)
class ConfigValue:
    value: Any
    definition: Definition


@dataclass(frozen=True, slots=True)
class ProgramPath:
    """A program reference from configuration, not yet resolved."""

    value: str
    definition: Definition = field(default_factory=Definition)

    def resolve(self, settings: Settings) -> Path:
        """Resolve to an executable path.

        Values that look like paths are taken relative to the directory the
        value was defined for; bare names are left for `PATH` lookup.
        """
        separators = ("/", "\\") if os.name == "nt" else ("/",)
        if any(sep in self.value for sep in separators):
            return self.definition.root(settings.cwd) / self.value
        return Path(self.value)


@dataclass(frozen=True, slots=True)
class ProgramInvocation:
    """A program plus the leading arguments it is always called with."""

    path: ProgramPath
    args: tuple[str, ...] = ()

    @classmethod
    def from_value(cls, key: str, item: ConfigValue) -> ProgramInvocation:
        """Parse a string (split on whitespace) or a list of strings."""
        raw = item.value
        if isinstance(raw, str):
            parts = raw.split()
        elif isinstance(raw, list) and all(isinstance(x, str) for x in raw):
            parts = list(raw)
        else:
            raise ConfigError(
                f"invalid configuration for key `{key}`: expected a string or array of strings, "
                f"found {type(raw).__name__} (defined in {item.definition})"
            )
        if not parts:
            raise ConfigError(f"configuration key `{key}` must not be empty (defined in {item.definition})")
        return cls(path=ProgramPath(parts[0], item.definition), args=tuple(parts[1:]))


def _env_part(name: str) -> str:
    return name.upper().replace("-", "_").replace(".", "_")


def _load_file(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text) or {}
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"could not load config file {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"config file must contain a mapping: {path}")
    return payload


def _config_file_in(config_dir: Path) -> Path | None:
    for name in CONFIG_NAMES:
        candidate = config_dir / name
        if candidate.is_file():
            return candidate
    return None


def home_config_dir(env: Mapping[str, str] | None = None) -> Path:
    environ = os.environ if env is None else env
    override = environ.get(HOME_ENV)
    if override:
        return Path(override)
    return Path.home() / CONFIG_DIR


@dataclass(slots=True)
class Settings:
    """Merged configuration for one command run."""

    cwd: Path
    # Lowest precedence first.
    layers: list[tuple[Path, dict[str, Any]]] = field(default_factory=list)
    env: Mapping[str, str] = field(default_factory=dict)

    def get(self, namespace: str) -> dict[str, ConfigValue]:
        """Return every key of `namespace` with the definition that won."""
        merged: dict[str, ConfigValue] = {}
        for path, data in self.layers:
            section = data.get(namespace)
            if section is None:
                continue
            if not isinstance(section, dict):
                raise ConfigError(
                    f"expected a table for `{namespace}` in {path}, found {type(section).__name__}"
                )
            for key, value in section.items():
                merged[str(key)] = ConfigValue(value, Definition(path=path))

        prefix = f"{ENV_PREFIX}{_env_part(namespace)}_"
        for name, value in self.env.items():
            if name.startswith(prefix) and len(name) > len(prefix):
                key = name[len(prefix):].lower().replace("_", "-")
                merged[key] = ConfigValue(value, Definition(env_key=name))
        return merged


def load_settings(
    cwd: str | Path,
    *,
    home: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Discover and load config files visible from `cwd`."""
    environ = dict(os.environ if env is None else env)
    cwd_path = Path(cwd).resolve()
    home_dir = Path(home) if home is not None else home_config_dir(environ)

    candidates: list[Path] = []
    home_file = _config_file_in(home_dir)
    if home_file is not None:
        candidates.append(home_file)
    for directory in reversed((cwd_path, *cwd_path.parents)):
        found = _config_file_in(directory / CONFIG_DIR)
        if found is not None:
            candidates.append(found)

    layers: list[tuple[Path, dict[str, Any]]] = []
    seen: set[Path] = set()
    for candidate in candidates:
        resolved = candidate.resolve()
        if resolved in seen:
            continue
        seen.add(resolved)
        logger.debug("loading config file %s", candidate)
        layers.append((candidate, _load_file(candidate)))

    return Settings(cwd=cwd_path, layers=layers, env=environ)
