"""Option models for the doc command and its compilation step."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .errors import AmbiguousTargetKind


@dataclass(frozen=True, slots=True)
class CompileKind:
    """Target kind of a build; `triple=None` is the host."""

    triple: str | None = None

    @property
    def is_host(self) -> bool:
        return self.triple is None

    def output_root(self, target_dir: Path) -> Path:
        """Directory holding every artifact built for this kind."""
        if self.triple is None:
            return target_dir
        return target_dir / self.triple

    def __str__(self) -> str:
        return self.triple or "host"


HOST = CompileKind()


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Build-wide settings shared by every compiled package."""

    requested_kinds: tuple[CompileKind, ...] = (HOST,)

    def single_requested_kind(self) -> CompileKind:
        if len(self.requested_kinds) != 1:
            raise AmbiguousTargetKind("only one `--target` argument is supported")
        return self.requested_kinds[0]


@dataclass(frozen=True, slots=True)
class CompileOptions:
    """Options passed through to the documentation compiler."""

    build_config: BuildConfig = field(default_factory=BuildConfig)
    packages: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DocOptions:
    """Options for the `doc` command."""

    # Whether to open the generated index after compiling.
    open_result: bool = False
    compile_opts: CompileOptions = field(default_factory=CompileOptions)
