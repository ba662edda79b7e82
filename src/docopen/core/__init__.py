"""Core models, configuration and output handling."""

from .config import HOST, BuildConfig, CompileKind, CompileOptions, DocOptions
from .errors import (
    AmbiguousTargetKind,
    CompilationError,
    ConfigError,
    DocError,
    ManifestError,
    OpenError,
)
from .settings import ProgramInvocation, ProgramPath, Settings, load_settings
from .shell import Shell, Verbosity, display_warning_with_error
from .workspace import Package, Workspace, find_manifest, load_workspace

__all__ = [
    "HOST",
    "BuildConfig",
    "CompileKind",
    "CompileOptions",
    "DocOptions",
    "DocError",
    "CompilationError",
    "AmbiguousTargetKind",
    "ConfigError",
    "ManifestError",
    "OpenError",
    "ProgramInvocation",
    "ProgramPath",
    "Settings",
    "load_settings",
    "Shell",
    "Verbosity",
    "display_warning_with_error",
    "Package",
    "Workspace",
    "find_manifest",
    "load_workspace",
]
