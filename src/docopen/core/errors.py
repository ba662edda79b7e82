"""Exception types raised by docopen commands."""

from __future__ import annotations


class DocError(RuntimeError):
    """Base class for all docopen failures."""


class CompilationError(DocError):
    """Documentation compilation failed."""


class AmbiguousTargetKind(DocError):
    """More than one target kind was requested where only one is allowed."""


class ConfigError(DocError):
    """A configuration file or value could not be read."""


class ManifestError(DocError):
    """The workspace manifest is missing or malformed."""


class OpenError(DocError):
    """The platform default opener could not open a path."""
