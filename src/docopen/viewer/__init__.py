"""Viewer resolution and launching."""

from .config import ResolvedViewer, ViewerConfig
from .launcher import BROWSER_ENV, LaunchOutcome, browser_from_env, launch, resolve_viewer
from .opener import Opener, SystemOpener

__all__ = [
    "BROWSER_ENV",
    "LaunchOutcome",
    "Opener",
    "ResolvedViewer",
    "SystemOpener",
    "ViewerConfig",
    "browser_from_env",
    "launch",
    "resolve_viewer",
]
