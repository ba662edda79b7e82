"""Process-level capability for opening files in an external viewer."""

from __future__ import annotations

import os
import platform
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from docopen.core.errors import OpenError


class Opener(ABC):
    """Launches viewers; swapped for a fake in tests."""

    @abstractmethod
    def spawn(self, program: Path, args: Sequence[str], target: Path) -> None:
        """Run `program *args target` and wait for it.

        Raises `OSError` when the program cannot be started, `ValueError`
        for an unusable argument vector and `subprocess.SubprocessError`
        when it exits unsuccessfully.
        """

    @abstractmethod
    def open_default(self, target: Path) -> None:
        """Open `target` with the platform's associated application.

        Raises `OpenError` on failure.
        """


class SystemOpener(Opener):
    """Opener backed by `subprocess` and the platform default handler."""

    def spawn(self, program: Path, args: Sequence[str], target: Path) -> None:
        subprocess.run([str(program), *args, str(target)], check=True)

    def open_default(self, target: Path) -> None:
        system = platform.system().lower()
        try:
            if system == "darwin":
                command = ["open", str(target)]
            elif system == "linux":
                command = ["xdg-open", str(target)]
            elif system == "windows":
                os.startfile(str(target))  # type: ignore[attr-defined]
                return
            else:
                raise OpenError(f"unsupported platform for auto-open: {system}")
            subprocess.run(
                command,
                check=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except (OSError, ValueError, subprocess.SubprocessError) as exc:
            raise OpenError(f"failed to open {target}") from exc
