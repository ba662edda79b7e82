"""Module entrypoint for `python -m docopen`."""

from __future__ import annotations

from docopen.cli.main import main


if __name__ == "__main__":
    raise SystemExit(main())
