"""Command line interface for docopen."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from docopen import __version__
from docopen.core import (
    HOST,
    BuildConfig,
    CompileKind,
    CompileOptions,
    DocOptions,
    Shell,
    Verbosity,
    find_manifest,
    load_workspace,
)
from docopen.ops import doc


def _verbosity(args: argparse.Namespace) -> Verbosity:
    if args.quiet:
        return Verbosity.QUIET
    if args.verbose:
        return Verbosity.VERBOSE
    return Verbosity.NORMAL


def _target_triple(raw: str) -> str:
    triple = raw.strip()
    if not triple:
        raise argparse.ArgumentTypeError("target triple must not be empty")
    return triple


def _requested_kinds(targets: list[str] | None) -> tuple[CompileKind, ...]:
    if not targets:
        return (HOST,)
    kinds: list[CompileKind] = []
    for triple in targets:
        kind = CompileKind(triple)
        if kind not in kinds:
            kinds.append(kind)
    return tuple(kinds)


def _run_doc(args: argparse.Namespace) -> int:
    shell = Shell(verbosity=_verbosity(args))
    manifest = Path(args.manifest_path) if args.manifest_path else find_manifest(Path.cwd())
    ws = load_workspace(manifest, shell, cwd=Path.cwd())
    options = DocOptions(
        open_result=args.open,
        compile_opts=CompileOptions(
            build_config=BuildConfig(requested_kinds=_requested_kinds(args.target)),
            packages=tuple(args.package or ()),
        ),
    )
    doc(ws, options)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docopen",
        description="docopen CLI: build package documentation and open it in a browser.",
        epilog=(
            "Viewer selection for --open: `doc.browser` config, then the BROWSER environment variable,\n"
            "then the platform default opener."
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"docopen {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    pd = sub.add_parser("doc", help="Build documentation for workspace packages")
    pd.add_argument("--open", action="store_true", help="Open the docs in a browser after building them")
    pd.add_argument(
        "--target",
        action="append",
        default=None,
        type=_target_triple,
        metavar="TRIPLE",
        help="Build docs for the target triple (repeatable; --open accepts only one)",
    )
    pd.add_argument(
        "-p",
        "--package",
        action="append",
        default=None,
        metavar="NAME",
        help="Package to document (repeatable; default: all members)",
    )
    pd.add_argument("--manifest-path", default=None, help="Path to docopen.yaml (default: search upward from cwd)")
    pd.add_argument("-q", "--quiet", action="store_true", help="Do not print status messages")
    pd.add_argument("-v", "--verbose", action="store_true", help="Print verbose status and debug logs")
    pd.set_defaults(func=_run_doc)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    try:
        return int(args.func(args))
    except Exception as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
