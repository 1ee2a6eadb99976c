from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List

from .config import DecompileOptions, load_options
from .engine import run_decompile
from .errors import ShaveError
from .report import DecompileReport
from .version import tool_version


def _setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug or os.environ.get("SHAVE_DEBUG") else logging.WARNING
    root = logging.getLogger("shave")
    root.setLevel(level)
    if not root.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        root.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="shave",
        description="Decompile compiled HTMLBars templates back into template source",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Shared arguments for render/report
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "source",
            help="file with the compiled template source, or - for stdin",
        )
        sp.add_argument(
            "--config",
            metavar="FILE",
            help="YAML file with decompile options",
        )
        sp.add_argument(
            "--indent",
            type=int,
            help="spaces per nesting level (default 4)",
        )
        sp.add_argument(
            "--global-path",
            action="append",
            metavar="PATH",
            help="dotted path at which Ember is a pre-existing global (repeatable)",
        )
        sp.add_argument(
            "--require-path",
            action="append",
            metavar="PATH",
            help="dotted path under require(...) that also resolves to Ember (repeatable)",
        )
        sp.add_argument(
            "--debug",
            action="store_true",
            help="log interpreter progress to stderr",
        )

    sp_render = sub.add_parser("render", help="Print the decompiled template")
    add_common(sp_render)

    sp_report = sub.add_parser("report", help="JSON report: revision, format and template")
    add_common(sp_report)

    return p


def _read_source(arg: str) -> str:
    if arg == "-":
        return sys.stdin.read()
    path = Path(arg)
    if not path.is_file():
        raise ShaveError(f"Source file not found: {path}")
    return path.read_text(encoding="utf-8")


def _opts(ns: argparse.Namespace) -> DecompileOptions:
    base = load_options(Path(ns.config)) if ns.config else DecompileOptions()
    if ns.indent is not None and ns.indent < 0:
        raise ShaveError(f"--indent must not be negative, got {ns.indent}")
    return base.merged(
        indent=ns.indent,
        global_paths=ns.global_path,
        require_ember_paths=ns.require_path,
    )


def main(argv: List[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(bool(getattr(ns, "debug", False)))

    try:
        source = _read_source(ns.source)
        result = run_decompile(source, _opts(ns))

        if ns.cmd == "render":
            sys.stdout.write(result.template + "\n")
            return 0

        if ns.cmd == "report":
            report = DecompileReport.from_result(result, source=ns.source)
            sys.stdout.write(report.to_json())
            return 0

    except ShaveError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
