from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from .config import DEFAULT_CFG_FILE, CompilerOptions, load_options
from .errors import StacheUserError
from .template import TemplateCompiler, iter_directives, strip_comments
from .template.serialize import directive_to_data, to_data, to_json
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stache",
        description="Compile mustache-in-markup templates to a JSON AST",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--verbose", action="store_true", help="debug logging to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_source(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("source", help="template file, or - to read from stdin")

    sp_compile = sub.add_parser("compile", help="Compile a template and print the AST (JSON)")
    add_source(sp_compile)
    sp_compile.add_argument(
        "--config",
        metavar="PATH",
        help=f"options file (default: ./{DEFAULT_CFG_FILE} if present)",
    )
    sp_compile.add_argument("--preserve-whitespace", action="store_true", help="keep whitespace-only text")
    sp_compile.add_argument("--keep-comments", action="store_true", help="do not strip {{! ... }} comments")
    sp_compile.add_argument("--strict", action="store_true", help="fail on unbalanced triple braces")
    sp_compile.add_argument("--indent", type=int, default=None, help="pretty-print JSON with this indent")

    sp_strip = sub.add_parser("strip", help="Print the template with comments removed")
    add_source(sp_strip)

    sp_tokens = sub.add_parser("tokens", help="List directives found in the text (JSON)")
    add_source(sp_tokens)
    sp_tokens.add_argument("--strict", action="store_true", help="fail on unbalanced triple braces")

    return p


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get("STACHE_DEBUG") else logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    root = logging.getLogger("stache")
    root.setLevel(level)
    if not root.handlers:
        root.addHandler(handler)


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise ValueError(f"Template file not found: {path}")
    return path.read_text(encoding="utf-8")


def _options(ns: argparse.Namespace) -> CompilerOptions:
    cfg_path = Path(ns.config) if ns.config else Path.cwd() / DEFAULT_CFG_FILE
    if ns.config and not cfg_path.is_file():
        raise ValueError(f"Config file not found: {cfg_path}")
    options = load_options(cfg_path)

    overrides = {}
    if ns.preserve_whitespace:
        overrides["preserve_whitespace"] = True
    if ns.keep_comments:
        overrides["strip_comments"] = False
    if ns.strict:
        overrides["strict_triples"] = True
    if overrides:
        options = replace(options, **overrides)
    return options


def _template_name(source: str) -> str:
    return "<stdin>" if source == "-" else source


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        if ns.cmd == "compile":
            compiler = TemplateCompiler(_options(ns))
            ast = compiler.compile(_read_source(ns.source), _template_name(ns.source))
            sys.stdout.write(to_json(to_data(ast), indent=ns.indent))
            return 0

        if ns.cmd == "strip":
            sys.stdout.write(strip_comments(_read_source(ns.source)))
            return 0

        if ns.cmd == "tokens":
            text = strip_comments(_read_source(ns.source))
            data = [directive_to_data(d) for d in iter_directives(text, strict=ns.strict)]
            sys.stdout.write(to_json(data))
            return 0

    except StacheUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
