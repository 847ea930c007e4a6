from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import get_args

from .config import CompileOptions, Dialect, load_options
from .config.model import OutputStyle
from .errors import CompilationError, SjxSassError
from .pipeline import compile_fragment
from .version import tool_version

_LOG = logging.getLogger("sjx_sass")


def _setup_logging() -> None:
    level = logging.DEBUG if os.environ.get("SJX_SASS_DEBUG") else logging.WARNING
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sjx-sass",
        description="Compile a SCSS/Sass fragment to CSS, preserving styled-jsx placeholders",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "source",
        nargs="?",
        default="-",
        help="файл с исходником или - для чтения из stdin (по умолчанию)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="YAML-файл с опциями компиляции; флаги командной строки имеют приоритет",
    )
    p.add_argument(
        "--indented",
        action="store_true",
        default=None,
        help="исходник в indented-синтаксисе (Sass)",
    )
    p.add_argument(
        "--preamble",
        metavar="TEXT|@FILE",
        help="текст, добавляемый перед исходником: прямая строка или @file",
    )
    p.add_argument(
        "-I", "--include-path",
        action="append",
        dest="include_paths",
        metavar="DIR",
        help="каталог для резолвинга импортов (можно указать несколько)",
    )
    p.add_argument(
        "--context-file",
        metavar="PATH",
        help="файл, относительно которого резолвятся относительные импорты",
    )
    p.add_argument("--output-style", choices=list(get_args(OutputStyle)))
    p.add_argument("--precision", type=int, metavar="N")
    p.add_argument("--source-comments", action="store_true", default=None)
    return p


def _read_arg_text(arg: str, *, what: str) -> str:
    """
    Прямая строка или @path/to/file.
    """
    if not arg.startswith("@"):
        return arg
    file_path = Path(arg[1:])
    if not file_path.is_file():
        raise ValueError(f"{what} file not found: {file_path}")
    return file_path.read_text(encoding="utf-8")


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise ValueError(f"Source file not found: {path}")
    return path.read_text(encoding="utf-8")


def _opts(ns: argparse.Namespace) -> CompileOptions:
    opts = load_options(Path(ns.config)) if ns.config else CompileOptions()

    overrides = {}
    if ns.indented:
        overrides["dialect"] = Dialect.INDENTED
    if ns.preamble is not None:
        overrides["preamble"] = _read_arg_text(ns.preamble, what="Preamble")
    if ns.include_paths:
        overrides["include_paths"] = [*opts.include_paths, *ns.include_paths]
    if ns.context_file:
        overrides["context_file"] = ns.context_file
    elif ns.source != "-" and opts.context_file is None:
        # исходник из файла сам служит контекстом для относительных импортов
        overrides["context_file"] = str(Path(ns.source).resolve())
    if ns.output_style:
        overrides["output_style"] = ns.output_style
    if ns.precision is not None:
        overrides["precision"] = ns.precision
    if ns.source_comments:
        overrides["source_comments"] = True

    return dataclasses.replace(opts, **overrides)


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging()

    try:
        opts = _opts(ns)
        css = compile_fragment(_read_source(ns.source), opts)
    except CompilationError as e:
        where = f" ({e.position})" if e.position else ""
        sys.stderr.write(f"Compilation failed{where}:\n{e.message.rstrip()}\n")
        return 2
    except SjxSassError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    sys.stdout.write(css + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
