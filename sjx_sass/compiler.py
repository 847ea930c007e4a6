"""
Адаптер внешнего SCSS-компилятора.

Компилятор — чёрный ящик за узким протоколом: (исходник, диалект, опции) → CSS.
Компиляция детерминирована, поэтому ошибка — свойство входа: никаких ретраев.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Protocol, Sequence, Tuple, runtime_checkable

import sass

from .config.model import CompileOptions, Dialect
from .errors import CompilationError

logger = logging.getLogger(__name__)

# libsass: "... on line 3:14 of stdin"
_POSITION_RE = re.compile(r"\bon line (\d+)(?::(\d+))?")


@runtime_checkable
class Compiler(Protocol):
    """
    Протокол компилятора.

    Реализация обязана либо вернуть полный CSS, либо поднять
    CompilationError; частичный вывод недопустим.
    """

    def compile(
        self,
        source: str,
        *,
        dialect: Dialect,
        include_paths: Sequence[str],
        options: CompileOptions,
    ) -> str:
        ...


def parse_error_position(message: str) -> Tuple[Optional[int], Optional[int]]:
    m = _POSITION_RE.search(message)
    if m is None:
        return None, None
    line = int(m.group(1))
    column = int(m.group(2)) if m.group(2) is not None else None
    return line, column


class LibsassCompiler:
    """Компилятор на базе libsass (модуль `sass`)."""

    def compile(
        self,
        source: str,
        *,
        dialect: Dialect,
        include_paths: Sequence[str],
        options: CompileOptions,
    ) -> str:
        kwargs = {
            "string": source,
            "indented": dialect is Dialect.INDENTED,
            "include_paths": list(include_paths),
            "output_style": options.output_style,
            "source_comments": options.source_comments,
        }
        if options.precision is not None:
            kwargs["precision"] = options.precision

        logger.debug(f"libsass {sass.libsass_version}: compiling {len(source)} chars")
        try:
            return sass.compile(**kwargs)
        except sass.CompileError as e:
            message = str(e).strip()
            line, column = parse_error_position(message)
            raise CompilationError(message, line=line, column=column) from e


__all__ = ["Compiler", "LibsassCompiler", "parse_error_position"]
