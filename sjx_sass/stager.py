"""
Подготовка исходника к компиляции.

  • indented-диалект: снимается общий отступ, заданный первой непустой строкой;
  • preamble (например, объявления переменных) добавляется в начало;
  • простые `@use` переписываются в `@import` (libsass не загружает модули);
  • токены-плейсхолдеры экранируются безопасными для компилятора формами;
  • каталог context_file добавляется в include_paths для относительных импортов.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from .config.model import CompileOptions, Dialect
from .errors import CompilationError, ConfigurationError
from .placeholders import reserved_identifier, shield

logger = logging.getLogger(__name__)

_LEADING_WS = re.compile(r"^[ \t]*")
# @use "url"; и @use "url" as *; — оба дают глобальные имена, как @import
_PLAIN_USE = re.compile(
    r"^(?P<indent>[ \t]*)@use[ \t]+(?P<url>\"[^\"\n]*\"|'[^'\n]*')(?:[ \t]+as[ \t]+\*)?[ \t]*(?=;|$)",
    re.MULTILINE,
)
_ANY_USE = re.compile(r"^[ \t]*@use\b.*$", re.MULTILINE)


@dataclass(frozen=True)
class StagedSource:
    text: str
    dialect: Dialect
    include_paths: Tuple[str, ...] = ()


def strip_indent(text: str) -> str:
    """
    Снимает общий отступ, взятый с первой непустой строки.

    Строка с отступом, не начинающимся с этого префикса, — ошибка
    конфигурации: в indented-диалекте отступы значимы, молча чинить их нельзя.
    """
    lines = text.splitlines()
    prefix = None
    out: List[str] = []
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            out.append("")
            continue
        if prefix is None:
            prefix = _LEADING_WS.match(line).group(0)
        if not line.startswith(prefix):
            raise ConfigurationError(
                f"Inconsistent indentation at line {lineno}: "
                f"expected at least {len(prefix)} leading whitespace character(s) "
                f"matching the first non-blank line"
            )
        out.append(line[len(prefix):])
    return "\n".join(out)


def rewrite_use_rules(text: str) -> str:
    """
    `@use "x";` → `@import "x";`.

    libsass не знает модульной системы и молча пропускает `@use` в CSS
    как есть. Формы с пространством имён, `with (...)` и встроенные
    модули `sass:*` так не выразить — на них CompilationError.
    """
    def _sub(m: re.Match[str]) -> str:
        if m.group("url")[1:].startswith("sass:"):
            return m.group(0)
        return f"{m.group('indent')}@import {m.group('url')}"

    text = _PLAIN_USE.sub(_sub, text)
    leftover = _ANY_USE.search(text)
    if leftover is not None:
        lineno = text.count("\n", 0, leftover.start()) + 1
        raise CompilationError(
            f"Unsupported @use rule: {leftover.group(0).strip()!r}; only "
            f"'@use \"url\";' and '@use \"url\" as *;' can be compiled with libsass",
            line=lineno,
        )
    return text


def _include_paths(opts: CompileOptions) -> Tuple[str, ...]:
    paths: List[str] = []
    if opts.context_file:
        paths.append(str(Path(opts.context_file).parent))
    paths.extend(opts.include_paths)
    # порядок важен для резолвинга, дубли — нет
    return tuple(dict.fromkeys(paths))


def stage_source(source: str, opts: CompileOptions) -> StagedSource:
    text = source
    if opts.dialect is Dialect.INDENTED:
        text = strip_indent(text)
    if opts.preamble:
        text = opts.preamble + "\n" + text

    # такие имена после компиляции неотличимы от экранированных токенов
    reserved = reserved_identifier(text)
    if reserved is not None:
        raise ConfigurationError(
            f"Source contains the reserved identifier {reserved!r}; "
            f"names of the form __sjx_<kind>_<N>__ stand in for placeholders during compilation"
        )

    text = rewrite_use_rules(text)
    text = shield(text, opts.placeholder, indented=opts.indented)

    staged = StagedSource(text=text, dialect=opts.dialect, include_paths=_include_paths(opts))
    logger.debug(
        f"Staged {len(staged.text)} chars, dialect={staged.dialect.value}, "
        f"include_paths={list(staged.include_paths)}"
    )
    return staged


__all__ = ["StagedSource", "rewrite_use_rules", "stage_source", "strip_indent"]
