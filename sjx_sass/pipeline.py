"""
Точка входа: исходник + опции → CSS с сохранёнными плейсхолдерами.

    stage_source → Compiler.compile → restore_placeholders → finalize_output

Состояния между вызовами нет: каждый вызов работает только со своими
строками и опциями, поэтому параллельные вызовы безопасны.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from .compiler import Compiler, LibsassCompiler
from .config.model import CompileOptions
from .finalize import finalize_output
from .restore import restore_placeholders
from .stager import stage_source

logger = logging.getLogger(__name__)


def _resolve_options(options: Union[CompileOptions, Mapping[str, Any], None]) -> CompileOptions:
    if isinstance(options, CompileOptions):
        return options
    return CompileOptions.from_dict(dict(options) if options is not None else None)


def compile_fragment(
    source: str,
    options: Union[CompileOptions, Mapping[str, Any], None] = None,
    *,
    compiler: Optional[Compiler] = None,
) -> str:
    """
    Компилирует фрагмент стилей, сохраняя токены-плейсхолдеры побайтно.

    Raises:
        ConfigurationError: противоречивые опции или отступы
        CompilationError: компилятор отверг исходник
    """
    opts = _resolve_options(options)
    staged = stage_source(source, opts)
    css = (compiler or LibsassCompiler()).compile(
        staged.text,
        dialect=staged.dialect,
        include_paths=staged.include_paths,
        options=opts,
    )
    logger.debug(f"Compiler returned {len(css)} chars")
    return finalize_output(restore_placeholders(css, opts.placeholder))


__all__ = ["compile_fragment"]
