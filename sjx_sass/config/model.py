from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Literal, Optional, get_args

from ..errors import ConfigurationError
from ..placeholders import DEFAULT_SYNTAX, PlaceholderSyntax


# --- helpers ---------------------------------------------------------------
def _assert_only_keys(d: Dict[str, Any] | None, allowed: Iterable[str], *, ctx: str) -> None:
    if d is None:
        return
    allowed_set = set(allowed)
    extra = set(d.keys()) - allowed_set
    if extra:
        raise ConfigurationError(f"{ctx}: unknown key(s): {', '.join(sorted(map(str, extra)))}")


class Dialect(enum.Enum):
    """Поверхностный синтаксис исходника."""
    BLOCK = "block"          # фигурные скобки и точки с запятой (SCSS)
    INDENTED = "indented"    # отступы (Sass)

    @classmethod
    def parse(cls, value: Any) -> Dialect:
        if isinstance(value, Dialect):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"CompileOptions.dialect must be one of 'block'|'indented', got: {value!r}"
            ) from None


OutputStyle = Literal["expanded", "nested", "compact", "compressed"]

_KEYS = [
    "dialect", "preamble", "include_paths", "context_file",
    "output_style", "precision", "source_comments",
    "placeholder_open", "placeholder_close",
]


@dataclass
class CompileOptions:
    """
    Опции одной единицы компиляции.

    dialect/preamble/context_file разбирает стейджер; output_style,
    precision и source_comments передаются компилятору как есть.
    """
    dialect: Dialect = Dialect.BLOCK
    # текст, который добавляется перед исходником (например, объявления переменных)
    preamble: str = ""
    include_paths: List[str] = field(default_factory=list)
    # файл, относительно которого резолвятся относительные импорты
    context_file: Optional[str] = None
    output_style: OutputStyle = "expanded"
    precision: Optional[int] = None          # None → значение компилятора по умолчанию
    source_comments: bool = False
    placeholder: PlaceholderSyntax = DEFAULT_SYNTAX

    @property
    def indented(self) -> bool:
        return self.dialect is Dialect.INDENTED

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> CompileOptions:
        if not d:
            # Опции не заданы → дефолтный конфиг
            return CompileOptions()
        if not isinstance(d, dict):
            raise ConfigurationError("CompileOptions must be a mapping")
        _assert_only_keys(d, _KEYS, ctx="CompileOptions")

        dialect = Dialect.parse(d.get("dialect", Dialect.BLOCK))

        preamble = d.get("preamble", "")
        if preamble is None:
            preamble = ""
        if not isinstance(preamble, str):
            raise ConfigurationError("CompileOptions.preamble must be a string")

        include_raw = d.get("include_paths", []) or []
        if isinstance(include_raw, (str, Path)) or not isinstance(include_raw, (list, tuple)):
            raise ConfigurationError("CompileOptions.include_paths must be a list of directories")
        if not all(isinstance(x, (str, Path)) for x in include_raw):
            raise ConfigurationError("CompileOptions.include_paths must contain only paths")
        include_paths = [str(x) for x in include_raw]

        context_file = d.get("context_file")
        if context_file is not None and not isinstance(context_file, (str, Path)):
            raise ConfigurationError("CompileOptions.context_file must be a path or null")

        output_style = d.get("output_style", "expanded")
        if output_style not in get_args(OutputStyle):
            raise ConfigurationError(
                "CompileOptions.output_style must be one of "
                f"{'|'.join(repr(s) for s in get_args(OutputStyle))}, got: {output_style!r}"
            )

        precision = d.get("precision")
        if precision is not None:
            if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
                raise ConfigurationError("CompileOptions.precision must be a non-negative integer")

        source_comments = d.get("source_comments", False)
        if not isinstance(source_comments, bool):
            raise ConfigurationError("CompileOptions.source_comments must be a boolean")

        placeholder = DEFAULT_SYNTAX
        if "placeholder_open" in d or "placeholder_close" in d:
            try:
                placeholder = PlaceholderSyntax(
                    open=d.get("placeholder_open", DEFAULT_SYNTAX.open),
                    close=d.get("placeholder_close", DEFAULT_SYNTAX.close),
                )
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"CompileOptions.placeholder: {e}") from e

        return CompileOptions(
            dialect=dialect,
            preamble=preamble,
            include_paths=include_paths,
            context_file=None if context_file is None else str(context_file),
            output_style=output_style,
            precision=precision,
            source_comments=source_comments,
            placeholder=placeholder,
        )


__all__ = ["CompileOptions", "Dialect", "OutputStyle"]
