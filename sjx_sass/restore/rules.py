"""
Таблица правил смежности для плейсхолдеров в скомпилированном CSS.

Каждое правило — чистая функция (вхождение, синтаксис) → Rewrite | None.
Правила применяются в фиксированном порядке, первое сработавшее
побеждает; на одном вхождении правила не комбинируются.

Правило переписывает только текст ПОСЛЕ токена: участок
text[occ.end:rewrite.end] заменяется на rewrite.text. Символы
самого токена не меняются никогда.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from ..placeholders import PlaceholderSyntax

_WS = re.compile(r"[ \t\r\n\f]+")
# голый идентификатор из букв, за которым не продолжается имя/функция
_BARE_IDENT = re.compile(r"([A-Za-z]+)(?![\w(%-])")
# следующая структурная граница — конец объявления или закрывающая скобка, но не '{'
_VALUE_TAIL = re.compile(r"[^{};]*(?:[;}]|$)|[^{};()]*\)")
_SELECTOR_TAIL = re.compile(r"[^{};]*\{")
_ARG_END = re.compile(r"[ \t]*[),]")

CSS_UNITS = frozenset({
    # длины
    "px", "em", "rem", "ex", "ch", "ic", "cap", "lh", "rlh",
    "vw", "vh", "vi", "vb", "vmin", "vmax",
    "svw", "svh", "lvw", "lvh", "dvw", "dvh",
    "cqw", "cqh", "cqi", "cqb", "cqmin", "cqmax",
    "cm", "mm", "q", "in", "pt", "pc",
    # углы, время, частота, разрешение, гриды
    "deg", "grad", "rad", "turn",
    "s", "ms", "hz", "khz",
    "dpi", "dpcm", "dppx", "x",
    "fr",
})


@dataclass(frozen=True)
class Occurrence:
    """Одно вхождение токена в тексте."""
    text: str
    start: int
    end: int

    @property
    def token(self) -> str:
        return self.text[self.start:self.end]


@dataclass(frozen=True)
class Rewrite:
    end: int
    text: str


@dataclass(frozen=True)
class AdjacencyRule:
    name: str
    apply: Callable[[Occurrence, PlaceholderSyntax], Optional[Rewrite]]


def _keep(occ: Occurrence) -> Rewrite:
    return Rewrite(end=occ.end, text="")


def _statement_head(occ: Occurrence) -> str:
    """Текст от начала текущего оператора (после ';', '{' или '}') до токена."""
    text = occ.text
    cut = max(text.rfind(ch, 0, occ.start) for ch in ";{}")
    return text[cut + 1:occ.start].lstrip()


def _in_parens(head: str) -> bool:
    return head.count("(") > head.count(")")


def _skip_ws(occ: Occurrence) -> Tuple[int, str]:
    m = _WS.match(occ.text, occ.end)
    if m is None:
        return occ.end, ""
    return m.end(), m.group(0)


# --- rules -----------------------------------------------------------------

def unit_suffix(occ: Occurrence, syntax: PlaceholderSyntax) -> Optional[Rewrite]:
    """
    `TOKEN px;` → `TOKENpx;` (единица прижимается к токену).
    Симметрично: два независимых токена, слипшиеся без разделителя,
    получают ровно один пробел.
    """
    text = occ.text
    if syntax.starts_at(text, occ.end):
        return Rewrite(end=occ.end, text=" ")
    if text.startswith("%", occ.end) and syntax.starts_at(text, occ.end + 1):
        return Rewrite(end=occ.end + 1, text="% ")

    ws_end, ws = _skip_ws(occ)
    if not ws:
        return None
    unit = _BARE_IDENT.match(text, ws_end)
    if unit is None or unit.group(1).lower() not in CSS_UNITS:
        return None
    # в селекторе ("p TOKEN em {") пробел — комбинатор, его не трогаем
    if _VALUE_TAIL.match(text, unit.end()) is None:
        return None
    return Rewrite(end=ws_end, text="")


def percent_suffix(occ: Occurrence, syntax: PlaceholderSyntax) -> Optional[Rewrite]:
    """`TOKEN %` → `TOKEN%`; '%', начинающий следующий токен, не считается."""
    ws_end, ws = _skip_ws(occ)
    if not ws or not occ.text.startswith("%", ws_end) or syntax.starts_at(occ.text, ws_end):
        return None
    return Rewrite(end=ws_end, text="")


def function_argument(occ: Occurrence, syntax: PlaceholderSyntax) -> Optional[Rewrite]:
    """`repeat(TOKEN)` — разделители аргументов остаются как у компилятора."""
    if _ARG_END.match(occ.text, occ.end) is None or not _in_parens(_statement_head(occ)):
        return None
    return _keep(occ)


def at_rule_parameter(occ: Occurrence, syntax: PlaceholderSyntax) -> Optional[Rewrite]:
    """
    `@media TOKEN {` — правим только пробельный хвост токена перед '{'.
    Вложенность блоков — забота компилятора, блоки не переставляются.
    """
    if not _statement_head(occ).startswith("@"):
        return None
    ws_end, ws = _skip_ws(occ)
    if ws and ws != " " and occ.text.startswith("{", ws_end):
        return Rewrite(end=ws_end, text=" ")
    return _keep(occ)


def selector(occ: Occurrence, syntax: PlaceholderSyntax) -> Optional[Rewrite]:
    """`p TOKEN {` — результат конкатенации вложенных селекторов не трогаем."""
    if _SELECTOR_TAIL.match(occ.text, occ.end) is None:
        return None
    return _keep(occ)


def no_match(occ: Occurrence, syntax: PlaceholderSyntax) -> Optional[Rewrite]:
    return _keep(occ)


RULES: Tuple[AdjacencyRule, ...] = (
    AdjacencyRule("unit_suffix", unit_suffix),
    AdjacencyRule("percent_suffix", percent_suffix),
    AdjacencyRule("function_argument", function_argument),
    AdjacencyRule("at_rule_parameter", at_rule_parameter),
    AdjacencyRule("selector", selector),
    AdjacencyRule("no_match", no_match),
)


__all__ = [
    "AdjacencyRule",
    "CSS_UNITS",
    "Occurrence",
    "RULES",
    "Rewrite",
    "at_rule_parameter",
    "function_argument",
    "no_match",
    "percent_suffix",
    "selector",
    "unit_suffix",
]
