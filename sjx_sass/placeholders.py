"""
Модель плейсхолдер-токенов.

Токен — непрозрачная подстрока вида <open><index><close>, которую
встраивающая система стилей подменит значением позже. Здесь токены
только находятся и экранируются на время компиляции; их собственные
символы никогда не меняются.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional

# Формы, которыми токены подменяются на время компиляции.
# ph/pct — обычные CSS-идентификаторы, компилятор переносит их как есть.
# stmt — токен на месте целого объявления или правила: идентификатор там
# невалиден, поэтому он прячется в "громкий" комментарий, который компилятор
# сохраняет даже в compressed-выводе.
_SHIELD_PH = "__sjx_ph_{index}__"
_SHIELD_PCT = "__sjx_pct_{index}__"
_SHIELD_STMT = "/*!__sjx_stmt_{index}__*/"
_SHIELDED_RE = re.compile(r"/\*!__sjx_stmt_(\d+)__\*/|__sjx_(ph|pct)_(\d+)__")
_RESERVED_RE = re.compile(r"__sjx_(?:ph|pct|stmt)_\d+__")

# продолжение после токена, при котором он — часть селектора или имя свойства
_RULE_TAIL = re.compile(r"[^{};]*\{")
_PROPERTY_TAIL = re.compile(r"\s*:")


@dataclass(frozen=True)
class PlaceholderSyntax:
    """
    Форма токена: открывающий маркер, десятичный индекс, закрывающий маркер.
    """
    open: str = "%%styled-jsx-placeholder-"
    close: str = "%%"
    pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.open or not self.close:
            raise ValueError("Placeholder markers must be non-empty strings")
        if any(ch.isdigit() for ch in self.open[-1:] + self.close[:1]):
            raise ValueError("Placeholder markers must not touch the index with digits")
        # frozen dataclass: кэшируем скомпилированный паттерн в обход __setattr__
        object.__setattr__(
            self,
            "pattern",
            re.compile(re.escape(self.open) + r"(\d+)" + re.escape(self.close)),
        )

    def render(self, index: int) -> str:
        if index < 0:
            raise ValueError(f"Placeholder index must be non-negative, got {index}")
        return f"{self.open}{index}{self.close}"

    def starts_at(self, text: str, pos: int) -> bool:
        """True, если в позиции pos начинается открывающий маркер."""
        return text.startswith(self.open, pos)


DEFAULT_SYNTAX = PlaceholderSyntax()


def is_placeholder(candidate: str, syntax: PlaceholderSyntax = DEFAULT_SYNTAX) -> bool:
    """Строгое совпадение всей строки с формой токена."""
    return syntax.pattern.fullmatch(candidate) is not None


def placeholder_index(candidate: str, syntax: PlaceholderSyntax = DEFAULT_SYNTAX) -> int:
    """
    Индекс токена — только для диагностики: при восстановлении
    все вхождения обрабатываются одинаково.
    """
    m = syntax.pattern.fullmatch(candidate)
    if m is None:
        raise ValueError(f"Not a placeholder token: {candidate!r}")
    return int(m.group(1))


def find_placeholders(text: str, syntax: PlaceholderSyntax = DEFAULT_SYNTAX) -> List[re.Match[str]]:
    return list(syntax.pattern.finditer(text))


def count_placeholders(text: str, syntax: PlaceholderSyntax = DEFAULT_SYNTAX) -> Counter[int]:
    """Количество вхождений по индексу."""
    return Counter(int(m.group(1)) for m in syntax.pattern.finditer(text))


def reserved_identifier(text: str) -> Optional[str]:
    """Первое имя из пространства экранированных форм, встреченное в тексте."""
    m = _RESERVED_RE.search(text)
    return m.group(0) if m else None


def _percent_follows(text: str, end: int, syntax: PlaceholderSyntax) -> bool:
    # '%' сразу после токена, и это не начало следующего токена
    return text.startswith("%", end) and not syntax.starts_at(text, end)


def _stands_alone_block(text: str, start: int, end: int) -> bool:
    head_start = max(text.rfind(ch, 0, start) for ch in ";{}") + 1
    if text[head_start:start].strip():
        return False
    return _RULE_TAIL.match(text, end) is None and _PROPERTY_TAIL.match(text, end) is None


def _stands_alone_indented(text: str, start: int, end: int) -> bool:
    line_start = text.rfind("\n", 0, start) + 1
    line_end = text.find("\n", end)
    if line_end < 0:
        line_end = len(text)
    if text[line_start:start].strip() or text[end:line_end].strip():
        return False
    # строка с одним токеном — селектор, если за ней идёт вложенный блок
    indent = start - line_start
    for line in text[line_end + 1:].splitlines():
        if line.strip():
            return len(line) - len(line.lstrip()) <= indent
    return True


def shield(text: str, syntax: PlaceholderSyntax = DEFAULT_SYNTAX, *, indented: bool = False) -> str:
    """
    Подменяет токены формами, безопасными для компилятора.

    Токен с непосредственно следующим '%' экранируется вместе с ним:
    голый '%' компилятор прочитал бы как оператор или placeholder-селектор.
    Токен, стоящий на месте целого объявления или правила (не значение,
    не селектор и не имя свойства), уходит в комментарий.
    """
    stands_alone = _stands_alone_indented if indented else _stands_alone_block
    out: List[str] = []
    pos = 0
    for m in syntax.pattern.finditer(text):
        index = int(m.group(1))
        out.append(text[pos:m.start()])
        pos = m.end()
        if _percent_follows(text, m.end(), syntax):
            out.append(_SHIELD_PCT.format(index=index))
            pos += 1
        elif stands_alone(text, m.start(), m.end()):
            out.append(_SHIELD_STMT.format(index=index))
        else:
            out.append(_SHIELD_PH.format(index=index))
    out.append(text[pos:])
    return "".join(out)


def unshield(text: str, syntax: PlaceholderSyntax = DEFAULT_SYNTAX) -> str:
    """Обратная к shield() подмена; на тексте без экранированных форм — no-op."""
    def _sub(m: re.Match[str]) -> str:
        if m.group(1) is not None:
            return syntax.render(int(m.group(1)))
        token = syntax.render(int(m.group(3)))
        return token + "%" if m.group(2) == "pct" else token

    return _SHIELDED_RE.sub(_sub, text)


__all__ = [
    "PlaceholderSyntax",
    "DEFAULT_SYNTAX",
    "is_placeholder",
    "placeholder_index",
    "find_placeholders",
    "count_placeholders",
    "reserved_identifier",
    "shield",
    "unshield",
]
