from __future__ import annotations

import logging
from collections import Counter
from typing import List, Sequence

from ..placeholders import DEFAULT_SYNTAX, PlaceholderSyntax, unshield
from .rules import RULES, AdjacencyRule, Occurrence

logger = logging.getLogger(__name__)


def restore_placeholders(
    css: str,
    syntax: PlaceholderSyntax = DEFAULT_SYNTAX,
    *,
    rules: Sequence[AdjacencyRule] = RULES,
) -> str:
    """
    Возвращает CSS, в котором вокруг каждого токена восстановлена
    каноническая смежность.

    Сначала снимается экранирование, затем для каждого вхождения
    применяется первое подходящее правило. Все правила смотрят в исходный
    (необработанный) текст, так что вхождения не влияют друг на друга.
    Повторный прогон по собственному результату — no-op.
    """
    text = unshield(css, syntax)
    hits: Counter[str] = Counter()
    out: List[str] = []
    pos = 0
    for m in syntax.pattern.finditer(text):
        occ = Occurrence(text=text, start=m.start(), end=m.end())
        out.append(text[pos:occ.start])
        out.append(occ.token)
        pos = occ.end
        for rule in rules:
            rewrite = rule.apply(occ, syntax)
            if rewrite is None:
                continue
            hits[rule.name] += 1
            out.append(rewrite.text)
            pos = rewrite.end
            break
    out.append(text[pos:])

    if hits:
        logger.debug(f"Restored {sum(hits.values())} placeholder(s): {dict(hits)}")
    return "".join(out)


__all__ = ["restore_placeholders"]
