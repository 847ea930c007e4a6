from __future__ import annotations


def finalize_output(css: str) -> str:
    """Снимает ведущие/хвостовые пробелы и переводы строк."""
    return css.strip()


__all__ = ["finalize_output"]
