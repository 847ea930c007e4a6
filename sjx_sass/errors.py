"""
Ошибки, адресованные пользователю.

Все ожидаемые ошибки, которые нужно показывать как чистое сообщение
(без стектрейса), наследуются от SjxSassError.

Программные ошибки и баги НЕ должны наследоваться от SjxSassError —
они пробрасываются с полным трейсбеком.
"""

from __future__ import annotations

from typing import Optional


class SjxSassError(Exception):
    """
    Базовый класс для всех пользовательских ошибок styled-jsx-sass.

    Сигнализирует о проблеме, которую пользователь может исправить:
    неверные опции, некорректный исходник, отсутствующий импорт и т.п.
    """
    pass


class ConfigurationError(SjxSassError, ValueError):
    """
    Конфигурация внутренне противоречива: неизвестные ключи, неверные
    значения, непоследовательные отступы в indented-диалекте.
    """
    pass


class CompilationError(SjxSassError):
    """
    Компилятор отверг подготовленный исходник.

    Сообщение компилятора передаётся без изменений; позиция (line/column)
    заполняется, если её удалось извлечь.
    """

    def __init__(self, message: str, *, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    @property
    def position(self) -> Optional[str]:
        if self.line is None:
            return None
        if self.column is None:
            return f"line {self.line}"
        return f"line {self.line}, column {self.column}"


__all__ = ["SjxSassError", "ConfigurationError", "CompilationError"]
