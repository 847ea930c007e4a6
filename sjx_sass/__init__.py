"""
styled-jsx-sass: компиляция SCSS/Sass-фрагментов в CSS с побайтным
сохранением интерполяционных плейсхолдеров styled-jsx.
"""

from .config import CompileOptions, Dialect, load_options
from .errors import CompilationError, ConfigurationError, SjxSassError
from .pipeline import compile_fragment
from .placeholders import DEFAULT_SYNTAX, PlaceholderSyntax

__all__ = [
    "compile_fragment",
    "CompileOptions",
    "Dialect",
    "load_options",
    "PlaceholderSyntax",
    "DEFAULT_SYNTAX",
    "SjxSassError",
    "ConfigurationError",
    "CompilationError",
]
