"""
Unified test infrastructure for styled-jsx-sass.

Modules:
- file_utils: Utilities for creating files and directories
- cli_utils: Running the CLI as a subprocess
- compiler_utils: Fake compilers that inject whitespace artifacts
- css_utils: Placeholder helpers and whitespace-insensitive CSS comparison
"""

from .file_utils import write
from .cli_utils import run_cli
from .compiler_utils import EchoCompiler, ScriptedCompiler, SpacingCompiler
from .css_utils import ph, squash

__all__ = [
    "write",
    "run_cli",
    "EchoCompiler",
    "ScriptedCompiler",
    "SpacingCompiler",
    "ph",
    "squash",
]
